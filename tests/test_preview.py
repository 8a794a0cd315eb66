# Nombre de archivo: test_preview.py
# Ubicación de archivo: tests/test_preview.py
# Descripción: Pruebas de serialización de tickets y payload JSON del dashboard

from __future__ import annotations

import json
from datetime import date, datetime

from care_core.services.dashboard import compute_from_rows
from care_core.tickets.preview import build_payload, tickets_from_records, tickets_to_records, to_jsonable
from care_core.tickets.schemas import SlaStatus, YearCount


def test_round_trip_de_tickets(sample_tickets):
    records = tickets_to_records(sample_tickets)

    assert records[0]["created_at"] == "2026-01-19T12:47:00"
    assert records[0]["sla_status"] == "Breached"
    assert records[0]["sla_response_hhmm"] == "-0:30"
    # los registros viajan como JSON
    hidratados = tickets_from_records(json.loads(json.dumps(records)))
    assert hidratados == sample_tickets


def test_hidratacion_omite_fechas_invalidas_y_reordena(sample_tickets):
    records = tickets_to_records(reversed(sample_tickets))
    records.append({"key": "X", "created_at": "no-es-fecha", "sla_status": "Compliant"})

    hidratados = tickets_from_records(records)
    assert [t.key for t in hidratados] == ["CARE-1", "CARE-3"]


def test_hidratacion_recalcula_estado_sla_desconocido():
    (ticket,) = tickets_from_records(
        [{"key": "K", "created_at": "2026-03-01T08:00:00", "sla_response_hours": -1, "sla_status": "???"}]
    )
    assert ticket.sla_status is SlaStatus.BREACHED
    assert ticket.month == "2026-03"
    assert ticket.satisfaction is None


def test_to_jsonable_convierte_fechas_y_enums():
    anio = YearCount(year=2026, tickets=2, partial=True, partial_through=date(2026, 2, 15))
    assert to_jsonable(anio) == {"year": 2026, "tickets": 2, "partial": True, "partial_through": "2026-02-15"}
    assert to_jsonable({SlaStatus.BREACHED: datetime(2026, 1, 1, 9)}) == {"Breached": "2026-01-01T09:00:00"}


def test_build_payload_es_serializable(sample_rows):
    report = compute_from_rows(sample_rows)
    payload = build_payload(report, include_tickets=True)

    texto = json.dumps(payload, ensure_ascii=False)
    assert "2026-01" in texto
    assert payload["archivo"]["filas"] == 3
    assert payload["archivo"]["filas_excluidas"] == 1
    assert payload["vista"]["tickets"] == 2
    assert payload["kpis"]["resp_ok_pct"] == 50.0
    assert payload["series"]["tickets_by_month"] == [
        {"month": "2026-01", "tickets": 1},
        {"month": "2026-02", "tickets": 1},
    ]
    assert payload["comparativa"]["prev1"] is None
    assert payload["roles"] == {"Ana": "Agente"}
    assert len(payload["tickets"]) == 2
