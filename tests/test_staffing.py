# Nombre de archivo: test_staffing.py
# Ubicación de archivo: tests/test_staffing.py
# Descripción: Pruebas de dotación por roles y cobertura de turnos

from __future__ import annotations

from datetime import datetime

import pytest

from care_core.tickets.schemas import AssigneeRole, SlaStatus, Ticket
from care_core.tickets.settings import CoverageShift, RoleInclusion
from care_core.tickets.staffing import (
    assignee_universe,
    coverage_kinds,
    coverage_matrix,
    is_covered,
    merge_role_map,
    month_headcount,
    pick_shift,
    pick_shift_for_day,
    pick_shift_for_hour,
    role_for,
    shift_covers,
    shift_covers_hour,
    tickets_per_person,
    time_to_minutes,
)


def _ticket(created: datetime, assignee: str) -> Ticket:
    return Ticket(
        key="",
        organization="Acme",
        status="Open",
        assignee=assignee,
        created_at=created,
        year=created.year,
        month=f"{created.year:04d}-{created.month:02d}",
        sla_response_hours=None,
        sla_status=SlaStatus.COMPLIANT,
        satisfaction=None,
    )


def _shift(start: str, end: str, days=(0, 1, 2, 3, 4), **extra) -> CoverageShift:
    return CoverageShift(id=extra.pop("id", f"{start}-{end}"), start=start, end=end, days=list(days), **extra)


def test_role_for_por_defecto_es_agente():
    roles = {"Bea": AssigneeRole.GUARDIA, "Carla": "Ignorar"}
    assert role_for("Bea", roles) is AssigneeRole.GUARDIA
    assert role_for("Carla", roles) is AssigneeRole.IGNORAR
    assert role_for("Desconocido", roles) is AssigneeRole.AGENTE


def test_month_headcount_respeta_roles_e_inclusion():
    tickets = [
        _ticket(datetime(2026, 1, 5, 10), "Ana"),
        _ticket(datetime(2026, 1, 6, 10), "Ana"),
        _ticket(datetime(2026, 1, 7, 10), "Bea"),
        _ticket(datetime(2026, 1, 8, 10), "Mario"),
        _ticket(datetime(2026, 1, 9, 10), ""),
        _ticket(datetime(2026, 2, 1, 10), "Zoe"),
    ]
    roles = {"Bea": AssigneeRole.GUARDIA, "Mario": AssigneeRole.MANAGER_CARE}

    assert month_headcount("2026-01", tickets, roles, RoleInclusion()) == 3
    sin_guardia = RoleInclusion(guardia=False, agente=True, manager_care=False)
    assert month_headcount("2026-01", tickets, roles, sin_guardia) == 1
    assert month_headcount("2025-12", tickets, roles, RoleInclusion()) == 0


def test_asignado_ignorado_no_cambia_la_dotacion():
    base = [_ticket(datetime(2026, 1, 5, 10), "Ana"), _ticket(datetime(2026, 1, 6, 10), "Bea")]
    roles = {"Bot": AssigneeRole.IGNORAR}
    antes = month_headcount("2026-01", base, roles, RoleInclusion())
    con_bot = base + [_ticket(datetime(2026, 1, 7, 10), "Bot")] * 5
    assert month_headcount("2026-01", con_bot, roles, RoleInclusion()) == antes == 2


def test_tickets_per_person_suma_mes_sin_dotacion_al_numerador():
    tickets = [
        _ticket(datetime(2026, 1, 5, 10), "Ana"),
        _ticket(datetime(2026, 1, 6, 10), "Bea"),
        _ticket(datetime(2026, 2, 6, 10), "Bot"),
        _ticket(datetime(2026, 2, 7, 10), "Bot"),
    ]
    roles = {"Bot": AssigneeRole.IGNORAR}
    # 4 tickets / (2 + 0) personas
    assert tickets_per_person(tickets, ["2026-01", "2026-02"], roles, RoleInclusion()) == pytest.approx(2.0)
    assert tickets_per_person(tickets, ["2026-02"], roles, RoleInclusion()) is None


def test_universo_y_merge_de_roles():
    tickets = [_ticket(datetime(2026, 1, 5, 10), n) for n in ("Zoe", "Ana", " ", "Ana")]
    assert assignee_universe(tickets) == ["Ana", "Zoe"]
    merged = merge_role_map({"Ana": "Guardia"}, ["Ana", "Zoe"])
    assert merged == {"Ana": AssigneeRole.GUARDIA, "Zoe": AssigneeRole.AGENTE}


def test_time_to_minutes():
    assert time_to_minutes("09:30") == 570
    assert time_to_minutes("18:00:00") == 1080
    assert time_to_minutes("9") is None
    assert time_to_minutes("") is None
    assert time_to_minutes("aa:bb") is None


def test_shift_covers_hour_intervalo_semiabierto():
    turno = _shift("09:00", "18:00")
    assert not shift_covers_hour(turno, 8)
    assert shift_covers_hour(turno, 9)
    assert shift_covers_hour(turno, 17)
    assert not shift_covers_hour(turno, 18)


def test_shift_que_cruza_medianoche():
    nocturno = _shift("22:00", "06:00", days=range(7))
    assert shift_covers_hour(nocturno, 22)
    assert shift_covers_hour(nocturno, 23)
    assert shift_covers_hour(nocturno, 0)
    assert shift_covers_hour(nocturno, 5)
    assert not shift_covers_hour(nocturno, 6)
    assert not shift_covers_hour(nocturno, 12)


def test_shift_de_duracion_cero_no_cubre():
    vacio = _shift("10:00", "10:00", days=range(7))
    assert not any(shift_covers_hour(vacio, h) for h in range(24))


def test_shift_covers_requiere_dia():
    turno = _shift("09:00", "18:00")
    assert shift_covers(turno, 0, 10)
    assert not shift_covers(turno, 6, 10)


def test_pick_shift_primer_turno_habilitado_gana():
    manana = _shift("08:00", "16:00", id="manana")
    tarde = _shift("12:00", "20:00", id="tarde")
    apagado = _shift("00:00", "23:59", days=range(7), id="off", enabled=False)
    guardia = _shift("20:00", "08:00", days=range(7), id="guardia", kind="guard")
    turnos = [apagado, manana, tarde, guardia]

    assert pick_shift(turnos, 0, 13).id == "manana"
    assert pick_shift(turnos, 0, 17).id == "tarde"
    assert pick_shift(turnos, 6, 13) is None
    assert pick_shift(turnos, 6, 2).id == "guardia"
    assert pick_shift_for_hour(turnos, 13).id == "manana"
    assert pick_shift_for_day(turnos, 5).id == "guardia"
    assert is_covered(turnos, 2, 21)
    assert not is_covered(turnos, 6, 13)


def test_coverage_matrix_y_tipos():
    turnos = [_shift("09:00", "18:00", id="normal"), _shift("18:00", "09:00", days=range(7), id="g", kind="guardia")]
    matrix = coverage_matrix(turnos)
    assert len(matrix) == 7 and all(len(fila) == 24 for fila in matrix)
    assert matrix[0][10] == "normal"
    assert matrix[0][20] == "g"
    assert matrix[6][10] is None
    assert coverage_kinds(turnos) == {"has_normal": True, "has_guard": True, "split": True}
    assert coverage_kinds([]) == {"has_normal": False, "has_guard": False, "split": False}
