# Nombre de archivo: preview.py
# Ubicación de archivo: care_core/tickets/preview.py
# Descripción: Construcción de payloads JSON y serialización ida y vuelta de tickets
"""Construcción de payloads JSON para los colaboradores de render y export."""

from __future__ import annotations

import logging
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable, List, Mapping, Optional

from care_core.utils.timefmt import hours_to_hhmm, month_key

from .parser import sla_status
from .schemas import SlaStatus, Ticket

if TYPE_CHECKING:  # pragma: no cover
    from care_core.services.dashboard import DashboardReport

logger = logging.getLogger(__name__)


def to_jsonable(value: Any) -> Any:
    """Convierte dataclasses, enums y fechas a tipos JSON (fechas en ISO-8601)."""

    if is_dataclass(value) and not isinstance(value, type):
        value = asdict(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {str(to_jsonable(k)): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [to_jsonable(v) for v in value]
    return value


def ticket_to_record(ticket: Ticket) -> dict:
    return {
        "key": ticket.key,
        "organization": ticket.organization,
        "status": ticket.status,
        "assignee": ticket.assignee,
        "created_at": ticket.created_at.isoformat(),
        "year": ticket.year,
        "month": ticket.month,
        "sla_response_hours": ticket.sla_response_hours,
        "sla_response_hhmm": hours_to_hhmm(ticket.sla_response_hours),
        "sla_status": ticket.sla_status.value,
        "satisfaction": ticket.satisfaction,
    }


def tickets_to_records(tickets: Iterable[Ticket]) -> List[dict]:
    return [ticket_to_record(t) for t in tickets]


def _optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def ticket_from_record(record: Mapping[str, Any]) -> Optional[Ticket]:
    """Reconstruye un ticket serializado; ``None`` si la fecha no es válida."""

    try:
        created = datetime.fromisoformat(str(record.get("created_at", "")))
    except ValueError:
        return None

    horas = _optional_float(record.get("sla_response_hours"))
    try:
        estado_sla = SlaStatus(record.get("sla_status"))
    except ValueError:
        estado_sla = sla_status(horas)

    return Ticket(
        key=str(record.get("key") or ""),
        organization=str(record.get("organization") or ""),
        status=str(record.get("status") or ""),
        assignee=str(record.get("assignee") or ""),
        created_at=created,
        year=created.year,
        month=month_key(created),
        sla_response_hours=horas,
        sla_status=estado_sla,
        satisfaction=_optional_float(record.get("satisfaction")),
    )


def tickets_from_records(records: Iterable[Mapping[str, Any]]) -> List[Ticket]:
    """Hidrata tickets serializados, omitiendo los de fecha inválida."""

    tickets: List[Ticket] = []
    omitidos = 0
    for record in records:
        ticket = ticket_from_record(record)
        if ticket is None:
            omitidos += 1
            continue
        tickets.append(ticket)
    tickets.sort(key=lambda t: t.created_at)
    if omitidos:
        logger.warning("action=tickets_from_records omitidos=%s", omitidos)
    return tickets


def build_payload(report: "DashboardReport", *, include_tickets: bool = False) -> dict:
    """Arma la respuesta JSON del dashboard para la capa de presentación."""

    payload = {
        "archivo": {
            "filas": report.total_rows,
            "tickets": len(report.tickets),
            "filas_descartadas": report.dropped_rows,
            "filas_excluidas": report.excluded_rows,
            "aviso": report.warning,
            "rango": to_jsonable(report.auto_range),
        },
        "vista": {
            "filtros": to_jsonable(report.filters),
            "desde": report.view_range.min_month,
            "hasta": report.view_range.max_month,
            "tickets": len(report.filtered),
        },
        "opciones": to_jsonable(report.options),
        "kpis": to_jsonable(report.kpis),
        "series": to_jsonable(report.series),
        "comparativa": to_jsonable(report.comparison),
        "cobertura": to_jsonable(report.coverage),
        "roles": to_jsonable(report.roles),
    }
    if include_tickets:
        payload["tickets"] = tickets_to_records(report.filtered)
    return payload
