# Nombre de archivo: normalizer.py
# Ubicación de archivo: care_core/tickets/normalizer.py
# Descripción: Normalización de filas crudas del CSV a tickets canónicos
"""Normalización de filas del export a registros ``Ticket``."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, List

from care_core.utils.timefmt import month_key

from .config import (
    ASSIGNEE_HEADERS,
    CREATED_HEADERS,
    EXCLUDED_STATUS_RE,
    KEY_HEADERS,
    ORGANIZATION_HEADERS,
    SATISFACTION_HEADERS,
    SLA_RESPONSE_HEADERS,
    STATUS_HEADERS,
)
from .fields import normalize_headers, resolve_field, resolve_text
from .parser import parse_created, parse_satisfaction, parse_sla_hours, sla_status
from .schemas import NormalizationResult, Ticket

logger = logging.getLogger(__name__)


class RowOutcome:
    """Motivos por los que una fila no produce ticket."""

    DROPPED = "dropped"
    EXCLUDED = "excluded"


def is_excluded_status(status: str) -> bool:
    return bool(EXCLUDED_STATUS_RE.search(status or ""))


def normalize_row(row: Mapping[str, Any]) -> Ticket | str:
    """Convierte una fila a ``Ticket`` o devuelve el motivo de descarte.

    La fecha de creación se valida antes que el estado: una fila con fecha
    ilegible cuenta como descartada aunque su estado sea Block/Hold.
    """

    if not isinstance(row, Mapping):
        raise TypeError(f"Se esperaba un mapeo por fila, se recibió {type(row).__name__}")

    data = normalize_headers(row)
    created = parse_created(resolve_text(data, CREATED_HEADERS))
    if created is None:
        return RowOutcome.DROPPED

    status = resolve_text(data, STATUS_HEADERS)
    if is_excluded_status(status):
        return RowOutcome.EXCLUDED

    sla_hours = parse_sla_hours(resolve_field(data, SLA_RESPONSE_HEADERS))

    return Ticket(
        key=resolve_text(data, KEY_HEADERS),
        organization=resolve_text(data, ORGANIZATION_HEADERS),
        status=status,
        assignee=resolve_text(data, ASSIGNEE_HEADERS),
        created_at=created,
        year=created.year,
        month=month_key(created),
        sla_response_hours=sla_hours,
        sla_status=sla_status(sla_hours),
        satisfaction=parse_satisfaction(resolve_field(data, SATISFACTION_HEADERS)),
    )


def normalize_rows(rows: Iterable[Mapping[str, Any]]) -> NormalizationResult:
    """Normaliza todas las filas y ordena los tickets por fecha de creación."""

    if isinstance(rows, (str, bytes)) or not isinstance(rows, Iterable):
        raise TypeError("Las filas deben ser un iterable de mapeos")

    tickets: List[Ticket] = []
    total = dropped = excluded = 0
    for row in rows:
        total += 1
        outcome = normalize_row(row)
        if isinstance(outcome, Ticket):
            tickets.append(outcome)
        elif outcome == RowOutcome.DROPPED:
            dropped += 1
        else:
            excluded += 1

    tickets.sort(key=lambda ticket: ticket.created_at)

    logger.info(
        "action=normalize_rows filas=%s tickets=%s descartadas=%s excluidas=%s",
        total,
        len(tickets),
        dropped,
        excluded,
    )
    return NormalizationResult(
        tickets=tickets,
        total_rows=total,
        dropped_rows=dropped,
        excluded_rows=excluded,
    )
