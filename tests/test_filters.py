# Nombre de archivo: test_filters.py
# Ubicación de archivo: tests/test_filters.py
# Descripción: Pruebas de filtros de la vista y opciones disponibles

from __future__ import annotations

from care_core.tickets.filters import (
    TicketFilter,
    apply_filters,
    auto_range,
    filter_options,
    resolve_month_bounds,
    without_dates,
)
from care_core.tickets.normalizer import normalize_rows


def _tickets(make_row):
    return normalize_rows(
        [
            make_row("10/ene/25 10:00 AM", org="A", asignado="Ana", estado="Open"),
            make_row("10/feb/25 10:00 AM", org="B", asignado="Bea", estado="Closed"),
            make_row("10/mar/25 10:00 AM", org="A", asignado="Bea", estado="Closed"),
            make_row("10/abr/25 10:00 AM", org="", asignado="", estado="Open"),
        ]
    ).tickets


def test_apply_filters_combina_criterios(make_row):
    tickets = _tickets(make_row)

    assert len(apply_filters(tickets, None)) == 4
    assert len(apply_filters(tickets, TicketFilter(organization="all", status="all"))) == 4
    assert [t.month for t in apply_filters(tickets, TicketFilter(from_month="2025-02", to_month="2025-03"))] == [
        "2025-02",
        "2025-03",
    ]
    filtrados = apply_filters(tickets, TicketFilter(organization="A", assignee="Bea"))
    assert [t.month for t in filtrados] == ["2025-03"]


def test_without_dates_ignora_rango(make_row):
    tickets = _tickets(make_row)
    filtro = TicketFilter(from_month="2025-03", to_month="2025-03", status="Closed")
    assert [t.month for t in without_dates(tickets, filtro)] == ["2025-02", "2025-03"]


def test_opciones_y_rango(make_row):
    tickets = _tickets(make_row)
    opciones = filter_options(tickets)

    assert opciones.organizations == ["A", "B"]
    assert opciones.assignees == ["Ana", "Bea"]
    assert opciones.statuses == ["Closed", "Open"]
    assert opciones.months == ["2025-01", "2025-02", "2025-03", "2025-04"]

    rango = auto_range(tickets)
    assert (rango.min_month, rango.max_month) == ("2025-01", "2025-04")
    assert auto_range([]).min_month is None

    efectivo = resolve_month_bounds(TicketFilter(from_month="2025-02"), tickets)
    assert (efectivo.min_month, efectivo.max_month) == ("2025-02", "2025-04")
