# Nombre de archivo: dashboard.py
# Ubicación de archivo: care_core/services/dashboard.py
# Descripción: Servicio de alto nivel que arma el dashboard ejecutivo a partir de filas o CSV
"""Servicios de alto nivel del dashboard ejecutivo de Care."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from care_core.tickets import comparison, engine, filters as filtros, kpis, loader, normalizer, staffing
from care_core.tickets.schemas import (
    AggregateBundle,
    AssigneeRole,
    ComparisonBundle,
    HeadlineKpis,
    NormalizationResult,
    Ticket,
)
from care_core.tickets.settings import DashboardSettings

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CoverageView:
    """Matriz 7x24 de turnos y tipos presentes, para colorear heatmaps."""

    matrix: List[List[Optional[str]]]
    has_normal: bool
    has_guard: bool
    split: bool


@dataclass(slots=True)
class DashboardReport:
    """Resultado completo de una corrida del dashboard."""

    tickets: List[Ticket]
    filtered: List[Ticket]
    total_rows: int
    dropped_rows: int
    excluded_rows: int
    warning: Optional[str]
    filters: filtros.TicketFilter
    auto_range: filtros.MonthRange
    view_range: filtros.MonthRange
    options: filtros.FilterOptions
    kpis: HeadlineKpis
    series: AggregateBundle
    comparison: Optional[ComparisonBundle]
    coverage: CoverageView
    roles: Dict[str, AssigneeRole] = field(default_factory=dict)


def _coverage(settings: DashboardSettings) -> CoverageView:
    kinds = staffing.coverage_kinds(settings.coverage_shifts)
    return CoverageView(matrix=staffing.coverage_matrix(settings.coverage_shifts), **kinds)


def build_dashboard(
    resultado: NormalizationResult,
    settings: Optional[DashboardSettings] = None,
    filtro: Optional[filtros.TicketFilter] = None,
) -> DashboardReport:
    """Aplica filtros y calcula KPIs, series y comparativas."""

    cfg = settings or DashboardSettings()
    filtro = filtro or filtros.TicketFilter()
    tickets = resultado.tickets

    filtrados = filtros.apply_filters(tickets, filtro)
    rango = filtros.resolve_month_bounds(filtro, tickets)
    logger.info(
        "action=dashboard_service stage=filtered tickets=%s filtrados=%s desde=%s hasta=%s",
        len(tickets),
        len(filtrados),
        rango.min_month,
        rango.max_month,
    )

    bundle = engine.aggregate(filtrados)
    cabecera = kpis.compute_kpis(filtrados, cfg, reference=tickets)

    comparativa: Optional[ComparisonBundle] = None
    if rango.min_month and rango.max_month:
        comparativa = comparison.compare_periods(
            filtros.without_dates(tickets, filtro),
            rango.min_month,
            rango.max_month,
            cfg,
        )
        logger.info(
            "action=dashboard_service stage=compared base=%s prev1=%s prev2=%s",
            comparativa.base_label,
            comparativa.prev1 is not None,
            comparativa.prev2 is not None,
        )

    # asignados conocidos por la configuración y los presentes en el archivo
    nombres = [*cfg.roles.universe, *staffing.assignee_universe(tickets)]
    roles = staffing.merge_role_map(cfg.roles.role_map, nombres)

    return DashboardReport(
        tickets=tickets,
        filtered=filtrados,
        total_rows=resultado.total_rows,
        dropped_rows=resultado.dropped_rows,
        excluded_rows=resultado.excluded_rows,
        warning=resultado.warning,
        filters=filtro,
        auto_range=filtros.auto_range(tickets),
        view_range=rango,
        options=filtros.filter_options(tickets),
        kpis=cabecera,
        series=bundle,
        comparison=comparativa,
        coverage=_coverage(cfg),
        roles=roles,
    )


def compute_from_rows(
    rows: Iterable[Mapping[str, Any]],
    *,
    settings: Optional[DashboardSettings] = None,
    filtro: Optional[filtros.TicketFilter] = None,
) -> DashboardReport:
    resultado = normalizer.normalize_rows(rows)
    if resultado.warning:
        logger.warning("action=dashboard_service stage=normalized aviso=%s", resultado.warning)
    return build_dashboard(resultado, settings, filtro)


def compute_from_csv(
    csv_bytes: bytes,
    *,
    settings: Optional[DashboardSettings] = None,
    filtro: Optional[filtros.TicketFilter] = None,
    encoding: Optional[str] = None,
    delimiter: Optional[str] = None,
) -> DashboardReport:
    if not csv_bytes:
        raise ValueError("El archivo recibido está vacío")

    rows = loader.load_rows(csv_bytes, encoding=encoding, delimiter=delimiter)
    logger.info("action=dashboard_service stage=parsed filas=%s", len(rows))
    return compute_from_rows(rows, settings=settings, filtro=filtro)
