# Nombre de archivo: comparison.py
# Ubicación de archivo: care_core/tickets/comparison.py
# Descripción: Comparativas período contra período (P-1 y P-2) de los KPIs de cabecera
"""Motor de comparativas.

El período base son los últimos ``W`` meses de la selección; P-1 y P-2 son
los bloques de igual largo inmediatamente anteriores. Un período de
referencia solo se usa si todos sus meses tienen datos; P-2 además exige
que P-1 califique.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Sequence

from care_core.utils.timefmt import add_months, format_period, months_between

from .config import COMPARE_WINDOWS
from .engine import pct
from .schemas import AssigneeRole, ComparisonBundle, DeltaValue, MetricComparison, PeriodMetrics, Ticket
from .settings import DashboardSettings, RoleInclusion
from .staffing import tickets_per_person

# (métrica, mayor es mejor)
KPI_POLARITY: List[tuple[str, bool]] = [
    ("total", True),
    ("resp_ok_pct", True),
    ("csat_avg", True),
    ("tpp", False),
]


@dataclass(slots=True)
class ComparisonPeriods:
    base: List[str]
    prev1: List[str]
    prev2: List[str]


def percent_change(current: Optional[float], reference: Optional[float]) -> Optional[float]:
    """Variación porcentual; indefinida si falta un valor o la referencia es 0."""

    if current is None or reference is None or reference == 0:
        return None
    return (current - reference) / abs(reference) * 100


def _bloque_anterior(months: Sequence[str]) -> List[str]:
    if not months:
        return []
    largo = len(months)
    return months_between(add_months(months[0], -largo), add_months(months[0], -1))


def comparison_periods(from_month: str, to_month: str, window: int) -> ComparisonPeriods:
    if window not in COMPARE_WINDOWS:
        raise ValueError(f"La ventana de comparación debe ser una de {COMPARE_WINDOWS}")
    seleccion = months_between(from_month, to_month)
    base = seleccion[-window:] if len(seleccion) > window else seleccion
    prev1 = _bloque_anterior(base)
    prev2 = _bloque_anterior(prev1)
    return ComparisonPeriods(base=base, prev1=prev1, prev2=prev2)


def has_all_months(months: Sequence[str], available: Iterable[str]) -> bool:
    disponibles = set(available)
    return bool(months) and all(month in disponibles for month in months)


def period_metrics(
    tickets: Sequence[Ticket],
    months: Sequence[str],
    role_map: Mapping[str, AssigneeRole | str],
    inclusion: RoleInclusion,
) -> PeriodMetrics:
    ventana = set(months)
    filas = [t for t in tickets if t.month in ventana]
    total = len(filas)
    incumplidos = sum(1 for t in filas if t.breached)
    calificados = [t.satisfaction for t in filas if t.satisfaction is not None]

    return PeriodMetrics(
        months=list(months),
        total=total,
        resp_ok_pct=pct(total - incumplidos, total) if total else None,
        csat_avg=sum(calificados) / len(calificados) if calificados else None,
        tpp=tickets_per_person(filas, months, role_map, inclusion),
    )


def _delta(current: Optional[float], reference: Optional[float], higher_is_better: bool) -> DeltaValue:
    cambio = percent_change(current, reference)
    absoluto = current - reference if current is not None and reference is not None else None
    es_bueno: Optional[bool] = None
    if cambio is not None:
        es_bueno = cambio >= 0 if higher_is_better else cambio <= 0
    return DeltaValue(reference=reference, pct_change=cambio, abs_change=absoluto, is_good=es_bueno)


def compare_periods(
    tickets: Sequence[Ticket],
    from_month: str,
    to_month: str,
    settings: DashboardSettings,
) -> ComparisonBundle:
    """Compara el período base contra P-1 y P-2.

    ``tickets`` debe venir sin filtro de fechas (solo organización, asignado
    y estado) para poder mirar la historia previa a la selección.
    """

    cfg = settings.compare
    roles = settings.roles
    periodos = comparison_periods(from_month, to_month, cfg.window_months)
    disponibles = {t.month for t in tickets}

    base = period_metrics(tickets, periodos.base, roles.role_map, roles.inclusion)
    prev1: Optional[PeriodMetrics] = None
    prev2: Optional[PeriodMetrics] = None
    if cfg.compare_previous and has_all_months(periodos.prev1, disponibles):
        prev1 = period_metrics(tickets, periodos.prev1, roles.role_map, roles.inclusion)
        if has_all_months(periodos.prev2, disponibles):
            prev2 = period_metrics(tickets, periodos.prev2, roles.role_map, roles.inclusion)

    metrics = {}
    for metric, higher_is_better in KPI_POLARITY:
        current = getattr(base, metric)
        metrics[metric] = MetricComparison(
            metric=metric,
            higher_is_better=higher_is_better,
            current=current,
            vs_prev1=_delta(current, getattr(prev1, metric), higher_is_better) if prev1 is not None else None,
            vs_prev2=_delta(current, getattr(prev2, metric), higher_is_better) if prev2 is not None else None,
        )

    return ComparisonBundle(
        window=cfg.window_months,
        base_months=periodos.base,
        prev1_months=periodos.prev1,
        prev2_months=periodos.prev2,
        base_label=format_period(periodos.base),
        prev1_label=format_period(periodos.prev1),
        prev2_label=format_period(periodos.prev2),
        base=base,
        prev1=prev1,
        prev2=prev2,
        metrics=metrics,
    )
