# Nombre de archivo: schemas.py
# Ubicación de archivo: care_core/tickets/schemas.py
# Descripción: Registros canónicos de tickets y estructuras de agregados del dashboard
"""Modelos de datos del pipeline de tickets."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Optional


class SlaStatus(str, Enum):
    COMPLIANT = "Compliant"
    BREACHED = "Breached"


class AssigneeRole(str, Enum):
    GUARDIA = "Guardia"
    AGENTE = "Agente"
    MANAGER_CARE = "Manager Care"
    IGNORAR = "Ignorar"


@dataclass(frozen=True, slots=True)
class Ticket:
    """Ticket normalizado, inmutable, derivado de una fila del CSV."""

    key: str
    organization: str
    status: str
    assignee: str
    created_at: datetime
    year: int
    month: str
    sla_response_hours: Optional[float]
    sla_status: SlaStatus
    satisfaction: Optional[float]

    @property
    def breached(self) -> bool:
        return self.sla_status is SlaStatus.BREACHED


@dataclass(slots=True)
class NormalizationResult:
    """Tickets normalizados junto con los contadores de filas descartadas."""

    tickets: List[Ticket]
    total_rows: int
    dropped_rows: int
    excluded_rows: int

    @property
    def ok(self) -> bool:
        return bool(self.tickets)

    @property
    def warning(self) -> Optional[str]:
        if not self.tickets:
            return (
                "No pude parsear filas con fecha 'Creada'. Revisa que el CSV tenga columna "
                "'Creada' y formato tipo 19/ene/26 12:47 PM."
            )
        if self.dropped_rows:
            return (
                f"Aviso: {self.dropped_rows} filas fueron omitidas porque la fecha 'Creada' "
                "no era interpretable."
            )
        return None


@dataclass(slots=True)
class MonthCount:
    month: str
    tickets: int


@dataclass(slots=True)
class YearCount:
    year: int
    tickets: int
    partial: bool = False
    partial_through: Optional[date] = None


@dataclass(slots=True)
class YearStatusCounts:
    year: int
    counts: Dict[str, int]


@dataclass(slots=True)
class SlaYear:
    year: int
    total: int
    compliant: int
    breached: int
    compliant_pct: float
    breached_pct: float


@dataclass(slots=True)
class CsatYear:
    year: int
    csat_avg: Optional[float]
    responses: int
    total: int
    coverage_pct: float


@dataclass(slots=True)
class RankItem:
    name: str
    tickets: int


@dataclass(slots=True)
class StatusHeatmapRow:
    month: str
    counts: Dict[str, int]


@dataclass(slots=True)
class StatusHeatmap:
    """Mapa de calor mes x estado sobre los últimos meses presentes."""

    states: List[str]
    rows: List[StatusHeatmapRow]
    max: int
    range: str


@dataclass(slots=True)
class HourHeatmap:
    counts: List[int]
    max: int


@dataclass(slots=True)
class WeekHeatmap:
    """Matriz día (lunes=0) x hora."""

    days: List[str]
    matrix: List[List[int]]
    max: int


@dataclass(slots=True)
class AggregateBundle:
    """Series derivadas de un conjunto filtrado de tickets."""

    total: int
    tickets_by_month: List[MonthCount]
    tickets_by_year: List[YearCount]
    status_by_year: List[YearStatusCounts]
    sla_by_year: List[SlaYear]
    csat_by_year: List[CsatYear]
    top_assignees: List[RankItem]
    top_organizations: List[RankItem]
    status_heatmap: StatusHeatmap
    hour_heatmap: HourHeatmap
    week_heatmap: WeekHeatmap


@dataclass(slots=True)
class TppHealth:
    level: str
    label: str


@dataclass(slots=True)
class HeadlineKpis:
    """KPIs de cabecera del dashboard."""

    total: int
    latest_month: Optional[str]
    month_count: int
    resp_breached: int
    resp_ok_pct: float
    csat_avg: Optional[float]
    csat_coverage: float
    tpp_6m: Optional[float]
    tpp_months: List[str]
    tpp_health: TppHealth


@dataclass(slots=True)
class PeriodMetrics:
    months: List[str]
    total: int
    resp_ok_pct: Optional[float]
    csat_avg: Optional[float]
    tpp: Optional[float]


@dataclass(slots=True)
class DeltaValue:
    """Variación del período base contra un período de referencia."""

    reference: Optional[float]
    pct_change: Optional[float]
    abs_change: Optional[float]
    is_good: Optional[bool]


@dataclass(slots=True)
class MetricComparison:
    metric: str
    higher_is_better: bool
    current: Optional[float]
    vs_prev1: Optional[DeltaValue] = None
    vs_prev2: Optional[DeltaValue] = None


@dataclass(slots=True)
class ComparisonBundle:
    window: int
    base_months: List[str]
    prev1_months: List[str]
    prev2_months: List[str]
    base_label: str
    prev1_label: str
    prev2_label: str
    base: PeriodMetrics
    prev1: Optional[PeriodMetrics]
    prev2: Optional[PeriodMetrics]
    metrics: Dict[str, MetricComparison] = field(default_factory=dict)
