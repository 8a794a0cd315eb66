# Nombre de archivo: kpis.py
# Ubicación de archivo: care_core/tickets/kpis.py
# Descripción: KPIs de cabecera (volumen, SLA, CSAT y tickets por persona)

from __future__ import annotations

from typing import List, Optional, Sequence

from care_core.utils.timefmt import is_closed_month, month_key

from .config import TPP_WINDOW_MONTHS
from .engine import pct
from .schemas import HeadlineKpis, Ticket, TppHealth
from .settings import DashboardSettings, TppThresholds
from .staffing import tickets_per_person


def classify_tpp(value: Optional[float], thresholds: TppThresholds) -> TppHealth:
    if value is None:
        return TppHealth(level="sin_dato", label="Sin dato")
    if value < thresholds.capacity_max:
        return TppHealth(level="con_capacidad", label="Con Capacidad")
    if value <= thresholds.optimal_max:
        return TppHealth(level="optimo", label="Óptimo")
    if value <= thresholds.limit_max:
        return TppHealth(level="al_limite", label="Al Límite")
    return TppHealth(level="warning", label="Warning")


def tpp_window(
    tickets: Sequence[Ticket],
    reference: Optional[Sequence[Ticket]] = None,
    size: int = TPP_WINDOW_MONTHS,
) -> List[str]:
    """Últimos ``size`` meses con tickets, sin el mes en curso si no está cerrado.

    El mes en curso es el del ticket más reciente de ``reference`` (por
    defecto los mismos tickets); se considera cerrado solo si ese ticket cae
    en el último día del mes.
    """

    meses = sorted({t.month for t in tickets})
    base = reference if reference is not None else tickets
    if not meses or not base:
        return meses[-size:]
    ultimo = max(t.created_at for t in base)
    if not is_closed_month(ultimo):
        actual = month_key(ultimo)
        meses = [m for m in meses if m != actual]
    return meses[-size:]


def compute_kpis(
    tickets: Sequence[Ticket],
    settings: DashboardSettings,
    reference: Optional[Sequence[Ticket]] = None,
) -> HeadlineKpis:
    """KPIs de la vista filtrada.

    ``reference`` es el dataset completo (sin filtros) usado para decidir si
    el mes más reciente está cerrado.
    """

    total = len(tickets)
    incumplidos = sum(1 for t in tickets if t.breached)
    calificados = [t.satisfaction for t in tickets if t.satisfaction is not None]
    csat_avg = sum(calificados) / len(calificados) if calificados else None

    latest_month: Optional[str] = None
    month_count = 0
    if tickets:
        latest_month = max(tickets, key=lambda t: t.created_at).month
        month_count = sum(1 for t in tickets if t.month == latest_month)

    ventana = tpp_window(tickets, reference)
    roles = settings.roles
    tpp = tickets_per_person(tickets, ventana, roles.role_map, roles.inclusion) if ventana else None

    return HeadlineKpis(
        total=total,
        latest_month=latest_month,
        month_count=month_count,
        resp_breached=incumplidos,
        resp_ok_pct=pct(total - incumplidos, total),
        csat_avg=csat_avg,
        csat_coverage=pct(len(calificados), total),
        tpp_6m=tpp,
        tpp_months=ventana,
        tpp_health=classify_tpp(tpp, settings.tpp),
    )
