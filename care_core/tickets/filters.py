# Nombre de archivo: filters.py
# Ubicación de archivo: care_core/tickets/filters.py
# Descripción: Filtros de la vista (rango de meses, organización, asignado, estado)

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from .schemas import Ticket

_ALL = "all"


def _activo(valor: Optional[str]) -> bool:
    return valor not in (None, "", _ALL)


@dataclass(slots=True)
class TicketFilter:
    """Selección de la UI; ``None`` o ``"all"`` no restringe."""

    from_month: Optional[str] = None
    to_month: Optional[str] = None
    organization: Optional[str] = None
    assignee: Optional[str] = None
    status: Optional[str] = None

    def matches(self, ticket: Ticket, *, dates: bool = True) -> bool:
        if dates:
            if _activo(self.from_month) and ticket.month < self.from_month:
                return False
            if _activo(self.to_month) and ticket.month > self.to_month:
                return False
        if _activo(self.organization) and ticket.organization != self.organization:
            return False
        if _activo(self.assignee) and ticket.assignee != self.assignee:
            return False
        if _activo(self.status) and ticket.status != self.status:
            return False
        return True


@dataclass(slots=True)
class MonthRange:
    min_month: Optional[str]
    max_month: Optional[str]


@dataclass(slots=True)
class FilterOptions:
    organizations: List[str]
    assignees: List[str]
    statuses: List[str]
    months: List[str]


def apply_filters(tickets: Iterable[Ticket], filtro: Optional[TicketFilter]) -> List[Ticket]:
    """Aplica todos los filtros conservando el orden cronológico."""

    if filtro is None:
        return list(tickets)
    return [t for t in tickets if filtro.matches(t)]


def without_dates(tickets: Iterable[Ticket], filtro: Optional[TicketFilter]) -> List[Ticket]:
    """Aplica solo los filtros no temporales (base de las comparativas)."""

    if filtro is None:
        return list(tickets)
    return [t for t in tickets if filtro.matches(t, dates=False)]


def auto_range(tickets: Sequence[Ticket]) -> MonthRange:
    if not tickets:
        return MonthRange(min_month=None, max_month=None)
    months = [t.month for t in tickets]
    return MonthRange(min_month=min(months), max_month=max(months))


def filter_options(tickets: Sequence[Ticket]) -> FilterOptions:
    return FilterOptions(
        organizations=sorted({t.organization for t in tickets if t.organization}),
        assignees=sorted({t.assignee for t in tickets if t.assignee}),
        statuses=sorted({t.status for t in tickets if t.status}),
        months=sorted({t.month for t in tickets}),
    )


def resolve_month_bounds(filtro: Optional[TicketFilter], tickets: Sequence[Ticket]) -> MonthRange:
    """Rango efectivo de la vista: los extremos sin filtro toman el rango del archivo."""

    rango = auto_range(tickets)
    if filtro is None:
        return rango
    desde = filtro.from_month if _activo(filtro.from_month) else rango.min_month
    hasta = filtro.to_month if _activo(filtro.to_month) else rango.max_month
    return MonthRange(min_month=desde, max_month=hasta)
