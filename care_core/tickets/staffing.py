# Nombre de archivo: staffing.py
# Ubicación de archivo: care_core/tickets/staffing.py
# Descripción: Dotación mensual por roles y cobertura de turnos por día/hora
"""Resolución de dotación y cobertura de turnos."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from .schemas import AssigneeRole, Ticket
from .settings import CoverageShift, RoleInclusion

_MINUTES_PER_DAY = 24 * 60


def role_for(name: str, role_map: Mapping[str, AssigneeRole | str]) -> AssigneeRole:
    """Rol configurado para un asignado; ``Agente`` si no está mapeado."""

    role = role_map.get(name)
    if role is None:
        return AssigneeRole.AGENTE
    try:
        return AssigneeRole(role)
    except ValueError:
        return AssigneeRole.AGENTE


def role_included(role: AssigneeRole, inclusion: RoleInclusion) -> bool:
    if role is AssigneeRole.IGNORAR:
        return False
    if role is AssigneeRole.GUARDIA:
        return inclusion.guardia
    if role is AssigneeRole.MANAGER_CARE:
        return inclusion.manager_care
    return inclusion.agente


def month_headcount(
    month: str,
    tickets: Iterable[Ticket],
    role_map: Mapping[str, AssigneeRole | str],
    inclusion: RoleInclusion,
) -> int:
    """Personas distintas con tickets creados en ``month`` cuyo rol cuenta.

    Cero es un resultado válido; quien divide debe tratarlo como "sin dato".
    """

    personas: set[str] = set()
    for ticket in tickets:
        if ticket.month != month:
            continue
        name = ticket.assignee.strip()
        if not name or name in personas:
            continue
        if role_included(role_for(name, role_map), inclusion):
            personas.add(name)
    return len(personas)


def tickets_per_person(
    tickets: Sequence[Ticket],
    months: Sequence[str],
    role_map: Mapping[str, AssigneeRole | str],
    inclusion: RoleInclusion,
) -> Optional[float]:
    """Tickets de la ventana sobre la suma de dotaciones mensuales.

    Un mes sin dotación suma sus tickets al numerador y cero al denominador.
    Denominador cero -> ``None``.
    """

    ventana = set(months)
    total = sum(1 for t in tickets if t.month in ventana)
    denominador = sum(month_headcount(month, tickets, role_map, inclusion) for month in months)
    if denominador <= 0:
        return None
    return total / denominador


def assignee_universe(tickets: Iterable[Ticket]) -> List[str]:
    """Asignados distintos (no vacíos) ordenados alfabéticamente."""

    return sorted({t.assignee.strip() for t in tickets if t.assignee.strip()})


def merge_role_map(
    role_map: Mapping[str, AssigneeRole | str],
    names: Iterable[str],
) -> Dict[str, AssigneeRole]:
    """Agrega los asignados nuevos con rol ``Agente`` sin tocar los existentes."""

    merged = {name: role_for(name, role_map) for name in role_map}
    for name in names:
        if name not in merged:
            merged[name] = AssigneeRole.AGENTE
    return merged


def time_to_minutes(value: str) -> Optional[int]:
    """``"HH:MM"`` -> minutos desde medianoche; ``None`` si no es interpretable."""

    partes = str(value or "").split(":")
    if len(partes) < 2:
        return None
    try:
        return int(partes[0]) * 60 + int(partes[1])
    except ValueError:
        return None


def shift_covers_hour(shift: CoverageShift, hour: int) -> bool:
    """La hora completa ``[hour:00, hour:59]`` cae dentro de ``[start, end)``."""

    start = time_to_minutes(shift.start)
    end = time_to_minutes(shift.end)
    if start is None or end is None or start == end:
        return False
    h0 = hour * 60
    h1 = hour * 60 + 59
    if start < end:
        return h0 >= start and h1 < end
    # cruza medianoche
    return (h0 >= start and h1 < _MINUTES_PER_DAY) or h1 < end


def shift_covers(shift: CoverageShift, weekday: int, hour: int) -> bool:
    if weekday not in shift.days:
        return False
    return shift_covers_hour(shift, hour)


def _enabled(shifts: Sequence[CoverageShift]) -> Iterable[CoverageShift]:
    return (shift for shift in shifts if shift.enabled)


def pick_shift(shifts: Sequence[CoverageShift], weekday: int, hour: int) -> Optional[CoverageShift]:
    """Primer turno habilitado (en orden de configuración) que cubre la celda."""

    for shift in _enabled(shifts):
        if shift_covers(shift, weekday, hour):
            return shift
    return None


def pick_shift_for_hour(shifts: Sequence[CoverageShift], hour: int) -> Optional[CoverageShift]:
    for shift in _enabled(shifts):
        if shift_covers_hour(shift, hour):
            return shift
    return None


def pick_shift_for_day(shifts: Sequence[CoverageShift], weekday: int) -> Optional[CoverageShift]:
    for shift in _enabled(shifts):
        if weekday in shift.days:
            return shift
    return None


def is_covered(shifts: Sequence[CoverageShift], weekday: int, hour: int) -> bool:
    return any(shift_covers(shift, weekday, hour) for shift in _enabled(shifts))


def coverage_matrix(shifts: Sequence[CoverageShift]) -> List[List[Optional[str]]]:
    """Matriz 7x24 (lunes=0) con el id del turno que pinta cada celda."""

    matrix: List[List[Optional[str]]] = []
    for weekday in range(7):
        fila: List[Optional[str]] = []
        for hour in range(24):
            shift = pick_shift(shifts, weekday, hour)
            fila.append(shift.id if shift is not None else None)
        matrix.append(fila)
    return matrix


def coverage_kinds(shifts: Sequence[CoverageShift]) -> Dict[str, bool]:
    has_normal = has_guard = False
    for shift in _enabled(shifts):
        if shift.kind == "guard":
            has_guard = True
        else:
            has_normal = True
    return {"has_normal": has_normal, "has_guard": has_guard, "split": has_normal and has_guard}
