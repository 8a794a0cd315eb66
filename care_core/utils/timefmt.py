# Nombre de archivo: timefmt.py
# Ubicación de archivo: care_core/utils/timefmt.py
# Descripción: Claves de mes YYYY-MM, aritmética de meses y formateo de etiquetas y horas HH:MM

from __future__ import annotations

import calendar
import math
import re
from datetime import date, datetime
from typing import Optional, Sequence

MONTH_KEY_RE = re.compile(r"^(?P<y>\d{4})-(?P<m>\d{2})$")

MESES_CORTOS_ES = [
    "Ene",
    "Feb",
    "Mar",
    "Abr",
    "May",
    "Jun",
    "Jul",
    "Ago",
    "Sep",
    "Oct",
    "Nov",
    "Dic",
]


def month_key(value: date | datetime) -> str:
    """Devuelve la clave canónica ``YYYY-MM`` de una fecha."""

    return f"{value.year:04d}-{value.month:02d}"


def _split_month_key(key: str) -> tuple[int, int]:
    match = MONTH_KEY_RE.match(str(key or ""))
    if not match:
        raise ValueError(f"Clave de mes inválida: {key!r}")
    year, month = int(match.group("y")), int(match.group("m"))
    if not 1 <= month <= 12:
        raise ValueError(f"Clave de mes inválida: {key!r}")
    return year, month


def add_months(key: str, delta: int) -> str:
    """Desplaza una clave ``YYYY-MM`` ``delta`` meses (negativo hacia atrás)."""

    year, month = _split_month_key(key)
    index = year * 12 + (month - 1) + delta
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


def months_between(start: str, end: str) -> list[str]:
    """Lista inclusiva de claves de mes entre ``start`` y ``end``.

    Retorna lista vacía si falta alguno de los extremos o si ``start`` es
    posterior a ``end``. Claves mal formadas levantan ``ValueError``.
    """

    if not start or not end:
        return []
    y0, m0 = _split_month_key(start)
    y1, m1 = _split_month_key(end)
    desde = y0 * 12 + (m0 - 1)
    hasta = y1 * 12 + (m1 - 1)
    return [f"{i // 12:04d}-{i % 12 + 1:02d}" for i in range(desde, hasta + 1)]


def is_closed_month(value: Optional[datetime]) -> bool:
    """Indica si la fecha cae en el último día de su mes.

    Sin fecha se considera cerrado (no hay mes en curso que excluir).
    """

    if value is None:
        return True
    last_day = calendar.monthrange(value.year, value.month)[1]
    return value.day == last_day


def month_label(key: str) -> str:
    """Etiqueta corta en español: ``2026-01`` -> ``Ene 2026``."""

    if not key or "-" not in key:
        return key
    year, _, month = key.partition("-")
    try:
        idx = int(month) - 1
    except ValueError:
        return key
    name = MESES_CORTOS_ES[idx] if 0 <= idx < 12 else month
    return f"{name} {year}"


def format_period(months: Sequence[str]) -> str:
    if not months:
        return ""
    start, end = months[0], months[-1]
    if start == end:
        return month_label(start)
    return f"{month_label(start)} – {month_label(end)}"


def hours_to_hhmm(value: Optional[float]) -> str:
    """Formatea horas decimales con signo como ``H:MM`` (``-0.5`` -> ``-0:30``)."""

    if value is None or (isinstance(value, float) and math.isnan(value)):
        return "-"
    total_minutes = int(round(abs(value) * 60))
    hours, minutes = divmod(total_minutes, 60)
    sign = "-" if value < 0 and total_minutes else ""
    return f"{sign}{hours:d}:{minutes:02d}"
