# Nombre de archivo: parser.py
# Ubicación de archivo: care_core/tickets/parser.py
# Descripción: Parseo de fechas localizadas, duraciones SLA y calificaciones CSAT
"""Parsers de valores crudos del export de tickets."""

from __future__ import annotations

import math
import re
from datetime import datetime
from typing import Any, Optional

from .config import MONTH_MAP, MONTHS_EN
from .schemas import SlaStatus

_SPANISH_MONTH_RE = re.compile(r"/(ene|feb|mar|abr|may|jun|jul|ago|sep|oct|nov|dic)/", re.IGNORECASE)

# Ejemplo: 19/Jan/26 12:47 PM
_CREATED_RE = re.compile(
    r"(\d{1,2})/(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)/(\d{2})\s+(\d{1,2}):(\d{2})\s*(AM|PM)",
    re.IGNORECASE,
)

_DECIMAL_RE = re.compile(r"[+-]?\d+(?:[.,]\d+)?")
_HHMM_RE = re.compile(r"([+-])?(\d+)\s*:\s*(\d{1,2})")


def normalize_spanish_month(text: str) -> str:
    """Traduce la abreviatura de mes en español (``/ene/``) a inglés (``/Jan/``)."""

    if not text:
        return ""

    def _replace(match: re.Match[str]) -> str:
        token = match.group(1).lower()
        return f"/{MONTH_MAP.get(token, token)}/"

    return _SPANISH_MONTH_RE.sub(_replace, str(text))


def parse_created(value: Any) -> Optional[datetime]:
    """Parsea fechas tipo ``19/ene/26 12:47 PM`` a ``datetime`` local (naive).

    Retorna ``None`` si el formato no coincide o la fecha no existe en el
    calendario (p. ej. 30/feb).
    """

    if value is None:
        return None
    text = normalize_spanish_month(str(value)).strip()
    match = _CREATED_RE.fullmatch(text)
    if not match:
        return None

    day = int(match.group(1))
    month_idx = MONTHS_EN.index(match.group(2).capitalize())
    yy = int(match.group(3))
    hour = int(match.group(4))
    minute = int(match.group(5))
    meridiem = match.group(6).upper()

    year = 1900 + yy if yy >= 70 else 2000 + yy
    if meridiem == "PM" and hour != 12:
        hour += 12
    if meridiem == "AM" and hour == 12:
        hour = 0

    try:
        return datetime(year, month_idx + 1, day, hour, minute)
    except ValueError:
        return None


def parse_sla_hours(value: Any) -> Optional[float]:
    """Convierte la duración SLA a horas decimales con signo.

    Acepta decimales (``1.25``, ``-2,5``) y ``H:MM`` con signo opcional
    aplicado a toda la magnitud (``-0:30`` -> ``-0.5``). Todo lo demás es
    ``None``.
    """

    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None

    if _DECIMAL_RE.fullmatch(text):
        number = float(text.replace(",", "."))
        return number if math.isfinite(number) else None

    match = _HHMM_RE.fullmatch(text)
    if not match:
        return None
    magnitude = int(match.group(2)) + int(match.group(3)) / 60
    return -magnitude if match.group(1) == "-" else magnitude


def sla_status(hours: Optional[float]) -> SlaStatus:
    """Incumplido solo si el valor es estrictamente negativo."""

    if hours is not None and hours < 0:
        return SlaStatus.BREACHED
    return SlaStatus.COMPLIANT


def parse_satisfaction(value: Any) -> Optional[float]:
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None
