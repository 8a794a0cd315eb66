# Nombre de archivo: __init__.py
# Ubicación de archivo: care_core/tickets/__init__.py
# Descripción: Punto de entrada del pipeline de tickets (exports públicos)
"""Funciones públicas del pipeline de tickets de Care."""

from .loader import load_rows
from .normalizer import normalize_rows
from .engine import aggregate
from .kpis import compute_kpis
from .comparison import compare_periods
from .settings import DashboardSettings
from .preview import build_payload

__all__ = [
    "load_rows",
    "normalize_rows",
    "aggregate",
    "compute_kpis",
    "compare_periods",
    "DashboardSettings",
    "build_payload",
]
