# Nombre de archivo: __init__.py
# Ubicación de archivo: care_core/__init__.py
# Descripción: Inicializa el paquete central del dashboard ejecutivo de Care

"""Punto de entrada para utilidades compartidas del dashboard de Care."""

from .config import get_settings
from .logging import setup_logging

__all__ = ["get_settings", "setup_logging"]
