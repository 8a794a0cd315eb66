# Nombre de archivo: conftest.py
# Ubicación de archivo: tests/conftest.py
# Descripción: Configuraciones comunes para Pytest (ajuste de PYTHONPATH y fixtures de tickets)

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:  # pragma: no cover - inicialización
    sys.path.insert(0, str(ROOT_DIR))

from care_core.tickets.normalizer import normalize_rows  # noqa: E402
from care_core.tickets.settings import DashboardSettings  # noqa: E402


def fila(
    creada: str,
    *,
    sla: str = "",
    estado: str = "Open",
    asignado: str = "Ana",
    org: str = "Acme",
    csat: str = "",
    clave: str = "CARE-1",
) -> dict[str, str]:
    """Fila con los encabezados tal como llegan del loader."""

    return {
        "clave de incidencia": clave,
        "creada": creada,
        "estado": estado,
        "persona asignada": asignado,
        "campo personalizado (organizations)": org,
        "campo personalizado (time to first response)": sla,
        "calificación de satisfacción": csat,
    }


@pytest.fixture
def make_row():
    return fila


@pytest.fixture
def settings() -> DashboardSettings:
    return DashboardSettings()


@pytest.fixture
def sample_rows() -> list[dict[str, str]]:
    return [
        fila("19/ene/26 12:47 PM", sla="-0:30", estado="Open", clave="CARE-1"),
        fila("20/ene/26 09:00 AM", sla="", estado="Hold", clave="CARE-2"),
        fila("15/feb/26 03:15 PM", sla="2.5", estado="Closed", clave="CARE-3"),
    ]


@pytest.fixture
def sample_tickets(sample_rows):
    return normalize_rows(sample_rows).tickets
