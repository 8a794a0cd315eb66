# Nombre de archivo: config.py
# Ubicación de archivo: care_core/tickets/config.py
# Descripción: Constantes, alias de encabezados y parámetros del pipeline de tickets
"""Configuración y constantes para la normalización y agregación de tickets."""

from __future__ import annotations

import os
import re
from typing import Dict, List

# Alias aceptados por campo lógico, en orden de preferencia (encabezados ya en minúsculas)
CREATED_HEADERS: List[str] = ["creada"]

SLA_RESPONSE_HEADERS: List[str] = [
    "campo personalizado (time to first response)",
    "campo personalizado (time to first response).",
    "custom field (time to first response)",
    "custom field (time to first response).",
    "time to first response",
    "time to first response (hrs)",
    "sla response",
    "sla de response",
]

SATISFACTION_HEADERS: List[str] = [
    "calificación de satisfacción",
    "calificacion de satisfaccion",
    "satisfaction",
]

ORGANIZATION_HEADERS: List[str] = [
    "campo personalizado (organizations)",
    "organizations",
    "organization",
    "organisation",
]

STATUS_HEADERS: List[str] = ["estado"]
ASSIGNEE_HEADERS: List[str] = ["persona asignada"]
KEY_HEADERS: List[str] = ["clave de incidencia", "key"]

# Abreviaturas de meses en español -> inglés
MONTH_MAP: Dict[str, str] = {
    "ene": "Jan",
    "feb": "Feb",
    "mar": "Mar",
    "abr": "Apr",
    "may": "May",
    "jun": "Jun",
    "jul": "Jul",
    "ago": "Aug",
    "sep": "Sep",
    "oct": "Oct",
    "nov": "Nov",
    "dic": "Dec",
}

MONTHS_EN: List[str] = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

# Estados que quedan fuera del dataset
EXCLUDED_STATUS_RE = re.compile(r"\b(block|hold)\b", re.IGNORECASE)

EMPTY_LABEL = "(Empty)"
OTHERS_LABEL = "Others"

DAY_LABELS: List[str] = ["Lun", "Mar", "Mié", "Jue", "Vie", "Sáb", "Dom"]

# Parámetros de agregación
TOP_ASSIGNEES = int(os.getenv("CARE_TOP_ASSIGNEES", "10"))
TOP_ORGANIZATIONS = int(os.getenv("CARE_TOP_ORGANIZATIONS", "5"))
HEATMAP_MONTHS = int(os.getenv("CARE_HEATMAP_MONTHS", "6"))
TPP_WINDOW_MONTHS = int(os.getenv("CARE_TPP_WINDOW_MONTHS", "6"))

COMPARE_WINDOWS = (3, 6, 12)
