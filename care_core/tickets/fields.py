# Nombre de archivo: fields.py
# Ubicación de archivo: care_core/tickets/fields.py
# Descripción: Resolución de campos lógicos a partir de encabezados alternativos

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence


def normalize_headers(row: Mapping[Any, Any]) -> dict[str, Any]:
    """Devuelve la fila con claves recortadas y en minúsculas."""

    return {str(key).strip().lower(): value for key, value in row.items()}


def _is_blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


def resolve_field(row: Mapping[str, Any], candidates: Sequence[str]) -> Optional[Any]:
    """Obtiene el valor de un campo lógico probando encabezados en orden.

    Primero devuelve el primer candidato presente con contenido; si todos
    están vacíos, el primer candidato presente (aunque esté en blanco). Si
    ninguno existe en la fila retorna ``None``.
    """

    for candidate in candidates:
        if candidate in row and not _is_blank(row[candidate]):
            return row[candidate]
    for candidate in candidates:
        if candidate in row:
            return row[candidate]
    return None


def resolve_text(row: Mapping[str, Any], candidates: Sequence[str]) -> str:
    """Variante de :func:`resolve_field` que devuelve texto recortado."""

    value = resolve_field(row, candidates)
    if value is None:
        return ""
    return str(value).strip()
