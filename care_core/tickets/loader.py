# Nombre de archivo: loader.py
# Ubicación de archivo: care_core/tickets/loader.py
# Descripción: Lectura del export CSV de tickets a filas con encabezados normalizados

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import IO, Any, Iterable, List, Optional

import pandas as pd

from care_core.config import get_settings

logger = logging.getLogger(__name__)


def _normalizar_headers(columnas: Iterable[Any]) -> pd.Index:
    serie = pd.Index(columnas)
    return serie.astype(str).str.strip().str.lower()


def load_rows(
    source: str | Path | bytes | IO[bytes],
    *,
    encoding: Optional[str] = None,
    delimiter: Optional[str] = None,
) -> List[dict[str, str]]:
    """Lee el CSV y devuelve una lista de filas ``{encabezado: texto}``.

    Todas las celdas se leen como texto (las vacías como ``""``) y los
    encabezados quedan recortados y en minúsculas. Las líneas en blanco se
    omiten.
    """

    cfg = get_settings().csv
    if isinstance(source, (bytes, bytearray)):
        if not bytes(source).strip():
            raise ValueError("El archivo recibido está vacío")
        source = io.BytesIO(source)

    try:
        df = pd.read_csv(
            source,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            sep=delimiter or cfg.delimiter,
            encoding=encoding or cfg.encoding,
        )
    except pd.errors.EmptyDataError as exc:
        raise ValueError("El archivo recibido está vacío") from exc

    df.columns = _normalizar_headers(df.columns)
    rows = df.to_dict(orient="records")
    logger.info("action=load_rows filas=%s columnas=%s", len(rows), len(df.columns))
    return rows
