# Nombre de archivo: config.py
# Ubicación de archivo: care_core/config.py
# Descripción: Configuración centralizada (entorno) para la carga y el logging del dashboard

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from os import getenv
from pathlib import Path


@dataclass(slots=True)
class CsvSettings:
    """Parámetros de lectura del export CSV."""

    encoding: str
    delimiter: str


@dataclass(slots=True)
class LoggingSettings:
    level: str
    enable_file: bool
    logs_dir: Path | None


@dataclass(slots=True)
class Settings:
    csv: CsvSettings
    logging: LoggingSettings
    dashboard_settings_path: Path | None

    def __init__(self) -> None:
        self.csv = CsvSettings(
            # utf-8-sig descarta el BOM que agregan los exports de Jira
            encoding=getenv("CARE_CSV_ENCODING", "utf-8-sig"),
            delimiter=getenv("CARE_CSV_DELIMITER", ","),
        )
        logs_dir = getenv("LOGS_DIR")
        self.logging = LoggingSettings(
            level=getenv("LOG_LEVEL", "INFO"),
            enable_file=getenv("ENV", "development").lower() == "development",
            logs_dir=Path(logs_dir) if logs_dir else None,
        )
        settings_path = getenv("CARE_SETTINGS_PATH")
        self.dashboard_settings_path = Path(settings_path) if settings_path else None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
