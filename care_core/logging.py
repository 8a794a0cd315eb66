# Nombre de archivo: logging.py
# Ubicación de archivo: care_core/logging.py
# Descripción: Logging del dashboard (stdout + archivo rotativo opcional según la configuración)

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .config import get_settings

_FORMAT = "%(asctime)s service=%(name)s level=%(levelname)s msg=%(message)s"

DEFAULT_SERVICE = "care_dashboard"

# Loggers del paquete que heredan el nivel configurado
_PACKAGE_LOGGERS = ("care_core",)


def _resolve_level(level: str | int | None) -> int:
    if level is None:
        level = get_settings().logging.level
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(
    service: str = DEFAULT_SERVICE,
    level: str | int | None = None,
    enable_file: bool | None = None,
    logs_dir: str | Path | None = None,
    filename: str | None = None,
    max_bytes: int = 5_000_000,
    backup_count: int = 3,
) -> logging.Logger:
    """Configura el logging de un proceso del dashboard.

    Los parámetros en ``None`` se toman de ``get_settings().logging``
    (``LOG_LEVEL``, ``ENV`` y ``LOGS_DIR``). El archivo rotativo se
    agrega al logger del servicio y a los del paquete ``care_core``, así
    las líneas ``action=...`` del pipeline quedan en el mismo archivo.
    """

    cfg = get_settings().logging
    lvl = _resolve_level(level)
    logging.basicConfig(level=lvl, format=_FORMAT)

    logger = logging.getLogger(service)
    logger.setLevel(lvl)
    for name in _PACKAGE_LOGGERS:
        logging.getLogger(name).setLevel(lvl)

    if enable_file is None:
        enable_file = cfg.enable_file
    if not enable_file:
        return logger
    # llamadas repetidas no duplican el handler
    if any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        return logger

    base_dir = Path(logs_dir) if logs_dir else (cfg.logs_dir or Path.cwd() / "Logs")
    path = base_dir / (filename or f"{service}.log")
    try:
        base_dir.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
    except OSError as exc:
        logger.error("action=logging file_handler=failed path=%s error=%s", path, exc)
        return logger

    fh.setFormatter(logging.Formatter(_FORMAT))
    fh.setLevel(lvl)
    logger.addHandler(fh)
    for name in _PACKAGE_LOGGERS:
        package_logger = logging.getLogger(name)
        if not any(getattr(h, "baseFilename", None) == fh.baseFilename for h in package_logger.handlers):
            package_logger.addHandler(fh)
    logger.debug("action=logging file_handler=enabled path=%s", path)
    return logger


__all__ = ["DEFAULT_SERVICE", "setup_logging"]
