# Nombre de archivo: export_dashboard.py
# Ubicación de archivo: care_core/tools/export_dashboard.py
# Descripción: CLI que procesa el export CSV de tickets y emite el dashboard como JSON

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from care_core.config import get_settings
from care_core.logging import DEFAULT_SERVICE, setup_logging
from care_core.services.dashboard import compute_from_csv
from care_core.tickets.filters import TicketFilter
from care_core.tickets.preview import build_payload
from care_core.tickets.settings import DashboardSettings

logger = logging.getLogger(DEFAULT_SERVICE)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Genera el dashboard ejecutivo de Care desde un CSV de Jira")
    parser.add_argument("csv", type=Path, help="Export CSV de tickets")
    parser.add_argument("--settings", type=Path, help="JSON de configuración del dashboard")
    parser.add_argument("--desde", help="Mes inicial YYYY-MM")
    parser.add_argument("--hasta", help="Mes final YYYY-MM")
    parser.add_argument("--org", help="Organización")
    parser.add_argument("--asignado", help="Persona asignada")
    parser.add_argument("--estado", help="Estado del ticket")
    parser.add_argument("--tickets", action="store_true", help="Incluye los tickets filtrados en la salida")
    parser.add_argument("--out", type=Path, help="Archivo destino (por defecto stdout)")
    return parser


def _cargar_settings(path: Optional[Path]) -> DashboardSettings:
    destino = path or get_settings().dashboard_settings_path
    if destino is None:
        return DashboardSettings()
    logger.info("action=export_dashboard settings=%s", destino)
    return DashboardSettings.from_json_file(destino)


def run(args: argparse.Namespace) -> dict:
    settings = _cargar_settings(args.settings)
    filtro = TicketFilter(
        from_month=args.desde,
        to_month=args.hasta,
        organization=args.org,
        assignee=args.asignado,
        status=args.estado,
    )
    report = compute_from_csv(args.csv.read_bytes(), settings=settings, filtro=filtro)
    return build_payload(report, include_tickets=args.tickets)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(DEFAULT_SERVICE)

    try:
        payload = run(args)
    except (OSError, ValueError) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1

    salida = json.dumps(payload, ensure_ascii=False, indent=2)
    if args.out:
        args.out.write_text(salida, encoding="utf-8")
        print(f"[OK] Dashboard escrito en {args.out}")
    else:
        print(salida)
    return 0


if __name__ == "__main__":
    sys.exit(main())
