# Nombre de archivo: test_parser.py
# Ubicación de archivo: tests/test_parser.py
# Descripción: Pruebas de parseo de fechas localizadas, duraciones SLA y CSAT

from datetime import datetime

import pytest

from care_core.tickets.parser import (
    normalize_spanish_month,
    parse_created,
    parse_satisfaction,
    parse_sla_hours,
    sla_status,
)
from care_core.tickets.schemas import SlaStatus


def test_normalize_spanish_month_traduce_tokens():
    assert normalize_spanish_month("19/ene/26 12:47 PM") == "19/Jan/26 12:47 PM"
    assert normalize_spanish_month("01/DIC/25 08:00 AM") == "01/Dec/25 08:00 AM"
    assert normalize_spanish_month("01/Jan/25 08:00 AM") == "01/Jan/25 08:00 AM"


def test_parse_created_mediodia_se_mantiene():
    assert parse_created("19/ene/26 12:47 PM") == datetime(2026, 1, 19, 12, 47)


@pytest.mark.parametrize(
    "texto, esperado",
    [
        ("19/ene/26 12:05 AM", datetime(2026, 1, 19, 0, 5)),
        ("3/ago/25 3:15 PM", datetime(2025, 8, 3, 15, 15)),
        ("15/Feb/26 11:59 pm", datetime(2026, 2, 15, 23, 59)),
        ("01/ene/70 10:00 AM", datetime(1970, 1, 1, 10, 0)),
        ("01/ene/69 10:00 AM", datetime(2069, 1, 1, 10, 0)),
    ],
)
def test_parse_created_formatos_validos(texto, esperado):
    assert parse_created(texto) == esperado


@pytest.mark.parametrize(
    "texto",
    ["", None, "2026-01-19 12:47", "30/feb/26 10:00 AM", "19/ene/26 25:00 PM", "19/xyz/26 10:00 AM"],
)
def test_parse_created_invalidos_son_none(texto):
    assert parse_created(texto) is None


def test_sla_limites_de_signo():
    assert parse_sla_hours("0:00") == 0
    assert sla_status(parse_sla_hours("0:00")) is SlaStatus.COMPLIANT
    assert parse_sla_hours("00:00") == 0
    assert sla_status(parse_sla_hours("00:00")) is SlaStatus.COMPLIANT
    assert parse_sla_hours("-0:00") == 0
    assert sla_status(parse_sla_hours("-0:00")) is SlaStatus.COMPLIANT
    assert sla_status(parse_sla_hours("-0:01")) is SlaStatus.BREACHED
    assert parse_sla_hours("") is None
    assert sla_status(parse_sla_hours("")) is SlaStatus.COMPLIANT


def test_parse_sla_hours_formatos():
    assert parse_sla_hours("1.25") == pytest.approx(1.25)
    assert parse_sla_hours("-2,5") == pytest.approx(-2.5)
    assert parse_sla_hours("-0:30") == pytest.approx(-0.5)
    assert parse_sla_hours("1:30") == pytest.approx(1.5)
    assert parse_sla_hours("  3 ") == 3
    assert parse_sla_hours("abc") is None
    assert parse_sla_hours("1h 30m") is None


def test_parse_satisfaction():
    assert parse_satisfaction("4") == 4.0
    assert parse_satisfaction(" 3.5 ") == 3.5
    assert parse_satisfaction("") is None
    assert parse_satisfaction("n/a") is None
    assert parse_satisfaction("nan") is None
