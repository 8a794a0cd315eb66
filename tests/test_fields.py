# Nombre de archivo: test_fields.py
# Ubicación de archivo: tests/test_fields.py
# Descripción: Pruebas de resolución de campos lógicos por encabezados alternativos

from care_core.tickets.config import ORGANIZATION_HEADERS, SLA_RESPONSE_HEADERS
from care_core.tickets.fields import normalize_headers, resolve_field, resolve_text


def test_resolve_field_prefiere_primer_alias_con_contenido():
    row = {"organizations": "  ", "organization": "Acme"}
    assert resolve_field(row, ORGANIZATION_HEADERS) == "Acme"


def test_resolve_field_devuelve_vacio_si_todos_estan_en_blanco():
    row = {"organization": "", "organisation": " "}
    assert resolve_field(row, ORGANIZATION_HEADERS) == ""


def test_resolve_field_ausente_es_none():
    assert resolve_field({"estado": "Open"}, SLA_RESPONSE_HEADERS) is None
    assert resolve_text({"estado": "Open"}, SLA_RESPONSE_HEADERS) == ""


def test_resolve_field_respeta_orden_de_candidatos():
    row = {"sla response": "1", "time to first response": "-2"}
    assert resolve_field(row, SLA_RESPONSE_HEADERS) == "-2"


def test_normalize_headers_recorta_y_pasa_a_minusculas():
    row = normalize_headers({"  Persona Asignada ": " Ana ", "Estado": "Open"})
    assert row == {"persona asignada": " Ana ", "estado": "Open"}
    assert resolve_text(row, ["persona asignada"]) == "Ana"
