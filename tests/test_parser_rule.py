"""
Tests for the rule-based parser: contact regexes, section slicing and the
list fields built on top of it.
"""
import re

import pytest

from resume_extract.parser_rule import fold, guess_location, guess_name, parse_resume_rule, section

SAMPLE = "\n".join(
    [
        "Alejandro Ortiz Alvarez",
        "Director de Proyectos con más de 20 años de experiencia",
        "Email: alejandro.ortiz@example.com",
        "Teléfono: +34 600 123 456",
        "Fecha de nacimiento: 14/03/1975",
        "Ubicación: Las Rozas - Madrid",
        "",
        "EXPERIENCIA",
        "GRUPO YPS CONSTRUCCIONES (2020-2025)",
        "FORMACIÓN",
        "Administración y Dirección de Empresas",
        "IDIOMAS",
        "• Castellano - Nativo",
        "• Inglés - Nivel medio",
        "- Francés (Básico)",
        "INFORMATICA",
        "MS Project • Power BI",
        "OTROS",
        "Carnet de conducir",
    ]
)


def test_scenario_contact_and_lists():
    text = "Email: x@y.com\nTeléfono: +34 611 222 333\nIDIOMAS\nInglés - Medio\nHABILIDADES\nExcel"
    assert parse_resume_rule(text) == {
        "email": "x@y.com",
        "phone": "+34 611 222 333",
        "languages": ["Inglés - Medio"],
        "skills": ["Excel"],
    }


def test_full_sample():
    out = parse_resume_rule(SAMPLE)
    assert out["name"] == "Alejandro Ortiz Alvarez"
    assert out["email"] == "alejandro.ortiz@example.com"
    assert out["phone"] == "+34 600 123 456"
    assert out["birthDate"] == "14/03/1975"
    assert out["location"] == "Las Rozas - Madrid"
    assert out["languages"] == [
        "Castellano - Nativo",
        "Inglés - Nivel medio",
        "Francés - Básico",
    ]
    assert out["skills"] == ["MS Project", "Power BI"]


def test_idempotent():
    assert parse_resume_rule(SAMPLE) == parse_resume_rule(SAMPLE)
    assert repr(parse_resume_rule(SAMPLE)) == repr(parse_resume_rule(SAMPLE))


def test_missing_fields_are_absent_not_empty():
    out = parse_resume_rule("nothing useful here")
    assert out == {"languages": [], "skills": []}


def test_empty_text():
    assert parse_resume_rule("") == {"languages": [], "skills": []}


class TestSection:
    TEXT = "Intro\nEXPERIENCIA\nAcme Corp\nJefe de obra\nformación\nUniversidad"

    def test_between_headers(self):
        assert section(self.TEXT, "EXPERIENCIA") == "Acme Corp\nJefe de obra"

    def test_case_insensitive_title_and_boundary(self):
        text = "experiencia\nAcme\nIdiomas\nInglés"
        assert section(text, "EXPERIENCIA") == "Acme"
        assert section(text, "idiomas") == "Inglés"

    def test_regex_title(self):
        assert section(self.TEXT, re.compile(r"experiencia", re.I)) == "Acme Corp\nJefe de obra"

    def test_accent_insensitive_boundary(self):
        text = "IDIOMAS\nInglés\nFORMACION\nGrado"
        assert section(text, "IDIOMAS") == "Inglés"

    def test_missing_title(self):
        assert section(self.TEXT, "IDIOMAS") == ""

    def test_runs_to_end_without_next_header(self):
        assert section(self.TEXT, "FORMACIÓN") == "Universidad"

    def test_header_line_text_is_not_section_body(self):
        assert section("IDIOMAS: Inglés, Francés\nOTROS\nx", "IDIOMAS") == ""
        assert section("IDIOMAS: Inglés\nFrancés\nOTROS\nx", "IDIOMAS") == "Francés"

    def test_custom_headers(self):
        text = "SKILLS\nPython\nEDUCATION\nMIT"
        assert section(text, "SKILLS", headers=("SKILLS", "EDUCATION")) == "Python"
        # unknown boundary: runs to the end
        assert section(text, "SKILLS", headers=("SKILLS",)) == "Python\nEDUCATION\nMIT"


def test_inline_lists_split_on_commas():
    text = "IDIOMAS: Castellano (Nativo), Inglés (Medio)\nHABILIDADES: Gestión de proyectos, MS Project"
    out = parse_resume_rule(text)
    assert out["languages"] == ["Castellano - Nativo", "Inglés - Medio"]
    assert out["skills"] == ["Gestión de proyectos", "MS Project"]


def test_skills_sections_in_source_order():
    text = "HABILIDADES\nLiderazgo\nINFORMATICA\nExcel"
    assert parse_resume_rule(text)["skills"] == ["Liderazgo", "Excel"]


def test_duplicates_kept():
    assert parse_resume_rule("HABILIDADES\nExcel\nExcel")["skills"] == ["Excel", "Excel"]


@pytest.mark.parametrize(
    "text,expected",
    [
        ("Tel: 611222333", "611222333"),
        ("Móvil +34  611 22 23 33", "+34 611 22 23 33"),
        ("Año 2020", None),
        ("DNI: 12345678Z", None),
        ("DNI 12345678Z  Tel 611 222 333", "611 222 333"),
    ],
)
def test_phone(text, expected):
    assert parse_resume_rule(text).get("phone") == expected


def test_email_is_case_insensitive():
    assert parse_resume_rule("MAIL: ANA.LOPEZ@EXAMPLE.ES")["email"] == "ANA.LOPEZ@EXAMPLE.ES"


class TestName:
    def test_skips_labelled_lines(self):
        lines = ["Email: ana@example.com", "Ana García López", "EXPERIENCIA", "Acme"]
        assert guess_name(lines, ("EXPERIENCIA",)) == "Ana García López"

    def test_ignores_body_lines(self):
        lines = ["Email: ana@example.com", "IDIOMAS", "Inglés Medio"]
        assert guess_name(lines, ("IDIOMAS",)) is None

    def test_skips_document_title(self):
        lines = ["Curriculum Vitae", "Ana López"]
        assert guess_name(lines, ()) == "Ana López"


class TestLocation:
    def test_gazetteer(self):
        lines = ["Ana López", "C/ Real 12, Las Rozas"]
        assert guess_location(lines, (), ("Las Rozas",)) == "C/ Real 12, Las Rozas"

    def test_only_contact_block(self):
        lines = ["Ana López", "EXPERIENCIA", "Oficina de Madrid"]
        assert guess_location(lines, ("EXPERIENCIA",), ("Madrid",)) is None

    def test_labelled(self):
        assert guess_location(["Address: 1 Main St, Boston"], (), ()) == "1 Main St, Boston"

    def test_email_and_url_lines_are_not_locations(self):
        text = "Ana López\nEmail: ana@madridconsulting.es\nwww.madrid-portfolio.com\nIDIOMAS\nInglés"
        assert "location" not in parse_resume_rule(text)

    def test_whole_words_only(self):
        assert guess_location(["Ana López", "Madridejos, Toledo"], (), ("Madrid",)) is None
        assert guess_location(["Ana López", "Calle Sol 3, Madrid"], (), ("Madrid",)) == "Calle Sol 3, Madrid"


def test_fold():
    assert fold("  Formación ") == "FORMACION"
