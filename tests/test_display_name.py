from __future__ import annotations

import pytest

from app.mappers.display_name import clean_display_name


class TestCleanDisplayName:
    @pytest.mark.parametrize(
        "full_name, expected",
        [
            ("Curso de Python", "PYTHON"),
            ("curso DE python", "PYTHON"),
            ("Carrera de Diseño", "DISEÑO"),
            ("Especialización en Datos", "DATOS"),
            ("Taller de Cerámica", "CERÁMICA"),
            ("Marketing", "MARKETING"),
        ],
    )
    def test_strips_filler_prefix_and_uppercases(self, full_name: str, expected: str) -> None:
        assert clean_display_name(full_name) == expected

    def test_prefix_only_stripped_at_front(self) -> None:
        assert clean_display_name("Python Curso de Verano") == "PYTHON CURSO DE VERA…"

    def test_stacked_prefixes_are_all_stripped(self) -> None:
        assert clean_display_name("Taller de Curso de Arte") == "ARTE"

    def test_prefix_must_end_on_word_boundary(self) -> None:
        assert clean_display_name("Curso decorativo") == "CURSO DECORATIVO"

    def test_long_name_is_truncated_with_ellipsis(self) -> None:
        label = clean_display_name("Curso de Administración de Empresas Avanzada")

        assert label == "ADMINISTRACIÓN DE EM…"
        assert len(label) == 21

    def test_name_at_max_length_is_not_truncated(self) -> None:
        assert clean_display_name("x" * 20) == "X" * 20

    def test_custom_length_and_prefixes(self) -> None:
        label = clean_display_name(
            "Workshop on Testing Tools",
            filler_prefixes=("Workshop on",),
            max_length=5,
            ellipsis="...",
        )

        assert label == "TESTI..."

    @pytest.mark.parametrize("full_name", [None, "", "   "])
    def test_blank_name_gets_placeholder(self, full_name: str | None) -> None:
        assert clean_display_name(full_name) == "S/N"

    def test_name_that_is_only_a_prefix_keeps_original(self) -> None:
        assert clean_display_name("Curso de") == "CURSO DE"
