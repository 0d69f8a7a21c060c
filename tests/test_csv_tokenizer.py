from __future__ import annotations

import unittest

from app.parsers.csv_tokenizer import parse_header, split_csv_line, tokenize_csv, tokenize_csv_lines


class TestSplitCSVLine(unittest.TestCase):
    def test_keeps_commas_inside_quotes(self) -> None:
        fields = split_csv_line('A,"B, still B",C')

        self.assertEqual(fields, ["A", "B, still B", "C"])

    def test_trims_whitespace_around_values(self) -> None:
        self.assertEqual(split_csv_line("  a , b ,c  "), ["a", "b", "c"])

    def test_quote_characters_are_dropped(self) -> None:
        self.assertEqual(split_csv_line('"x",y"z"'), ["x", "yz"])

    def test_doubled_quotes_are_not_unescaped(self) -> None:
        fields = split_csv_line('"say ""hi""",next')

        self.assertEqual(fields, ["say hi", "next"])

    def test_trailing_comma_yields_empty_last_field(self) -> None:
        self.assertEqual(split_csv_line("a,b,"), ["a", "b", ""])


class TestParseHeader(unittest.TestCase):
    def test_strips_quotes_and_whitespace(self) -> None:
        self.assertEqual(
            parse_header(' "Fecha Ingreso" , Producto,"Cargado por"'),
            ["Fecha Ingreso", "Producto", "Cargado por"],
        )


class TestTokenizeCSV(unittest.TestCase):
    def test_empty_text_returns_no_records(self) -> None:
        self.assertEqual(tokenize_csv(""), [])

    def test_header_only_returns_no_records(self) -> None:
        self.assertEqual(tokenize_csv("Fecha Ingreso,Producto"), [])

    def test_header_with_trailing_newline_returns_no_records(self) -> None:
        self.assertEqual(tokenize_csv("Fecha Ingreso,Producto\n"), [])

    def test_builds_header_keyed_records(self) -> None:
        text = "Fecha Ingreso,Cuota Actual,Producto\n2024-03-07,1500,Curso de Python\n"

        records = tokenize_csv(text)

        self.assertEqual(
            records,
            [{"Fecha Ingreso": "2024-03-07", "Cuota Actual": "1500", "Producto": "Curso de Python"}],
        )

    def test_supports_crlf_line_endings(self) -> None:
        text = "a,b\r\n1,2\r\n3,4\r\n"

        records = tokenize_csv(text)

        self.assertEqual(records, [{"a": "1", "b": "2"}, {"a": "3", "b": "4"}])

    def test_skips_blank_lines(self) -> None:
        text = "a,b\n1,2\n   \n\n3,4"

        self.assertEqual(len(tokenize_csv(text)), 2)

    def test_short_line_maps_missing_positions_to_none(self) -> None:
        records = tokenize_csv("a,b,c\n1")

        self.assertEqual(records, [{"a": "1", "b": None, "c": None}])

    def test_extra_values_beyond_header_are_ignored(self) -> None:
        records = tokenize_csv("a,b\n1,2,3,4")

        self.assertEqual(records, [{"a": "1", "b": "2"}])

    def test_quoted_value_with_comma_is_one_field(self) -> None:
        records = tokenize_csv('Producto,Cuota Actual\n"Taller de Arte, Nivel 1",200')

        self.assertEqual(records[0]["Producto"], "Taller de Arte, Nivel 1")
        self.assertEqual(records[0]["Cuota Actual"], "200")

    def test_leading_bom_is_removed_from_first_header(self) -> None:
        records = tokenize_csv("\ufeffa,b\n1,2")

        self.assertIn("a", records[0])


class TestTokenizeCSVLines(unittest.TestCase):
    def test_line_numbers_count_the_header_as_line_one(self) -> None:
        numbered = tokenize_csv_lines("a,b\n1,2\n3,4")

        self.assertEqual([n for n, _ in numbered], [2, 3])

    def test_blank_lines_keep_their_place_in_the_numbering(self) -> None:
        numbered = tokenize_csv_lines("a,b\n1,2\n   \n\n3,4\n")

        self.assertEqual(numbered, [(2, {"a": "1", "b": "2"}), (5, {"a": "3", "b": "4"})])

    def test_crlf_lines_are_numbered_like_lf(self) -> None:
        numbered = tokenize_csv_lines("a\r\n1\r\n\r\n2\r\n")

        self.assertEqual([n for n, _ in numbered], [2, 4])

    def test_records_match_tokenize_csv(self) -> None:
        text = "a,b\n1,2\n\n3"

        self.assertEqual([r for _, r in tokenize_csv_lines(text)], tokenize_csv(text))
