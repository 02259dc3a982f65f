"""Tests for doc-comment block extraction."""

import textwrap
from pathlib import Path

import pytest

from docmark.parsers.extractor import (
    DocCommentParser,
    classify_line,
    extract,
    parse_type_expr,
)
from docmark.parsers.structure import LineKind, ParamField, ReturnField


@pytest.fixture
def parser() -> DocCommentParser:
    """Create a DocCommentParser with default markers."""
    return DocCommentParser()


class TestParseTypeExpr:
    """Tests for type expression parsing."""

    def test_single_type(self) -> None:
        assert parse_type_expr("int") == ("int",)

    def test_union(self) -> None:
        assert parse_type_expr("[int | float]") == ("int", "float")

    def test_union_without_spaces(self) -> None:
        assert parse_type_expr("[a|b|c]") == ("a", "b", "c")

    def test_empty_alternative_retained(self) -> None:
        assert parse_type_expr("[int | ]") == ("int", "")

    def test_empty_brackets(self) -> None:
        assert parse_type_expr("[]") == ("",)


class TestClassifyLine:
    """Tests for single-line classification."""

    def test_leading_text_is_description(self) -> None:
        kind, match = classify_line("some text")
        assert kind is LineKind.DESCRIPTION
        assert match is None

    def test_text_after_tag_is_unmatched(self) -> None:
        kind, _ = classify_line("some text", seen_tag=True)
        assert kind is LineKind.UNMATCHED

    def test_param_line(self) -> None:
        kind, match = classify_line("@param url string")
        assert kind is LineKind.PARAM
        assert match.group("name") == "url"

    def test_return_line(self) -> None:
        kind, match = classify_line("@return Response ok")
        assert kind is LineKind.RETURN
        assert match.group("type") == "Response"

    def test_unknown_tag(self) -> None:
        kind, _ = classify_line("@author someone")
        assert kind is LineKind.UNMATCHED

    def test_param_without_type(self) -> None:
        kind, _ = classify_line("@param lonely")
        assert kind is LineKind.UNMATCHED

    def test_return_without_type(self) -> None:
        kind, _ = classify_line("@return")
        assert kind is LineKind.UNMATCHED

    def test_custom_tag_marker(self) -> None:
        kind, _ = classify_line(":param x int", tag_marker=":")
        assert kind is LineKind.PARAM


class TestExtract:
    """Tests for extracting a DocRecord from one block."""

    def test_request_example(self) -> None:
        block = textwrap.dedent("""\
            sends a request
            @param url string
            @param retries int = 3 number of retries
            @param timeout ms = 5000 request timeout
            @return Response description
        """)
        record = extract(block)
        assert record.description == "sends a request"
        assert record.params == (
            ParamField(name="url", type_alternatives=("string",)),
            ParamField(
                name="retries",
                type_alternatives=("int",),
                default="3",
                description="number of retries",
            ),
            ParamField(
                name="timeout",
                type_alternatives=("ms",),
                default="5000",
                description="request timeout",
            ),
        )
        assert record.return_field == ReturnField(
            type_name="Response", description="description"
        )

    def test_union_with_default(self) -> None:
        record = extract("@param cols [int | array] = 1 Number of columns\n")
        param = record.params[0]
        assert param.type_alternatives == ("int", "array")
        assert param.default == "1"
        assert param.description == "Number of columns"
        assert param.is_union

    def test_no_default(self) -> None:
        record = extract("@param name string the name\n")
        assert record.params[0].default is None
        assert record.params[0].description == "the name"

    def test_default_is_opaque(self) -> None:
        record = extract('@param mode str = "fast" run mode\n')
        assert record.params[0].default == '"fast"'

    def test_default_without_spaces(self) -> None:
        record = extract("@param n [int|float]=2 count\n")
        param = record.params[0]
        assert param.type_alternatives == ("int", "float")
        assert param.default == "2"
        assert param.description == "count"

    def test_description_only(self) -> None:
        record = extract("first line\nsecond line\n")
        assert record.description == "first line second line"
        assert record.params == ()
        assert record.return_field is None

    def test_description_trimmed(self) -> None:
        record = extract("  padded text  \n\n")
        assert record.description == "padded text"

    def test_blank_line_in_description(self) -> None:
        record = extract("title\n\nbody\n@return int x\n")
        assert record.description == "title  body"

    def test_empty_block(self) -> None:
        record = extract("")
        assert record.description == ""
        assert record.params == ()
        assert record.return_field is None

    def test_only_first_return_kept(self) -> None:
        record = extract("@return int first\n@return str second\n")
        assert record.return_field == ReturnField(type_name="int", description="first")

    def test_return_without_description(self) -> None:
        record = extract("@return bool\n")
        assert record.return_field == ReturnField(type_name="bool", description="")

    def test_return_has_no_union_syntax(self) -> None:
        record = extract("@return [int | str] either one\n")
        assert record.return_field.type_name == "[int"
        assert record.return_field.description == "| str] either one"

    def test_param_order_preserved(self) -> None:
        record = extract("@param b int\n@param a int\n@param c int\n")
        assert [p.name for p in record.params] == ["b", "a", "c"]

    def test_duplicate_params_kept(self) -> None:
        record = extract("@param x int first\n@param x str second\n")
        assert len(record.params) == 2
        assert record.params[1].type_alternatives == ("str",)

    def test_malformed_lines_dropped(self) -> None:
        block = textwrap.dedent("""\
            does a thing
            @param
            @param x int ok
            @see elsewhere
            stray text after tags
            @return
        """)
        record = extract(block)
        assert record.description == "does a thing"
        assert [p.name for p in record.params] == ["x"]
        assert record.return_field is None

    def test_text_after_first_tag_not_in_description(self) -> None:
        record = extract("lead\n@param x int\ntrailing words\n")
        assert record.description == "lead"

    def test_unknown_tag_ends_description(self) -> None:
        record = extract("lead\n@since 1.0\nmore\n")
        assert record.description == "lead"

    def test_return_before_params(self) -> None:
        record = extract("@return int n\n@param x int\n")
        assert record.return_field.type_name == "int"
        assert record.params[0].name == "x"

    def test_indented_tag_lines(self) -> None:
        record = extract("  @param x int spaced\n")
        assert record.params[0].description == "spaced"

    def test_line_separator_kept_in_description(self) -> None:
        record = extract("one\u2028two\n@param x int\n")
        assert record.description == "one\u2028two"
        assert record.params[0].name == "x"

    def test_form_feed_kept_in_param_description(self) -> None:
        record = extract("@param x int page\x0cbreak\n")
        assert record.params[0].description == "page\x0cbreak"


class TestDocCommentParser:
    """Tests for the parser facade."""

    def test_parse_source(self, parser: DocCommentParser) -> None:
        source = textwrap.dedent("""\
            /// Adds numbers. Returns the sum.
            /// @param a int
            /// @param b int
            /// @return int the sum
            fn add(a: i32, b: i32) -> i32 { a + b }

            /// Subtracts.
            fn sub() {}
        """)
        doc_file = parser.parse_source(source, "math.rs")
        assert doc_file.file_path == "math.rs"
        assert len(doc_file.records) == 2
        assert doc_file.records[0].return_field.type_name == "int"
        assert doc_file.records[1].description == "Subtracts."

    def test_parse_source_without_docs(self, parser: DocCommentParser) -> None:
        assert parser.parse_source("fn main() {}\n").records == []

    def test_parse_file(self, parser: DocCommentParser, tmp_path: Path) -> None:
        path = tmp_path / "lib.rs"
        path.write_text("/// Hello. World.\nfn x() {}\n", encoding="utf-8")
        doc_file = parser.parse_file(str(path))
        assert doc_file.file_path == str(path)
        assert doc_file.records[0].description == "Hello. World."

    def test_parse_missing_file(self, parser: DocCommentParser) -> None:
        with pytest.raises(FileNotFoundError):
            parser.parse_file("/nonexistent/lib.rs")

    def test_custom_markers(self) -> None:
        parser = DocCommentParser(marker="#:", tag_marker=":")
        doc_file = parser.parse_source("#: Hi. There.\n#: :param x int\n")
        assert doc_file.records[0].params[0].name == "x"
