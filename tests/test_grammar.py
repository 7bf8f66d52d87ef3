import logging

import pytest

from dtree.errors import DTreeSyntaxError, ErrorKind
from dtree.grammar import (
    MappingFragment,
    SectionFragment,
    mapping_declaration,
    parse_fragments,
    section_declaration,
)
from dtree.lexer import Cursor, NoMatch


def test_section_declaration_stops_before_newline() -> None:
    cursor = Cursor("[ a ] hello \nasdf")
    fragment = section_declaration(cursor)
    assert fragment == SectionFragment(name="a", description="hello ", offset=0)
    assert cursor.remaining() == "\nasdf"


def test_section_description_joins_escaped_newline() -> None:
    cursor = Cursor("[a] hello\\\naaaa")
    assert section_declaration(cursor).description == "hello\naaaa"
    assert cursor.at_end()


def test_mapping_declaration_single_trigger() -> None:
    cursor = Cursor(" [ a (b) -> c ] adf")
    fragment = mapping_declaration(cursor)
    assert fragment == MappingFragment(
        parent="a", triggers=("b",), destination="c", description="adf", offset=1
    )


def test_mapping_declaration_unescapes_trigger_and_description() -> None:
    cursor = Cursor("[ a123 (b\\)a\\d)->c] adf \\\nhello\na")
    fragment = mapping_declaration(cursor)
    assert fragment.parent == "a123"
    assert fragment.triggers == ("b)a\\d",)
    assert fragment.destination == "c"
    assert fragment.description == "adf \nhello"
    assert cursor.remaining() == "\na"


def test_mapping_declaration_multiple_triggers() -> None:
    fragment = mapping_declaration(Cursor("[ a123 (b) | (e)->c] adf"))
    assert fragment.triggers == ("b", "e")


def test_mapping_requires_a_trigger() -> None:
    cursor = Cursor("[a -> b] nope")
    with pytest.raises(NoMatch):
        mapping_declaration(cursor)
    assert cursor.pos == 0


def test_section_text_is_not_a_mapping() -> None:
    with pytest.raises(NoMatch):
        mapping_declaration(Cursor("[a] (x) -> b"))


def test_parse_fragments_keeps_source_order() -> None:
    text = "[start] Hi\n[start (go) -> end] Go\n[end] Bye\n"
    fragments = parse_fragments(text)
    assert [type(fragment) for fragment in fragments] == [
        SectionFragment,
        MappingFragment,
        SectionFragment,
    ]
    assert [fragment.offset for fragment in fragments] == [0, 11, 34]


@pytest.mark.parametrize("text", ["", "   ", "\n\n\t\n"])
def test_parse_fragments_accepts_blank_input(text: str) -> None:
    assert parse_fragments(text) == []


def test_parse_fragments_accepts_final_entry_without_newline() -> None:
    fragments = parse_fragments("[a] one\n[b]")
    assert fragments[-1] == SectionFragment(name="b", description="", offset=8)


def test_parse_fragments_does_not_check_names() -> None:
    fragments = parse_fragments("[a] one\n[a] two\n[ghost (x) -> nowhere]")
    assert len(fragments) == 3


def test_parse_fragments_reports_syntax_error_position() -> None:
    with pytest.raises(DTreeSyntaxError) as excinfo:
        parse_fragments("[a] fine\n  oops [b]\n")
    err = excinfo.value
    assert err.kind is ErrorKind.SYNTAX
    assert (err.offset, err.line, err.column) == (11, 2, 3)
    assert "oops" in str(err)


def test_parse_fragments_rejects_unclosed_section_name() -> None:
    with pytest.raises(DTreeSyntaxError):
        parse_fragments("[a b] text\n")


@pytest.mark.parametrize(
    "tail",
    ["[a (go", "[a (go) -", "[", "[ ", "[a (go) ->", "[a (go) -> "],
)
def test_parse_fragments_drops_truncated_tail(caplog: pytest.LogCaptureFixture, tail: str) -> None:
    with caplog.at_level(logging.WARNING, logger="dtree.grammar"):
        fragments = parse_fragments("[a] one\n" + tail)
    assert fragments == [SectionFragment(name="a", description="one", offset=0)]
    assert "incomplete declaration" in caplog.text
