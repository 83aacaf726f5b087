"""Tests for building documents and querying them."""
import logging
from pathlib import Path as _TestPath
import sys

import pytest

ROOT = _TestPath(__file__).resolve().parents[2]
for _path in (ROOT / 'src', ROOT / 'tests'):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))

from fake_tree import FakeEngine, TreeBuilder, cursor
from satysfi_index_mcp.document.document import Document, build_document
from satysfi_index_mcp.grammar.engine import EnginePosition, GrammarSyntaxError
from satysfi_index_mcp.syntax.mode import Mode
from satysfi_index_mcp.syntax.position import Position, Range
from satysfi_index_mcp.syntax.tree import InvariantViolation, SyntaxNode

TEXT = "let-inline \\em = {a}"


def build_tree(text):
    b = TreeBuilder(text)
    statement = b.node("let_inline_stmt", b.leaf("inline_cmd_name", "\\em"),
                       b.node("horizontal_mode", b.node("horizontal_single", b.leaf("horizontal_text", "a")),
                              start=b.find("{"), end=len(text)),
                       start=0)
    return b.root(b.node("preamble", statement))


def test_build_document_parses_from_program_rule():
    engine = FakeEngine(build=build_tree)

    document = build_document(TEXT, engine)

    assert engine.calls == [("program", TEXT)]
    assert document.has_tree
    assert document.errors == ()
    assert [s.name for s in document.environment.inline_cmds] == ["\\em"]


def test_document_mode_and_substring():
    document = build_document(TEXT, FakeEngine(build=build_tree))

    assert document.mode(cursor(TEXT, "a}")) is Mode.HORIZONTAL
    assert document.mode(cursor(TEXT, "em")) is Mode.PROGRAM

    leaves = list(document.root.leaves())
    assert [document.substring(leaf) for leaf in leaves] == ["\\em", "a"]


def test_parse_failure_yields_document_without_tree(caplog):
    error = GrammarSyntaxError("Unexpected end of input", EnginePosition(8, 1, 9))
    caplog.set_level(logging.DEBUG, logger="satysfi_index_mcp.document.document")

    document = build_document("let x = ", FakeEngine(error=error))

    assert document.root is None
    assert not document.has_tree
    assert len(document.environment) == 0
    assert document.errors == (error,)
    assert document.mode(Position(0, 3)) is Mode.PROGRAM
    assert document.dig(Position(0, 3)) == []
    assert "Unexpected end of input" in caplog.text


def test_summary_reports_parse_errors():
    error = GrammarSyntaxError("bad token", EnginePosition(4, 1, 5))

    summary = build_document("let ?", FakeEngine(error=error)).summary()

    assert summary["parsed"] is False
    assert summary["symbol_count"] == 0
    assert summary["errors"] == [{"message": "bad token", "line": 0, "character": 4}]


def test_substring_of_foreign_node_is_an_invariant_violation(caplog):
    document = build_document(TEXT, FakeEngine(build=build_tree))
    foreign = SyntaxNode("var", Range(Position(3, 0, 100), Position(3, 4, 104)))

    with caplog.at_level(logging.ERROR):
        with pytest.raises(InvariantViolation):
            document.substring(foreign)

    assert any(record.levelno == logging.ERROR for record in caplog.records)


def test_tree_not_fitting_text_is_discarded():
    # Engine reports spans of a longer text than the one analyzed.
    engine = FakeEngine(build=lambda text: build_tree(TEXT + "   "))

    document = build_document(TEXT[:12], engine)

    assert document.root is None
    assert isinstance(document.errors[0], InvariantViolation)


def test_documents_are_immutable():
    document = build_document(TEXT, FakeEngine(build=build_tree))

    with pytest.raises(AttributeError):
        document.text = "other"


def test_pretty_text_of_unparsed_document_is_empty():
    assert Document(text="x").pretty_text() == ""


def test_deeply_nested_inline_commands_keep_their_tree():
    depth = 300
    text = "{" + "\\a{" * depth + "x" + "}" * depth + "}"

    document = build_document(text)

    assert document.has_tree
    assert len(document.root.pickup("inline_cmd")) == depth
    assert document.mode(cursor(text, "x")) is Mode.HORIZONTAL
    assert document.pretty_text().count("[inline_cmd]") == depth


def test_long_let_chain_keeps_its_tree():
    text = "let a = 1 in " * 500 + "a"

    document = build_document(text)

    assert document.has_tree
    assert len(document.environment.variables) == 500
    assert document.mode(Position(0, len(text) - 1)) is Mode.PROGRAM
