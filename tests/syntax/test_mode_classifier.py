"""Tests for cursor mode classification."""
from pathlib import Path as _TestPath
import sys

ROOT = _TestPath(__file__).resolve().parents[2]
for _path in (ROOT / 'src', ROOT / 'tests'):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))

from fake_tree import TreeBuilder, cursor
from satysfi_index_mcp.syntax.mode import Mode, classify
from satysfi_index_mcp.syntax.position import Position
from satysfi_index_mcp.syntax.rules import Rule
from satysfi_index_mcp.syntax.tree import SyntaxNode

# math containing horizontal text containing a string literal
NESTED = "${a{x `lit` y}b}"


def build_nested_tree():
    b = TreeBuilder(NESTED)
    literal = b.node("string_literal", b.leaf("string_interior", "lit"),
                     start=b.find("`"), end=b.find("`", b.find("lit")) + 1)
    horizontal = b.node("horizontal_mode",
                        b.node("horizontal_single", b.leaf("horizontal_text", "x"), literal,
                               b.leaf("horizontal_text", "y")),
                        start=b.find("{", 2), end=b.find("}") + 1)
    math = b.node("math_mode", b.leaf("math_text", "a"), horizontal, b.leaf("math_text", "b"),
                  start=0, end=len(NESTED))
    return SyntaxNode.from_parse_node(b.root(math))


def test_empty_chain_is_program_mode():
    assert classify([]) is Mode.PROGRAM


def test_innermost_recognised_rule_wins():
    root = build_nested_tree()

    assert root.mode(cursor(NESTED, "lit", delta=1)) is Mode.LITERAL
    assert root.mode(cursor(NESTED, "x")) is Mode.HORIZONTAL
    assert root.mode(cursor(NESTED, "a")) is Mode.MATH
    assert root.mode(cursor(NESTED, "b}", delta=1)) is Mode.MATH
    # Right after the closing brace the horizontal text still claims the cursor.
    assert root.mode(cursor(NESTED, "b}")) is Mode.HORIZONTAL


def test_unrecognised_rules_default_to_program():
    text = "let x = 1"
    b = TreeBuilder(text)
    root = SyntaxNode.from_parse_node(
        b.root(b.node("let_stmt", b.node("pattern", b.leaf("var", "x")), b.leaf("int", "1"), start=0))
    )

    assert root.mode(cursor(text, "x")) is Mode.PROGRAM
    assert root.mode(Position(10, 0)) is Mode.PROGRAM


def test_command_expression_argument_returns_to_program_mode():
    text = "{\\foo(x)}"
    b = TreeBuilder(text)
    command = b.node("inline_cmd", b.leaf("inline_cmd_name", "\\foo"),
                     b.node("cmd_expr_arg", b.leaf("var", "x"), start=b.find("("), end=b.find(")") + 1))
    root = SyntaxNode.from_parse_node(
        b.root(b.node("horizontal_mode", b.node("horizontal_single", command), start=0, end=len(text)))
    )

    assert root.mode(cursor(text, "x")) is Mode.PROGRAM
    assert root.mode(cursor(text, "foo")) is Mode.HORIZONTAL


def test_headers_and_comments():
    text = "@stage: 1\n% note\n"
    b = TreeBuilder(text)
    headers = b.node("headers", b.node("header_stage", b.leaf("stage", "1"), start=0))
    root = SyntaxNode.from_parse_node(b.root(headers, b.leaf("comment", "% note")))

    assert root.mode(cursor(text, "stage")) is Mode.HEADER
    assert root.mode(cursor(text, "note")) is Mode.COMMENT


def test_classify_accepts_rule_enum_members():
    text = "'<>"
    b = TreeBuilder(text)
    root = SyntaxNode.from_parse_node(b.root(b.leaf(Rule.VERTICAL_MODE, "'<>")))

    assert root.mode(Position(0, 1)) is Mode.VERTICAL
