"""Tests for the store of open documents."""
import threading
from pathlib import Path as _TestPath
import sys

ROOT = _TestPath(__file__).resolve().parents[2]
for _path in (ROOT / 'src', ROOT / 'tests'):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))

from fake_tree import FakeEngine, TreeBuilder
from satysfi_index_mcp.document.store import DocumentStore
from satysfi_index_mcp.grammar.engine import GrammarSyntaxError


def variable_tree(text):
    # every text is a single "let <name> = 1"
    b = TreeBuilder(text)
    name_start = len("let ")
    name_end = text.index(" =")
    pattern = b.node("pattern", b.node("var", start=name_start, end=name_end))
    return b.root(b.node("let_stmt", pattern, start=0, end=len(text)))


class SwitchableEngine(FakeEngine):
    """Fails for texts containing '?'."""

    def parse(self, rule, text):
        if "?" in text:
            raise GrammarSyntaxError("unexpected '?'")
        return variable_tree(text)


def test_set_get_and_remove():
    store = DocumentStore(SwitchableEngine())

    document = store.set("file:///a.saty", "let alpha = 1")

    assert store.get("file:///a.saty") is document
    assert "file:///a.saty" in store
    assert len(store) == 1
    assert [s.name for s in document.environment.variables] == ["alpha"]

    assert store.remove("file:///a.saty") is True
    assert store.get("file:///a.saty") is None
    assert store.remove("file:///a.saty") is False


def test_update_replaces_the_whole_document():
    store = DocumentStore(SwitchableEngine())
    first = store.set("file:///a.saty", "let alpha = 1")

    second = store.set("file:///a.saty", "let beta = 1")

    assert store.get("file:///a.saty") is second
    assert first.text == "let alpha = 1"
    assert [s.name for s in second.environment.variables] == ["beta"]


def test_failed_parse_does_not_affect_other_documents():
    store = DocumentStore(SwitchableEngine())
    good = store.set("file:///good.saty", "let alpha = 1")

    bad = store.set("file:///bad.saty", "let ? = 1")

    assert not bad.has_tree
    assert store.get("file:///good.saty") is good
    assert store.uris() == ["file:///bad.saty", "file:///good.saty"]


def test_concurrent_updates_of_different_documents():
    store = DocumentStore(SwitchableEngine())
    errors = []

    def worker(index):
        try:
            for round_number in range(20):
                store.set(f"file:///doc{index}.saty", f"let v{index}x{round_number} = 1")
        except Exception as e:  # surfaced through the assertion below
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert len(store) == 8
    for index in range(8):
        document = store.get(f"file:///doc{index}.saty")
        assert [s.name for s in document.environment.variables] == [f"v{index}x19"]
