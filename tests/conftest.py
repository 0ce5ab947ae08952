from __future__ import annotations

import pytest

from cs_inspector.src.cs_inspector.analyzer import MethodAnalyzer
from cs_inspector.src.cs_inspector.inspector import CSharpInspector
from cs_inspector.src.cs_inspector.tree_sitter_helpers import iter_descendants


def wrap_statements(statements: str, signature: str = "public void Run()") -> str:
    """Puts a statement snippet inside `class Sample { <signature> { ... } }`."""
    return (
        "public class Sample\n"
        "{\n"
        f"    {signature}\n"
        "    {\n"
        f"{statements}\n"
        "    }\n"
        "}\n"
    )


@pytest.fixture(scope="session")
def inspector() -> CSharpInspector:
    """Loading the grammar is the slow part; share one inspector."""
    return CSharpInspector()


@pytest.fixture
def parse_method(inspector):
    """Returns (source_bytes, method_declaration node) for a statement snippet."""

    def _parse(statements: str, signature: str = "public void Run()"):
        source = wrap_statements(statements, signature)
        tree = inspector.parse(source)
        assert not tree.root_node.has_error, source
        method = next(iter_descendants(tree.root_node, "method_declaration"))
        return source.encode("utf-8"), method

    return _parse


@pytest.fixture
def analyze(parse_method):
    """Runs a fresh MethodAnalyzer over a snippet; returns (analyzer, analysis)."""

    def _analyze(statements: str):
        source_bytes, method = parse_method(statements)
        analyzer = MethodAnalyzer(source_bytes)
        return analyzer, analyzer.analyze(method.child_by_field_name("body"))

    return _analyze


class FakeNode:
    """
    Just enough of tree_sitter.Node to drive the extractor and analyzer over
    shapes the C# grammar itself refuses to build (bare literal statements,
    declarations with missing children).
    """

    def __init__(self, type, start=0, end=0, children=(), fields=None, named=True, line=0):
        self.type = type
        self.start_byte = start
        self.end_byte = end
        self.children = list(children)
        self.fields = fields or {}
        self.is_named = named
        self.start_point = (line, 0)

    def child_by_field_name(self, name):
        return self.fields.get(name)

    def children_by_field_name(self, name):
        found = self.fields.get(name)
        return [found] if found is not None else []


def fake_span(source: str, fragment: str, type: str, **kwargs) -> FakeNode:
    """A FakeNode covering the first occurrence of fragment in source."""
    start = len(source[:source.index(fragment)].encode("utf-8"))
    return FakeNode(type, start, start + len(fragment.encode("utf-8")), **kwargs)


def fake_block(source: str, *statements: FakeNode) -> FakeNode:
    return FakeNode("block", 0, len(source.encode("utf-8")), children=statements)


@pytest.fixture
def fake():
    """Namespace with the fake-node builders."""

    class _Fake:
        node = FakeNode
        span = staticmethod(fake_span)
        block = staticmethod(fake_block)

    return _Fake
