"""End-to-end tests: C# source text -> FileReport."""

import pytest

from cs_inspector.src.cs_inspector.errors import ParseError
from cs_inspector.src.cs_inspector.heuristics import GENERIC_CLASS_ROLE
from cs_inspector.src.cs_inspector.inspector import CSharpInspector
from cs_inspector.src.cs_inspector.models.findings import (
    NO_DEPENDENCIES,
    Assignment,
    Invocation,
    QueryKind,
    QueryLiteral,
    Unrecognized,
)


class TestInspectSource:
    def test_simple_getter(self, inspector):
        report = inspector.inspect_source(
            "public class Calculator\n"
            "{\n"
            "    public int GetTotal(Order o) { var x = 1; return x; }\n"
            "}\n",
            "Calculator.cs",
        )
        (cls,) = report.classes
        assert cls.name == "Calculator"
        assert cls.role == GENERIC_CLASS_ROLE

        (method,) = cls.methods
        assert method.signature == "int GetTotal(Order o)"
        assert method.description.startswith("Obtém informações")
        assert not method.naming_warning
        assert not method.analysis.too_long
        assert method.analysis.findings == [Assignment("x", "1"), Unrecognized("return_statement")]
        assert method.dependencies is NO_DEPENDENCIES

    def test_query_then_tracked_call(self, inspector):
        report = inspector.inspect_source(
            "public class UserRepository\n"
            "{\n"
            "    public void LoadNames()\n"
            "    {\n"
            '        string q = "SELECT name FROM Users";\n'
            "        ExecuteQuery(q);\n"
            "    }\n"
            "}\n"
        )
        method = report.classes[0].methods[0]
        query, _, call = method.analysis.findings
        assert isinstance(query, QueryLiteral)
        assert (query.query.kind, query.query.target_table) == (QueryKind.SELECT, "Users")
        assert isinstance(call, Invocation)
        assert call.arguments[0].tracked.name == "q"
        assert [d.render() for d in method.dependencies] == ["ExecuteQuery()"]

    def test_bindings_do_not_leak_between_methods(self, inspector):
        report = inspector.inspect_source(
            "class A\n"
            "{\n"
            "    void First() { a = 1; }\n"
            "    void Second() { Use(a); }\n"
            "}\n"
        )
        second = report.classes[0].methods[1]
        assert second.analysis.findings[0].arguments[0].tracked is None
        assert second.naming_warning is False

    def test_lowercase_method_and_abstract_body(self, inspector):
        report = inspector.inspect_source(
            "public abstract class BaseService { public abstract void run(); }"
        )
        method = report.classes[0].methods[0]
        assert method.naming_warning
        assert not method.analysis.has_body
        assert method.dependencies is NO_DEPENDENCIES

    def test_strict_mode_rejects_syntax_errors(self, inspector):
        with pytest.raises(ParseError):
            inspector.inspect_source("public class { void (", "Broken.cs")

    def test_lenient_mode_keeps_going(self):
        lenient = CSharpInspector(strict=False)
        report = lenient.inspect_source("public class Ok { void Run() { } }\npublic class { void (")
        assert [c.name for c in report.classes][:1] == ["Ok"]

    def test_unnamed_class_is_skipped_with_diagnostic(self, capsys):
        lenient = CSharpInspector(strict=False)
        report = lenient.inspect_source("public class { void Run() { } }", "Unnamed.cs")
        assert report.classes == []
        assert any("has no name" in d for d in report.diagnostics)
        assert "[WARN]" in capsys.readouterr().err

    def test_named_class_survives_unnamed_sibling(self):
        lenient = CSharpInspector(strict=False)
        report = lenient.inspect_source(
            "public class { void Run() { } }\npublic class Ok { void Run() { } }"
        )
        names = [c.name for c in report.classes]
        assert "Ok" in names
        assert "" not in names

    def test_file_without_classes(self, inspector):
        report = inspector.inspect_source("namespace Empty { }", "Empty.cs")
        assert report.classes == []
        assert report.error is None
