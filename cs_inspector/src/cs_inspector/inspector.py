import sys
from typing import Optional

from tree_sitter import Language, Node, Parser, Tree

from cs_inspector.src.cs_inspector.analyzer import MethodAnalyzer
from cs_inspector.src.cs_inspector.dependencies import list_dependencies
from cs_inspector.src.cs_inspector.errors import MalformedNode, ParseError
from cs_inspector.src.cs_inspector.extraction import extract_class, iter_class_nodes
from cs_inspector.src.cs_inspector.heuristics import NamingVerdict, describe_class, describe_method, naming_verdict
from cs_inspector.src.cs_inspector.models.ast_models import ClassDescriptor, MethodDescriptor
from cs_inspector.src.cs_inspector.models.report_models import ClassReport, FileReport, MethodReport
from cs_inspector.src.cs_inspector.tree_sitter_helpers import node_point


# --- Tree-sitter language loading -------------------------------------------

def load_csharp_language() -> Language:
    """
    Loads the Tree-sitter C# grammar for the Python bindings.
    The grammar ships as its own wheel (pip install tree-sitter-c-sharp).
    """
    try:
        import tree_sitter_c_sharp
    except ImportError as e:
        raise RuntimeError(
            "Could not load the C# grammar.\n"
            "- Install `tree-sitter-c-sharp` (pip install tree-sitter-c-sharp)."
        ) from e
    return Language(tree_sitter_c_sharp.language())


# --- The Inspector -----------------------------------------------------------

class CSharpInspector:
    """
    Walks a Tree-sitter C# AST to build a per-file report:
    classes -> methods -> statement findings + call dependencies.
    """

    def __init__(self, strict: bool = True):
        self.language = load_csharp_language()
        self.parser = Parser(self.language)
        self.strict = strict

    def parse(self, source: str) -> Tree:
        """
        Parses a single source string into a Tree-sitter tree.
        """
        return self.parser.parse(source.encode("utf-8"))

    def inspect_source(self, source: str, file_path: Optional[str] = None) -> FileReport:
        """
        Parses & inspects a C# source file. Raises ParseError in strict mode when
        the tree contains syntax errors.
        """
        source_bytes = source.encode("utf-8")
        tree: Tree = self.parse(source)
        root: Node = tree.root_node
        path = file_path or "<source>"

        if self.strict and root.has_error:
            line, col = _first_error_point(root)
            raise ParseError(f"{path}: syntax error near line {line + 1}, col {col + 1}")

        report = FileReport(path=path)
        for class_node in iter_class_nodes(root):
            try:
                descriptor = extract_class(source_bytes, class_node)
            except MalformedNode as e:
                print(f"[WARN] Skipping class in {path}: {e}", file=sys.stderr)
                report.diagnostics.append(str(e))
                continue
            report.classes.append(self.inspect_class(source_bytes, descriptor))
        return report

    def inspect_class(self, source_bytes: bytes, descriptor: ClassDescriptor) -> ClassReport:
        return ClassReport(
            name=descriptor.name,
            role=describe_class(descriptor.name),
            line=descriptor.line,
            col=descriptor.col,
            attributes=list(descriptor.attributes),
            methods=[self.inspect_method(source_bytes, m) for m in descriptor.methods],
            diagnostics=list(descriptor.skipped),
        )

    def inspect_method(self, source_bytes: bytes, method: MethodDescriptor) -> MethodReport:
        # A fresh analyzer per method: variable bindings never leak between methods
        analysis = MethodAnalyzer(source_bytes).analyze(method.body)
        return MethodReport(
            name=method.name,
            signature=method.signature,
            description=describe_method(method.name, method.params),
            naming_warning=naming_verdict(method.name) is NamingVerdict.WARNING,
            analysis=analysis,
            dependencies=list_dependencies(source_bytes, method.node),
            line=method.line,
            col=method.col,
        )


def _first_error_point(root: Node) -> tuple[int, int]:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node_point(node)
        stack.extend(reversed(node.children))
    return node_point(root)
