# --- Statement / expression analysis of a method body ------------------------
"""
Classifies the top-level statements of one method body.

The walk is deliberately shallow: only the statements directly inside the
method's block are dispatched. Loop bodies are not visited at all, and the
branches of if/try statements are only listed one level deep as text. Variable
tracking therefore only sees assignments made at the top level of the method.

One MethodAnalyzer is created per method. Its `bindings` map (variable name ->
text of the last value assigned to it) lives exactly as long as that instance.
"""
import sys
from typing import Callable, Optional

from cs_inspector.src.cs_inspector.models.findings import (
    Argument,
    Assignment,
    BinaryComputation,
    CatchClause,
    Conditional,
    DoWhileLoop,
    ForLoop,
    Invocation,
    MethodAnalysis,
    QueryLiteral,
    StatementClassification,
    TryCatch,
    Unrecognized,
    VariableReference,
    WhileLoop,
)
from cs_inspector.src.cs_inspector.queries import (
    STRING_LITERAL_TYPES,
    classify_query,
    is_query_literal,
    literal_value,
)
from cs_inspector.src.cs_inspector.tree_sitter_helpers import (
    first_named_child,
    named_children,
    node_point,
    node_text,
    parenthesized,
)

MAX_STATEMENTS = 20

HTTP_CALL_MARKERS = ("httpclient", "getasync", "postasync", "putasync", "deleteasync", "sendasync")
SQL_CALL_MARKERS = ("sqlcommand", "executereader", "executenonquery", "executescalar")


class MethodAnalyzer:
    """
    Walks one method body and produces its StatementClassification findings.

    Usage:
        analysis = MethodAnalyzer(source_bytes).analyze(method.body)
    """

    def __init__(self, source_bytes: bytes):
        self.source_bytes = source_bytes
        self.bindings: dict[str, str] = {}
        self._diagnostics: list[str] = []
        self._statement_handlers: dict[str, Callable] = {
            "for_statement": self._for_statement,
            "while_statement": self._while_statement,
            "do_statement": self._do_statement,
            "if_statement": self._if_statement,
            "try_statement": self._try_statement,
            "expression_statement": self._expression_statement,
            "local_declaration_statement": self._local_declaration,
        }

    def analyze(self, body) -> MethodAnalysis:
        if body is None:
            return MethodAnalysis(has_body=False)

        findings: list[StatementClassification] = []
        statements = named_children(body)
        for statement in statements:
            handler = self._statement_handlers.get(statement.type)
            if handler is None:
                findings.append(Unrecognized(statement.type))
            else:
                findings.extend(handler(statement))

        return MethodAnalysis(
            findings=findings,
            statement_count=len(statements),
            too_long=len(statements) > MAX_STATEMENTS,
            diagnostics=list(self._diagnostics),
        )

    # -- Helpers --------------------------------------------------------------

    def _text(self, node) -> str:
        return node_text(self.source_bytes, node)

    def _skip(self, node, what: str):
        """Records a sub-finding that could not be read; analysis carries on."""
        line, _ = node_point(node)
        message = f"{what} at line {line + 1} could not be read"
        print(f"[WARN] {message}", file=sys.stderr)
        self._diagnostics.append(message)

    def _tracked(self, name: str) -> Optional[VariableReference]:
        if name in self.bindings:
            return VariableReference(name, self.bindings[name])
        return None

    def _condition(self, node) -> str:
        condition = node.child_by_field_name("condition")
        if condition is None:
            header = parenthesized(node)[0]
            condition = header[0] if header else None
        return self._text(condition) if condition is not None else ""

    def _immediate_statements(self, node) -> tuple[str, ...]:
        """Text of a block's direct statements; a lone statement is its own list."""
        if node is None:
            return ()
        if node.type == "block":
            return tuple(self._text(s) for s in named_children(node))
        return (self._text(node),)

    # -- Statements -----------------------------------------------------------

    def _for_statement(self, node) -> list[StatementClassification]:
        # Header sections: initializer ; condition ; update
        sections = parenthesized(node) + [[], [], []]
        initializers = node.children_by_field_name("initializer") or sections[0]
        incrementors = node.children_by_field_name("update") or sections[2]
        condition = node.child_by_field_name("condition")
        if condition is None and sections[1]:
            condition = sections[1][0]
        return [ForLoop(
            condition=self._text(condition) if condition is not None else "",
            initializers=tuple(self._text(n) for n in initializers if n.is_named),
            incrementors=tuple(self._text(n) for n in incrementors if n.is_named),
        )]

    def _while_statement(self, node) -> list[StatementClassification]:
        return [WhileLoop(self._condition(node))]

    def _do_statement(self, node) -> list[StatementClassification]:
        return [DoWhileLoop(self._condition(node))]

    def _if_statement(self, node) -> list[StatementClassification]:
        alternative = node.child_by_field_name("alternative")
        return [Conditional(
            condition=self._condition(node),
            then_statements=self._immediate_statements(node.child_by_field_name("consequence")),
            has_else=alternative is not None,
            else_statements=self._immediate_statements(alternative),
        )]

    def _try_statement(self, node) -> list[StatementClassification]:
        try_block = node.child_by_field_name("body") or first_named_child(node, "block")
        catches: list[CatchClause] = []
        finally_statements = None

        for child in named_children(node):
            if child.type == "catch_clause":
                clause = self._catch_clause(child)
                if clause is not None:
                    catches.append(clause)
            elif child.type == "finally_clause":
                finally_statements = self._immediate_statements(first_named_child(child, "block"))

        return [TryCatch(
            try_statements=self._immediate_statements(try_block),
            catches=tuple(catches),
            finally_statements=finally_statements,
        )]

    def _catch_clause(self, node) -> Optional[CatchClause]:
        exception_type = None
        declaration = first_named_child(node, "catch_declaration")
        if declaration is not None:
            type_node = declaration.child_by_field_name("type")
            if type_node is None:
                self._skip(declaration, "catch declaration type")
                return None
            exception_type = self._text(type_node)
        body = node.child_by_field_name("body") or first_named_child(node, "block")
        return CatchClause(exception_type, self._immediate_statements(body))

    def _local_declaration(self, node) -> list[StatementClassification]:
        """`var x = 1;` binds x -> "1"; a query-shaped initializer is classified first."""
        findings: list[StatementClassification] = []
        declaration = first_named_child(node, "variable_declaration")
        declarators = named_children(declaration) if declaration is not None else []
        for declarator in declarators:
            if declarator.type != "variable_declarator":
                continue
            name_node = declarator.child_by_field_name("name") or first_named_child(declarator)
            value = self._declarator_value(declarator, name_node)
            if name_node is None or value is None:
                continue
            if value.type in STRING_LITERAL_TYPES:
                findings.extend(self._query_literal(value))
            findings.append(self._assign(self._text(name_node), value))
        return findings or [Unrecognized(node.type)]

    def _declarator_value(self, declarator, name_node):
        for child in named_children(declarator):
            if child == name_node or child.type == "bracketed_argument_list":
                continue
            if child.type == "equals_value_clause":
                return first_named_child(child)
            return child
        return None

    def _expression_statement(self, node) -> list[StatementClassification]:
        expression = first_named_child(node)
        if expression is None:
            return [Unrecognized(node.type)]
        if expression.type == "invocation_expression":
            return [self._invocation(expression)]
        if expression.type == "assignment_expression":
            left = expression.child_by_field_name("left")
            right = expression.child_by_field_name("right")
            if left is None or right is None:
                self._skip(expression, "assignment")
                return []
            operator = expression.child_by_field_name("operator")
            if operator is None:
                operator = next((c for c in expression.children if c != left and c != right), None)
            op_text = self._text(operator) if operator is not None else "="
            return [self._assign(self._text(left), right, op_text)]
        if expression.type == "binary_expression":
            return [self._binary(expression)]
        if expression.type in STRING_LITERAL_TYPES:
            return self._query_literal(expression) or [Unrecognized(f"{node.type}:{expression.type}")]
        return [Unrecognized(f"{node.type}:{expression.type}")]

    # -- Expressions ----------------------------------------------------------

    def _invocation(self, node) -> Invocation:
        function = node.child_by_field_name("function")
        callee = self._text(function) if function is not None else ""
        lowered = callee.lower()

        arguments: list[Argument] = []
        argument_list = node.child_by_field_name("arguments")
        if argument_list is not None:
            for arg in named_children(argument_list):
                text = self._text(arg)
                arguments.append(Argument(text, self._tracked(text)))

        return Invocation(
            callee=callee,
            http_call=any(m in lowered for m in HTTP_CALL_MARKERS),
            sql_call=any(m in lowered for m in SQL_CALL_MARKERS),
            arguments=tuple(arguments),
        )

    def _assign(self, name: str, value_node, operator: str = "=") -> Assignment:
        value = self._text(value_node)
        self.bindings[name] = value  # last write wins
        computation = self._binary(value_node) if value_node.type == "binary_expression" else None
        return Assignment(name=name, value=value, computation=computation, operator=operator)

    def _binary(self, node) -> BinaryComputation:
        left = node.child_by_field_name("left")
        right = node.child_by_field_name("right")
        operator = node.child_by_field_name("operator")
        if operator is None:
            operator = next((c for c in node.children if not c.is_named), None)
        left_text = self._text(left) if left is not None else ""
        return BinaryComputation(
            left=left_text,
            operator=self._text(operator) if operator is not None else "",
            right=self._text(right) if right is not None else "",
            left_call=self._callee(left),
            right_call=self._callee(right),
            tracked=self._tracked(left_text),
        )

    def _callee(self, node) -> Optional[str]:
        if node is None or node.type != "invocation_expression":
            return None
        function = node.child_by_field_name("function")
        return self._text(function) if function is not None else ""

    def _query_literal(self, node) -> list[StatementClassification]:
        value = literal_value(self._text(node))
        if not is_query_literal(value):
            return []
        return [QueryLiteral(text=value, query=classify_query(value, self.bindings))]
