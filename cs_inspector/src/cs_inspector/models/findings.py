# --- Findings produced by the statement analyzer and the dependency lister ---
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Union


class StatementKind(str, Enum):
    FOR_LOOP = "for_loop"
    WHILE_LOOP = "while_loop"
    DO_WHILE_LOOP = "do_while_loop"
    CONDITIONAL = "conditional"
    TRY_CATCH = "try_catch"
    INVOCATION = "invocation"
    ASSIGNMENT = "assignment"
    BINARY_COMPUTATION = "binary_computation"
    QUERY_LITERAL = "query_literal"
    UNRECOGNIZED = "unrecognized"


class QueryKind(str, Enum):
    SELECT = "SELECT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


UNKNOWN_TABLE = "Unknown"


@dataclass(frozen=True)
class VariableReference:
    """A tracked variable and the text it was last assigned."""
    name: str
    value: str


@dataclass(frozen=True)
class QueryClassification:
    kind: Optional[QueryKind]  # None for literals starting with FROM/WHERE/INTO/VALUES/SET
    target_table: str  # UNKNOWN_TABLE when the expected keyword is absent
    referenced_variables: tuple[VariableReference, ...] = ()


@dataclass(frozen=True)
class ForLoop:
    kind: ClassVar[StatementKind] = StatementKind.FOR_LOOP
    condition: str
    initializers: tuple[str, ...] = ()
    incrementors: tuple[str, ...] = ()


@dataclass(frozen=True)
class WhileLoop:
    kind: ClassVar[StatementKind] = StatementKind.WHILE_LOOP
    condition: str


@dataclass(frozen=True)
class DoWhileLoop:
    kind: ClassVar[StatementKind] = StatementKind.DO_WHILE_LOOP
    condition: str


@dataclass(frozen=True)
class Conditional:
    kind: ClassVar[StatementKind] = StatementKind.CONDITIONAL
    condition: str
    then_statements: tuple[str, ...] = ()
    has_else: bool = False
    else_statements: tuple[str, ...] = ()


@dataclass(frozen=True)
class CatchClause:
    exception_type: Optional[str]  # None means catch-all
    statements: tuple[str, ...] = ()


@dataclass(frozen=True)
class TryCatch:
    kind: ClassVar[StatementKind] = StatementKind.TRY_CATCH
    try_statements: tuple[str, ...] = ()
    catches: tuple[CatchClause, ...] = ()
    finally_statements: Optional[tuple[str, ...]] = None  # None when there is no finally


@dataclass(frozen=True)
class Argument:
    text: str
    tracked: Optional[VariableReference] = None


@dataclass(frozen=True)
class Invocation:
    kind: ClassVar[StatementKind] = StatementKind.INVOCATION
    callee: str
    http_call: bool = False
    sql_call: bool = False
    arguments: tuple[Argument, ...] = ()


@dataclass(frozen=True)
class BinaryComputation:
    kind: ClassVar[StatementKind] = StatementKind.BINARY_COMPUTATION
    left: str
    operator: str
    right: str
    left_call: Optional[str] = None  # callee text when the left operand is an invocation
    right_call: Optional[str] = None
    tracked: Optional[VariableReference] = None  # left operand when it is a tracked variable


@dataclass(frozen=True)
class Assignment:
    kind: ClassVar[StatementKind] = StatementKind.ASSIGNMENT
    name: str
    value: str
    computation: Optional[BinaryComputation] = None
    operator: str = "="  # "+=", "??=", ... for compound assignments


@dataclass(frozen=True)
class QueryLiteral:
    kind: ClassVar[StatementKind] = StatementKind.QUERY_LITERAL
    text: str
    query: QueryClassification


@dataclass(frozen=True)
class Unrecognized:
    kind: ClassVar[StatementKind] = StatementKind.UNRECOGNIZED
    node_kind: str


StatementClassification = Union[
    ForLoop, WhileLoop, DoWhileLoop, Conditional, TryCatch,
    Invocation, Assignment, BinaryComputation, QueryLiteral, Unrecognized,
]


@dataclass(frozen=True)
class DependencyRecord:
    """One call site found under a method body."""
    callee_name: str  # e.g. "Save"
    receiver: Optional[str] = None  # e.g. "_repository", "Console"
    line: int = 0
    col: int = 0

    def render(self) -> str:
        recv = f"{self.receiver}." if self.receiver else ""
        return f"{recv}{self.callee_name}()"


@dataclass(frozen=True)
class NoDependencies:
    """Marker: the method was analyzed and contains no call expressions."""


NO_DEPENDENCIES = NoDependencies()

Dependencies = Union[list[DependencyRecord], NoDependencies]


@dataclass
class MethodAnalysis:
    """Everything the statement analyzer reports for one method."""
    findings: list[StatementClassification] = field(default_factory=list)
    has_body: bool = True
    statement_count: int = 0
    too_long: bool = False
    diagnostics: list[str] = field(default_factory=list)
