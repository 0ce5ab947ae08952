# --- Structural descriptors extracted from the syntax tree -------------------
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class Parameter:
    """One declared method parameter, as written in the source."""
    type_text: str  # e.g. "Order", "List<int>"
    name: str  # e.g. "o"


@dataclass(frozen=True)
class MethodDescriptor:
    """Information about a method declaration in a class."""
    name: str  # e.g. "GetTotal"
    return_type: str  # textual return type, e.g. "int", "Task<User>"
    params: tuple[Parameter, ...]  # declaration order
    line: int
    col: int
    # Non-owning view of the method's `block` (None for abstract/extern/arrow methods)
    body: Optional[Any] = field(default=None, compare=False, repr=False)
    # The whole method_declaration node, walked by the dependency lister
    node: Optional[Any] = field(default=None, compare=False, repr=False)

    @property
    def signature(self) -> str:
        params = ", ".join(f"{p.type_text} {p.name}" for p in self.params)
        return f"{self.return_type} {self.name}({params})"


@dataclass(frozen=True)
class ClassDescriptor:
    """Information about a class declaration in a file."""
    name: str  # e.g. "OrderService"
    line: int
    col: int
    attributes: tuple[str, ...] = ()  # e.g. ("ApiController", "Route")
    methods: tuple[MethodDescriptor, ...] = ()
    skipped: tuple[str, ...] = ()  # diagnostics for methods that could not be extracted
