# --- Report models -----------------------------------------------------------
from dataclasses import dataclass, field
from typing import Optional

from cs_inspector.src.cs_inspector.models.findings import Dependencies, MethodAnalysis


@dataclass
class MethodReport:
    name: str
    signature: str
    description: str
    naming_warning: bool
    analysis: MethodAnalysis
    dependencies: Dependencies
    line: int
    col: int


@dataclass
class ClassReport:
    name: str
    role: str
    line: int
    col: int
    attributes: list[str] = field(default_factory=list)
    methods: list[MethodReport] = field(default_factory=list)
    diagnostics: list[str] = field(default_factory=list)


@dataclass
class FileReport:
    path: str
    classes: list[ClassReport] = field(default_factory=list)
    error: Optional[str] = None  # read/parse failure; the file has no classes then
    diagnostics: list[str] = field(default_factory=list)
