# --- Error taxonomy ----------------------------------------------------------


class InspectorError(RuntimeError):
    """Base class for everything the inspector raises on purpose."""


class ConfigurationMissing(InspectorError):
    """A required setting (e.g. the project path) was not provided. Fatal."""


class DirectoryNotFound(InspectorError):
    """The configured project directory does not exist. Fatal."""

    def __init__(self, path: str):
        super().__init__(f"O diretório {path} não existe.")
        self.path = path


class FileReadError(InspectorError):
    """A source file could not be read. Recovered per file."""


class ParseError(InspectorError):
    """Tree-sitter produced a tree with syntax errors. Recovered per file."""


class MalformedNode(InspectorError):
    """A declaration is missing a required child (name, parameter list)."""

    def __init__(self, node_type: str, missing: str, line: int = 0):
        super().__init__(f"{node_type} at line {line + 1} has no {missing}")
        self.node_type = node_type
        self.missing = missing
        self.line = line
