# --- Directory scanning convenience -----------------------------------------
import os
import sys
from typing import Iterable

from cs_inspector.src.cs_inspector.errors import FileReadError, ParseError
from cs_inspector.src.cs_inspector.inspector import CSharpInspector
from cs_inspector.src.cs_inspector.models.report_models import FileReport

SOURCE_SUFFIX = ".cs"


def _is_ignored(name: str, ignored_dirs: Iterable[str]) -> bool:
    lowered = name.lower()
    return any(lowered == d.lower() for d in ignored_dirs)


def read_text(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError as e:
        raise FileReadError(f"{path}: {e}") from e


def iter_project_files(root_dir: str, ignored_dirs: Iterable[str] = ()) -> list[str]:
    """
    Every file under root_dir that does not sit inside an ignored directory,
    sorted by path so reports are reproducible.
    """
    ignored_dirs = tuple(ignored_dirs)
    found = []
    for dirpath, dirnames, filenames in os.walk(root_dir):
        # Prune ignored dirs in-place
        dirnames[:] = [d for d in dirnames if not _is_ignored(d, ignored_dirs)]
        for fn in filenames:
            found.append(os.path.join(dirpath, fn))
    return sorted(found)


def iter_source_files(root_dir: str, ignored_dirs: Iterable[str] = ()) -> list[str]:
    return [p for p in iter_project_files(root_dir, ignored_dirs) if p.lower().endswith(SOURCE_SUFFIX)]


def inspect_directory(inspector: CSharpInspector, root_dir: str, ignored_dirs: Iterable[str] = ()) -> list[FileReport]:
    """
    Inspects all .cs files in a directory, one at a time. A file that cannot be
    read or parsed is reported with its error and the scan moves on.
    """
    reports = []
    for full in iter_source_files(root_dir, ignored_dirs):
        try:
            src = read_text(full)
            reports.append(inspector.inspect_source(src, full))
        except (FileReadError, ParseError) as e:
            print(f"[WARN] Failed to inspect {full}: {e}", file=sys.stderr)
            reports.append(FileReport(path=full, error=str(e)))
    return reports


def directory_structure(root_dir: str, ignored_dirs: Iterable[str] = (), indent_level: int = 0) -> list[str]:
    """Indented `|-- name` lines: sub-directories first (recursively), then files."""
    ignored_dirs = tuple(ignored_dirs)
    indent = "  " * indent_level
    entries = sorted(os.listdir(root_dir))
    lines = []
    for name in entries:
        full = os.path.join(root_dir, name)
        # symlinked directories are not followed, matching os.walk
        if os.path.islink(full) or not os.path.isdir(full) or _is_ignored(name, ignored_dirs):
            continue
        lines.append(f"{indent}|-- {name}")
        lines.extend(directory_structure(full, ignored_dirs, indent_level + 1))
    for name in entries:
        if os.path.isfile(os.path.join(root_dir, name)):
            lines.append(f"{indent}|-- {name}")
    return lines
