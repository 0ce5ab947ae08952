# --- Run configuration -------------------------------------------------------
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from cs_inspector.src.cs_inspector.errors import ConfigurationMissing, DirectoryNotFound

PROJECT_PATH_ENV = "CS_INSPECTOR_PROJECT_PATH"
IGNORED_DIRS_ENV = "CS_INSPECTOR_IGNORED_DIRS"
JSON_ENV = "CS_INSPECTOR_JSON"
STRICT_ENV = "CS_INSPECTOR_STRICT"

DEFAULT_IGNORED_DIRS = ("obj", "objects")
TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class ScanConfig:
    """Settings for one run; built once in main() and passed down explicitly."""
    project_path: str
    ignored_dirs: tuple[str, ...] = DEFAULT_IGNORED_DIRS
    emit_json: bool = False
    strict_parse: bool = True


def _flag(value: Optional[str], default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in TRUTHY


def load_config(argv: Sequence[str], environ: Optional[Mapping[str, str]] = None) -> ScanConfig:
    """
    The project path is the first positional argument, or CS_INSPECTOR_PROJECT_PATH.
    Everything else comes from the environment.

    Raises ConfigurationMissing when no project path is given and
    DirectoryNotFound when it does not point at a directory.
    """
    env = os.environ if environ is None else environ

    project_path = argv[0] if argv else env.get(PROJECT_PATH_ENV, "")
    if not project_path.strip():
        raise ConfigurationMissing(
            f"No project path given. Pass it as the first argument or set {PROJECT_PATH_ENV}."
        )
    if not os.path.isdir(project_path):
        raise DirectoryNotFound(project_path)

    ignored = env.get(IGNORED_DIRS_ENV)
    ignored_dirs = DEFAULT_IGNORED_DIRS
    if ignored is not None:
        ignored_dirs = tuple(d.strip() for d in ignored.split(",") if d.strip())

    return ScanConfig(
        project_path=project_path,
        ignored_dirs=ignored_dirs,
        emit_json=_flag(env.get(JSON_ENV), False),
        strict_parse=_flag(env.get(STRICT_ENV), True),
    )
