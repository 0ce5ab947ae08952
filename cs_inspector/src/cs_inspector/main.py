#!/usr/bin/env python3
"""
Tree-sitter C# Inspector (Python)
---------------------------------
Walks a C# project and, for every class, reports:
- a role guessed from the class name
- each method's signature, a guessed purpose and naming-convention warnings
- the shape of each top-level statement (loops, ifs, try/catch, calls,
  assignments, computations, embedded SQL literals)
- the calls each method makes

USAGE EXAMPLES
--------------
# 1) Scan a project directory (recursive):
cs-inspector /path/to/csharp/project

# 2) Same, with the path and options taken from the environment:
export CS_INSPECTOR_PROJECT_PATH=/path/to/csharp/project
export CS_INSPECTOR_IGNORED_DIRS=obj,objects,bin
export CS_INSPECTOR_JSON=1
cs-inspector

DEPENDENCIES
------------
    pip install tree-sitter tree-sitter-c-sharp
"""

import sys
from typing import Optional, Sequence

from cs_inspector.src.cs_inspector.config import load_config
from cs_inspector.src.cs_inspector.errors import ConfigurationMissing, DirectoryNotFound
from cs_inspector.src.cs_inspector.inputs.directory_scanning import (
    directory_structure,
    inspect_directory,
    iter_project_files,
)
from cs_inspector.src.cs_inspector.inspector import CSharpInspector
from cs_inspector.src.cs_inspector.outputs.output import print_summary, to_json


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)

    try:
        config = load_config(args)
    except (ConfigurationMissing, DirectoryNotFound) as e:
        print(f"Erro: {e}", file=sys.stderr)
        return 1

    files = iter_project_files(config.project_path, config.ignored_dirs)
    ignored = ", ".join(f"'{d}'" for d in config.ignored_dirs)
    print(f"O diretório contém {len(files)} arquivos (excluindo as pastas {ignored}).")

    print("\nEstrutura do projeto:")
    for line in directory_structure(config.project_path, config.ignored_dirs):
        print(line)

    # Create inspector (loads Tree-sitter C# once)
    inspector = CSharpInspector(strict=config.strict_parse)
    reports = inspect_directory(inspector, config.project_path, config.ignored_dirs)

    print()
    print_summary(reports)

    if config.emit_json:
        print("\n=== JSON ===")
        print(to_json(reports))
    return 0


if __name__ == "__main__":
    sys.exit(main())
