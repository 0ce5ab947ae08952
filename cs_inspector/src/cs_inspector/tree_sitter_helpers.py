# --- Tree-sitter plumbing ----------------------------------------------------
from typing import Iterator, Optional

# Extras the grammar may attach anywhere; never statements.
EXTRA_NODE_TYPES = ("comment",)


def node_text(source_bytes: bytes, node) -> str:
    """
    Converts a node's [start_byte:end_byte] into the corresponding string.
    Tree-sitter nodes only store byte offsets, so we slice the original source.
    """
    return source_bytes[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def node_point(node) -> tuple[int, int]:
    """
    Returns the (line, column) of a node's start in 0-based coordinates.
    Handy for displaying where a class/method was found.
    """
    return (node.start_point[0], node.start_point[1])


def is_extra(node) -> bool:
    return node.type in EXTRA_NODE_TYPES or node.type.startswith("preproc")


def named_children(node) -> list:
    """Named children of a node, minus comments and preprocessor lines."""
    return [c for c in node.children if c.is_named and not is_extra(c)]


def first_named_child(node, type_name: Optional[str] = None):
    for child in named_children(node):
        if type_name is None or child.type == type_name:
            return child
    return None


def iter_descendants(node, type_name: str) -> Iterator:
    """
    Pre-order, left-to-right DFS yielding every descendant of the given type.
    The node itself is not yielded.
    """
    stack = list(reversed(node.children))
    while stack:
        current = stack.pop()
        if current.type == type_name:
            yield current
        stack.extend(reversed(current.children))


def parenthesized(node) -> list:
    """
    Named children between a statement's own '(' and ')' tokens, grouped into
    sections split on top-level ';' tokens.

    `for (a; b; c)` gives three sections, `while (x)` gives one. Used when the
    grammar release at hand does not expose the header through field names.
    """
    sections: list[list] = [[]]
    inside = False
    for child in node.children:
        if not inside:
            inside = child.type == "("
            continue
        if child.type == ")":
            break
        if child.type == ";":
            sections.append([])
        elif child.is_named and not is_extra(child):
            sections[-1].append(child)
    return sections
