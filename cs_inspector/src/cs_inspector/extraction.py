# --- Structural extraction: classes -> methods -> parameters -----------------
import sys
from typing import Iterator

from cs_inspector.src.cs_inspector.errors import MalformedNode
from cs_inspector.src.cs_inspector.models.ast_models import ClassDescriptor, MethodDescriptor, Parameter
from cs_inspector.src.cs_inspector.tree_sitter_helpers import iter_descendants, node_point, node_text


def iter_class_nodes(root) -> Iterator:
    """Every class_declaration in the compilation unit, nested ones included, in source order."""
    return iter_descendants(root, "class_declaration")


def extract_class(source_bytes: bytes, node) -> ClassDescriptor:
    """
    Builds a ClassDescriptor from a class_declaration node.

    Methods are collected from every method_declaration below the class, at any
    depth, so methods of nested classes are listed under their outer class as
    well. A method that cannot be read is skipped with a diagnostic; a class
    without a name raises MalformedNode for the caller to report.
    """
    line, col = node_point(node)
    name_node = node.child_by_field_name("name")
    if name_node is None or name_node.end_byte == name_node.start_byte:
        raise MalformedNode(node.type, "name", line)

    methods: list[MethodDescriptor] = []
    skipped: list[str] = []
    for method_node in iter_descendants(node, "method_declaration"):
        try:
            methods.append(extract_method(source_bytes, method_node))
        except MalformedNode as e:
            print(f"[WARN] Skipping method: {e}", file=sys.stderr)
            skipped.append(str(e))

    return ClassDescriptor(
        name=node_text(source_bytes, name_node),
        line=line,
        col=col,
        attributes=_attribute_names(source_bytes, node),
        methods=tuple(methods),
        skipped=tuple(skipped),
    )


def extract_method(source_bytes: bytes, node) -> MethodDescriptor:
    line, col = node_point(node)

    name_node = node.child_by_field_name("name")
    # Error recovery can insert zero-width MISSING identifiers
    if name_node is None or name_node.end_byte == name_node.start_byte:
        raise MalformedNode(node.type, "name", line)
    params_node = node.child_by_field_name("parameters")
    if params_node is None:
        raise MalformedNode(node.type, "parameter list", line)

    # Older grammar releases call the return type field "type"
    ret_node = node.child_by_field_name("returns") or node.child_by_field_name("type")
    return_type = node_text(source_bytes, ret_node) if ret_node else "?"

    body = node.child_by_field_name("body")
    if body is not None and body.type != "block":
        body = None  # expression-bodied (=> expr;) methods have no statement block

    return MethodDescriptor(
        name=node_text(source_bytes, name_node),
        return_type=return_type,
        params=tuple(_parameters(source_bytes, params_node)),
        line=line,
        col=col,
        body=body,
        node=node,
    )


def _parameters(source_bytes: bytes, params_node) -> Iterator[Parameter]:
    # parameter_list -> "(" [parameter ("," parameter)*] ")"
    for p in params_node.children:
        if p.type != "parameter":
            continue
        p_type = p.child_by_field_name("type")
        p_name = p.child_by_field_name("name")
        yield Parameter(
            type_text=node_text(source_bytes, p_type) if p_type else "?",
            name=node_text(source_bytes, p_name) if p_name else "param",
        )


def _attribute_names(source_bytes: bytes, class_node) -> tuple[str, ...]:
    """Names from the class's own [Attribute] lists, de-duplicated, in order."""
    names: list[str] = []
    for attr_list in class_node.children:
        if attr_list.type != "attribute_list":
            continue
        for attr in attr_list.children:
            if attr.type != "attribute":
                continue
            name_node = attr.child_by_field_name("name")
            name = node_text(source_bytes, name_node) if name_node else None
            if name and name not in names:
                names.append(name)
    return tuple(names)
