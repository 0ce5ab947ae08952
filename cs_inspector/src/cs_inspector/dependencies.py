# --- Call-site dependency listing --------------------------------------------
from cs_inspector.src.cs_inspector.models.findings import NO_DEPENDENCIES, Dependencies, DependencyRecord
from cs_inspector.src.cs_inspector.tree_sitter_helpers import iter_descendants, node_point, node_text


def list_dependencies(source_bytes: bytes, method_node) -> Dependencies:
    """
    Finds every `invocation_expression` under the method, at any depth, and records:
      - the simple name being called,
      - the receiver text for member-access calls like `repo.Save()`, and
      - the source location of the call.

    Records come in pre-order, left-to-right, one per call site (no de-duplication).
    A method without calls gives NO_DEPENDENCIES rather than an empty list.

    Note: this is syntax-only. We do not resolve which class actually defines
    the target method.
    """
    if method_node is None:
        return NO_DEPENDENCIES

    records = [_record(source_bytes, node) for node in iter_descendants(method_node, "invocation_expression")]
    return records or NO_DEPENDENCIES


def _record(source_bytes: bytes, node) -> DependencyRecord:
    line, col = node_point(node)
    function = node.child_by_field_name("function")
    if function is None:
        return DependencyRecord("<unknown>", None, line, col)

    if function.type == "member_access_expression":
        receiver = function.child_by_field_name("expression")
        name = function.child_by_field_name("name")
        return DependencyRecord(
            callee_name=_simple_name(source_bytes, name) if name is not None else "<unknown>",
            receiver=node_text(source_bytes, receiver) if receiver is not None else None,
            line=line,
            col=col,
        )

    if function.type in ("identifier", "generic_name"):
        return DependencyRecord(_simple_name(source_bytes, function), None, line, col)

    # Delegate invocations, conditional access, etc.: keep the callee text as-is
    return DependencyRecord(node_text(source_bytes, function), None, line, col)


def _simple_name(source_bytes: bytes, node) -> str:
    # Save<Order> -> Save
    if node.type == "generic_name":
        ident = next((c for c in node.children if c.type == "identifier"), None)
        if ident is not None:
            return node_text(source_bytes, ident)
    return node_text(source_bytes, node)
