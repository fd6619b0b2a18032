"""Canonical, whitespace-free renderings of Go type expressions and signatures.

Every renderer dispatches on the tree-sitter node type. The set of shapes
is closed: anything without a renderer becomes ``UNMAPPED`` instead of
failing, so unusual syntax never stops a run.
"""

from __future__ import annotations

from typing import Any, Callable

from .gosource import node_text

UNMAPPED = "UNMAPPED"

# Nodes that carry names plus a "type" field.
_FIELD_NODES = frozenset({
    "field_declaration",
    "parameter_declaration",
    "variadic_parameter_declaration",
})
_METHOD_NODES = frozenset({"method_elem", "method_spec"})
_TYPE_ELEM_NODES = frozenset({"type_elem", "constraint_elem"})


def render_type(node: Any) -> str:
    """Render a type expression node."""
    if node is None:
        return UNMAPPED
    renderer = _RENDERERS.get(node.type)
    if renderer is None:
        return UNMAPPED
    return renderer(node)


def render_signature(name: str, node: Any) -> str:
    """Render ``name(params) results`` for any node with parameters/result fields."""
    params = ", ".join(render_field_list(node.child_by_field_name("parameters")))
    result = node.child_by_field_name("result")
    if result is None:
        results = ""
    elif result.type == "parameter_list":
        results = ", ".join(render_field_list(result))
    else:
        results = render_type(result)

    if not results:
        return f"{name}({params})"
    if any(ch.isspace() for ch in results):
        results = f"({results})"
    return f"{name}({params}) {results}"


def _entries(list_node: Any) -> list[Any]:
    """Named entries of a field/parameter/method list, flattening nested *_list nodes."""
    entries = []
    for child in list_node.named_children:
        if child.type == "comment":
            continue
        if child.type.endswith("_list"):
            entries.extend(_entries(child))
        else:
            entries.append(child)
    return entries


def render_field_list(list_node: Any) -> list[str]:
    """Render each entry of a field list; an absent or empty list renders as []."""
    if list_node is None:
        return []
    return [render_field(entry) for entry in _entries(list_node)]


def render_field(node: Any) -> str:
    kind = node.type
    if kind in _METHOD_NODES:
        return render_signature(node_text(node.child_by_field_name("name")), node)
    if kind in _TYPE_ELEM_NODES:
        terms = [c for c in node.named_children if c.type != "comment"]
        # unions (A | B) and single terms share this node
        return render_type(terms[0]) if len(terms) == 1 else UNMAPPED
    if kind not in _FIELD_NODES:
        # embedded interface in older grammars
        return render_type(node)

    names = [node_text(n) for n in node.children_by_field_name("name")]
    type_node = node.child_by_field_name("type")

    if kind == "variadic_parameter_declaration":
        rendered = "..." + render_type(type_node)
    elif names and type_node is not None and type_node.type == "function_type":
        return render_signature(names[0], type_node)
    else:
        rendered = render_type(type_node)
        if not names and any(c.type == "*" for c in node.children):
            # embedded *T field
            rendered = "*" + rendered

    if not names:
        return rendered
    return f"{', '.join(names)} {rendered}"


def _first_named(node: Any) -> Any | None:
    for child in node.named_children:
        if child.type != "comment":
            return child
    return None


def _render_verbatim(node: Any) -> str:
    return node_text(node)


def _render_qualified(node: Any) -> str:
    return f"{render_type(node.child_by_field_name('package'))}.{render_type(node.child_by_field_name('name'))}"


def _render_selector(node: Any) -> str:
    return f"{render_type(node.child_by_field_name('operand'))}.{node_text(node.child_by_field_name('field'))}"


def _render_pointer(node: Any) -> str:
    return "*" + render_type(_first_named(node))


def _render_array(node: Any) -> str:
    return f"[{render_type(node.child_by_field_name('length'))}]{render_type(node.child_by_field_name('element'))}"


def _render_implicit_array(node: Any) -> str:
    return f"[...]{render_type(node.child_by_field_name('element'))}"


def _render_slice(node: Any) -> str:
    return f"[]{render_type(node.child_by_field_name('element'))}"


def _render_map(node: Any) -> str:
    return f"map[{render_type(node.child_by_field_name('key'))}]{render_type(node.child_by_field_name('value'))}"


def _render_channel(node: Any) -> str:
    value = render_type(node.child_by_field_name("value"))
    tokens = [c.type for c in node.children if not c.is_named]
    if tokens[:1] == ["<-"]:
        return f"<-chan {value}"
    if tokens[:2] == ["chan", "<-"]:
        return f"chan<- {value}"
    return f"chan {value}"


def _render_struct(node: Any) -> str:
    body = next((c for c in node.named_children if c.type == "field_declaration_list"), None)
    return "struct{" + "; ".join(render_field_list(body)) + "}"


def _render_interface(node: Any) -> str:
    return "interface{" + "; ".join(render_field_list(node)) + "}"


def _render_function(node: Any) -> str:
    return render_signature("func", node)


_RENDERERS: dict[str, Callable[[Any], str]] = {
    "identifier": _render_verbatim,
    "type_identifier": _render_verbatim,
    "package_identifier": _render_verbatim,
    "field_identifier": _render_verbatim,
    "int_literal": _render_verbatim,
    "float_literal": _render_verbatim,
    "imaginary_literal": _render_verbatim,
    "rune_literal": _render_verbatim,
    "interpreted_string_literal": _render_verbatim,
    "raw_string_literal": _render_verbatim,
    "qualified_type": _render_qualified,
    "selector_expression": _render_selector,
    "pointer_type": _render_pointer,
    "array_type": _render_array,
    "implicit_length_array_type": _render_implicit_array,
    "slice_type": _render_slice,
    "map_type": _render_map,
    "channel_type": _render_channel,
    "struct_type": _render_struct,
    "interface_type": _render_interface,
    "function_type": _render_function,
}
