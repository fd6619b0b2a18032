"""Top-level declaration classification and counting."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator

from .gosource import node_text
from .signatures import render_signature, render_type

_TYPE_SPECS = frozenset({"type_spec", "type_alias"})


def iter_specs(decl: Any, kinds: Iterable[str]) -> Iterator[Any]:
    """Specs of a const/var/type declaration, grouped or not."""
    kinds = frozenset(kinds)
    for child in decl.named_children:
        if child.type in kinds:
            yield child
        elif child.type.endswith("_list"):
            for spec in child.named_children:
                if spec.type in kinds:
                    yield spec


@dataclass
class DeclarationGroups:
    """Signatures of one unit's declarations, bucketed by kind (unsorted)."""

    interfaces: list[str] = field(default_factory=list)
    records: list[str] = field(default_factory=list)
    others: list[str] = field(default_factory=list)
    functions: list[str] = field(default_factory=list)

    def merge(self, other: "DeclarationGroups") -> None:
        self.interfaces.extend(other.interfaces)
        self.records.extend(other.records)
        self.others.extend(other.others)
        self.functions.extend(other.functions)


def type_signature(spec: Any) -> tuple[str, str]:
    """Return (bucket, signature) for a type_spec or type_alias node."""
    name = node_text(spec.child_by_field_name("name"))
    type_node = spec.child_by_field_name("type")
    kind = type_node.type if type_node is not None else ""
    if kind == "interface_type":
        return "interfaces", f"type {name} interface"
    if kind == "struct_type":
        return "records", f"type {name} struct"
    return "others", f"type {name} {render_type(type_node)}"


def function_signature(decl: Any) -> str:
    name = node_text(decl.child_by_field_name("name"))
    return f"func {render_signature(name, decl)}"


def classify_declarations(declarations: Iterable[Any]) -> DeclarationGroups:
    """Bucket type declarations and collect free function signatures.

    Methods (declarations with a receiver) are skipped.
    """
    groups = DeclarationGroups()
    for decl in declarations:
        if decl.type == "type_declaration":
            for spec in iter_specs(decl, _TYPE_SPECS):
                bucket, signature = type_signature(spec)
                getattr(groups, bucket).append(signature)
        elif decl.type == "function_declaration":
            groups.functions.append(function_signature(decl))
    return groups


@dataclass
class DeclarationCounts:
    types: int = 0
    funcs: int = 0
    consts: int = 0
    vars: int = 0


def count_declarations(declarations: Iterable[Any]) -> DeclarationCounts:
    """Count type/const/var specs and free functions (methods excluded)."""
    counts = DeclarationCounts()
    for decl in declarations:
        if decl.type == "type_declaration":
            counts.types += sum(1 for _ in iter_specs(decl, _TYPE_SPECS))
        elif decl.type == "const_declaration":
            counts.consts += sum(1 for _ in iter_specs(decl, {"const_spec"}))
        elif decl.type == "var_declaration":
            counts.vars += sum(1 for _ in iter_specs(decl, {"var_spec"}))
        elif decl.type == "function_declaration":
            counts.funcs += 1
    return counts
