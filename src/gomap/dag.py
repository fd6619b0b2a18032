"""Package dependency graph for a Go module.

Building happens in two phases: ``accumulate`` folds compilation units into
mutable per-package nodes, ``normalize`` freezes them into sorted,
de-duplicated ``ProjectUnit`` records.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from .declarations import DeclarationGroups, classify_declarations
from .gomod import is_project_path, read_module_path, strip_module_prefix
from .gosource import CompilationUnit, load_units

logger = logging.getLogger(__name__)


@dataclass
class PackageNode:
    """Accumulation state for one package."""

    path: str
    imports: set[str] = field(default_factory=set)
    declarations: DeclarationGroups = field(default_factory=DeclarationGroups)


@dataclass(frozen=True)
class ProjectUnit:
    """A package in the graph, keyed by its module-relative path."""

    path: str
    imports: tuple[str, ...] = ()
    types: tuple[str, ...] = ()
    functions: tuple[str, ...] = ()


Graph = dict[str, ProjectUnit]


def accumulate(units: Iterable[CompilationUnit], module_path: str) -> dict[str, PackageNode]:
    """Fold compilation units into per-package nodes.

    Units without a package name or outside the module are skipped, as are
    imports of packages outside the module.
    """
    nodes: dict[str, PackageNode] = {}
    for unit in units:
        if not unit.package_name or not is_project_path(module_path, unit.namespace):
            continue

        pkg_path = strip_module_prefix(module_path, unit.namespace)
        node = nodes.get(pkg_path)
        if node is None:
            node = nodes[pkg_path] = PackageNode(path=pkg_path)

        for import_path in unit.imports:
            if is_project_path(module_path, import_path):
                node.imports.add(strip_module_prefix(module_path, import_path))

        node.declarations.merge(classify_declarations(unit.declarations))
    return nodes


def normalize(nodes: dict[str, PackageNode]) -> Graph:
    """Freeze nodes: imports and functions sorted; types grouped
    interfaces, structs, others, each group sorted."""
    graph: Graph = {}
    for path in sorted(nodes):
        node = nodes[path]
        decls = node.declarations
        types = (
            sorted(set(decls.interfaces))
            + sorted(set(decls.records))
            + sorted(set(decls.others))
        )
        graph[path] = ProjectUnit(
            path=path,
            imports=tuple(sorted(node.imports)),
            types=tuple(types),
            functions=tuple(sorted(set(decls.functions))),
        )
    return graph


def build_graph(units: Iterable[CompilationUnit], module_path: str) -> Graph:
    return normalize(accumulate(units, module_path))


def build_project_graph(project_dir: str | Path) -> Graph:
    """Build the graph for the Go module rooted at project_dir.

    Raises:
        ConfigurationError: if go.mod has no module path.
        LoadError: if any package fails to load or parse.
    """
    module_path = read_module_path(project_dir)
    units = load_units(project_dir, module_path)
    graph = build_graph(units, module_path)
    logger.debug("Built graph with %d packages", len(graph))
    return graph
