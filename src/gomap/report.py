"""Text and JSON renderings of graphs and line counts."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .dag import Graph
    from .loc import LocReport

RULE = "-" * 40
_PATH_WIDTH = 30
_NUM_WIDTH = 10
LOC_COLUMNS = ("Path", "Lines", "Types", "Funcs", "Consts", "Vars")


def render_graph(graph: "Graph") -> str:
    """Render packages in alphabetical order with their imports, types and functions."""
    lines: list[str] = []
    for path in sorted(graph):
        unit = graph[path]
        lines.append(f"Package: {path}")
        for label, items in (
            ("Imports", unit.imports),
            ("Types", unit.types),
            ("Functions", unit.functions),
        ):
            if not items:
                continue
            lines.append(f"  {label}:")
            lines.extend(f"    {item}" for item in items)
        lines.append(RULE)
    return "\n".join(lines) + ("\n" if lines else "")


def graph_to_list(graph: "Graph") -> list[dict]:
    return [
        {
            "path": unit.path,
            "imports": list(unit.imports),
            "types": list(unit.types),
            "functions": list(unit.functions),
        }
        for unit in (graph[path] for path in sorted(graph))
    ]


def _loc_row(label: str, *values: object) -> str:
    return f"{label:<{_PATH_WIDTH}}" + "".join(f"{v:<{_NUM_WIDTH}}" for v in values)


def render_loc_table(report: "LocReport") -> str:
    lines = [_loc_row(*LOC_COLUMNS)]
    for row in [*report.files, report.total]:
        lines.append(_loc_row(row.path, row.lines, row.types, row.funcs, row.consts, row.vars))
    return "\n".join(lines) + "\n"


def loc_to_dict(report: "LocReport") -> dict:
    return {
        "files": [asdict(row) for row in report.files],
        "total": asdict(report.total),
    }
