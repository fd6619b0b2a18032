"""
gomap: structural maps of Go modules.

- dag: package dependency graph with canonical type and function signatures
- loc: line counts that only include lines holding a Go token
"""

try:
    from importlib.metadata import version
    __version__ = version("gomap")
except Exception:
    __version__ = "0.1.0"

from .dag import ProjectUnit, build_graph, build_project_graph
from .errors import ConfigurationError, GomapError, LoadError
from .loc import FileCount, LocReport, count_directory, count_single_file, count_source
from .signatures import UNMAPPED, render_signature, render_type
from .workspace import WalkConfig

__all__ = [
    # Graph
    "ProjectUnit",
    "build_graph",
    "build_project_graph",
    # Signatures
    "UNMAPPED",
    "render_signature",
    "render_type",
    # Line counting
    "FileCount",
    "LocReport",
    "WalkConfig",
    "count_directory",
    "count_single_file",
    "count_source",
    # Errors
    "ConfigurationError",
    "GomapError",
    "LoadError",
]
