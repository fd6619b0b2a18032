"""Module path resolution from go.mod."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

GO_MOD = "go.mod"


def parse_module_path(text: str) -> str | None:
    """Return the path named by the first ``module`` directive, if any."""
    for line in text.splitlines():
        line = line.strip()
        if not line.startswith("module"):
            continue
        rest = line[len("module"):]
        if rest and not rest[0].isspace():
            # e.g. "modulepath ..." is not a directive
            continue
        rest = rest.split("//", 1)[0].strip()
        if len(rest) >= 2 and rest[0] == rest[-1] and rest[0] in "\"`":
            rest = rest[1:-1].strip()
        if rest:
            return rest
    return None


def read_module_path(project_dir: str | Path) -> str:
    """Read the module path from ``project_dir/go.mod``.

    Raises:
        ConfigurationError: if go.mod is missing, unreadable, or has no
            module directive.
    """
    mod_file = Path(project_dir) / GO_MOD
    try:
        text = mod_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"could not read {GO_MOD}: {e}") from e

    module_path = parse_module_path(text)
    if module_path is None:
        raise ConfigurationError(f"module path not found in {mod_file}")
    logger.debug("Module path for %s is %s", project_dir, module_path)
    return module_path


def is_project_path(module_path: str, pkg_path: str) -> bool:
    """True if ``pkg_path`` is the module itself or lives beneath it."""
    return pkg_path == module_path or pkg_path.startswith(module_path + "/")


def strip_module_prefix(module_path: str, pkg_path: str) -> str:
    """Remove the module prefix from a package path."""
    prefix = module_path + "/"
    if pkg_path.startswith(prefix):
        return pkg_path[len(prefix):]
    return pkg_path
