"""
Workspace walking for Go projects.

Provides:
- WalkConfig dataclass for the line counter's file filters
- load_walk_config() to parse .gomap.json
- should_include_path() to check if a source file should be counted
- iter_source_files() for the depth-first, name-ordered file walk
- iter_package_dirs() for ``./...`` style package discovery
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Tuple, Union

logger = logging.getLogger(__name__)

CONFIG_FILE = ".gomap.json"
GO_EXT = ".go"
TEST_SUFFIX = "_test.go"

# Directory names the go tool never treats as part of ./...
SKIPPED_PACKAGE_DIRS = {"testdata", "vendor"}


@dataclass
class WalkConfig:
    """Filters applied while walking a directory of Go sources."""

    ignore_tests: bool = False
    ignore_dirs: List[str] = field(default_factory=list)

    def extended(self, ignore_tests: bool = False, ignore_dirs: List[str] | None = None) -> "WalkConfig":
        """Return a copy with extra filters switched on."""
        dirs = list(self.ignore_dirs)
        for name in ignore_dirs or []:
            if name not in dirs:
                dirs.append(name)
        return WalkConfig(ignore_tests=self.ignore_tests or ignore_tests, ignore_dirs=dirs)


def load_walk_config(project_path: Union[str, Path]) -> WalkConfig:
    """
    Load walk defaults from .gomap.json.

    Args:
        project_path: Directory being walked

    Returns:
        WalkConfig with ignoreTests and ignoreDirs.
        Returns defaults if file is missing or invalid.
    """
    config_file = Path(project_path) / CONFIG_FILE

    if not config_file.is_file():
        return WalkConfig()

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        logger.warning("Ignoring unreadable %s: %s", config_file, e)
        return WalkConfig()

    if not isinstance(data, dict):
        logger.warning("Ignoring %s: top level is not an object", config_file)
        return WalkConfig()

    ignore_dirs = data.get("ignoreDirs", [])
    if not isinstance(ignore_dirs, list):
        logger.warning("Ignoring ignoreDirs in %s: not a list", config_file)
        ignore_dirs = []

    return WalkConfig(
        ignore_tests=bool(data.get("ignoreTests", False)),
        ignore_dirs=[str(d) for d in ignore_dirs if d],
    )


def _normalize_path(path: str) -> str:
    """
    Normalize a path for consistent matching.

    - Converts backslashes to forward slashes
    - Removes leading ./
    """
    path = path.replace("\\", "/")
    if path.startswith("./"):
        path = path[2:]
    return path


def should_include_path(path: str, config: WalkConfig) -> bool:
    """
    Determine if a relative file path should be counted.

    Logic:
    1. Only .go files
    2. Test files are dropped when ignore_tests is set
    3. A path containing "<ignored>/" anywhere is dropped
    """
    normalized = _normalize_path(path)

    if not normalized.endswith(GO_EXT):
        return False
    if config.ignore_tests and normalized.endswith(TEST_SUFFIX):
        return False
    for ignored in config.ignore_dirs:
        if ignored + "/" in normalized:
            return False
    return True


def _walk_entries(dirpath: Path, rel_dir: str) -> Iterator[Tuple[str, Path]]:
    """Pre-order walk yielding files with directory entries visited in name order."""
    with os.scandir(dirpath) as it:
        entries = sorted(it, key=lambda e: e.name)

    for entry in entries:
        rel_path = f"{rel_dir}/{entry.name}" if rel_dir else entry.name
        if entry.is_dir(follow_symlinks=False):
            yield from _walk_entries(Path(entry.path), rel_path)
        else:
            yield rel_path, Path(entry.path)


def iter_source_files(
    root: Union[str, Path],
    config: WalkConfig | None = None,
) -> Iterator[Tuple[str, Path]]:
    """Iterate Go source files under root in depth-first lexical order.

    Args:
        root: Directory to walk
        config: Filters to apply (defaults to no filtering)

    Yields:
        (relative posix path, absolute Path) pairs
    """
    config = config or WalkConfig()
    for rel_path, file_path in _walk_entries(Path(root), ""):
        if should_include_path(rel_path, config):
            yield rel_path, file_path


def _is_package_source(name: str) -> bool:
    return (
        name.endswith(GO_EXT)
        and not name.endswith(TEST_SUFFIX)
        and not name.startswith((".", "_"))
    )


def _raise_walk_error(err: OSError) -> None:
    raise err


def iter_package_dirs(root: Union[str, Path]) -> Iterator[Tuple[Path, List[Path]]]:
    """Iterate the package directories of the module rooted at root.

    Directories named testdata or vendor, hidden or underscore-prefixed
    directories, and nested modules are skipped along with their subtrees.
    Test files are not package sources.

    Yields:
        (directory, sorted non-test .go files) for directories holding any
    """
    root_path = Path(root)
    for dirpath, dirnames, filenames in os.walk(root_path, onerror=_raise_walk_error):
        current = Path(dirpath)
        kept = []
        for d in sorted(dirnames):
            if d in SKIPPED_PACKAGE_DIRS or d.startswith((".", "_")):
                continue
            if (current / d / "go.mod").is_file():
                logger.debug("Skipping nested module %s", current / d)
                continue
            kept.append(d)
        dirnames[:] = kept

        sources = sorted(
            current / name
            for name in filenames
            if _is_package_source(name) and (current / name).is_file()
        )
        if sources:
            yield current, sources
