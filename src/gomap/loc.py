"""Token-based line counting for Go sources.

A line counts when at least one lexical token starts on it, so blank
lines, comments and formatting choices do not change the total.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from .declarations import count_declarations
from .gosource import Token, iter_tokens, parse_go
from .workspace import GO_EXT, WalkConfig, iter_source_files

logger = logging.getLogger(__name__)


@dataclass
class FileCount:
    path: str
    lines: int = 0
    types: int = 0
    funcs: int = 0
    consts: int = 0
    vars: int = 0


@dataclass
class LocReport:
    files: list[FileCount] = field(default_factory=list)

    @property
    def total(self) -> FileCount:
        total = FileCount(path="Total")
        for row in self.files:
            total.lines += row.lines
            total.types += row.types
            total.funcs += row.funcs
            total.consts += row.consts
            total.vars += row.vars
        return total


def count_lines(tokens: Iterable[Token]) -> int:
    """Number of distinct lines touched by at least one token."""
    return len({tok.line for tok in tokens})


def count_source(source: bytes, path: str | Path = "<source>") -> int:
    return count_lines(iter_tokens(parse_go(source, path)))


def count_file(file_path: Path, rel_path: str) -> FileCount:
    """Line and declaration counts for one file.

    Raises:
        OSError: if the file cannot be read.
        LoadError: if the file does not parse.
    """
    source = file_path.read_bytes()
    tree = parse_go(source, file_path)
    decls = count_declarations(tree.root_node.named_children)
    row = FileCount(
        path=rel_path,
        lines=count_lines(iter_tokens(tree)),
        types=decls.types,
        funcs=decls.funcs,
        consts=decls.consts,
        vars=decls.vars,
    )
    logger.debug("%s: %d lines", rel_path, row.lines)
    return row


def count_directory(root: str | Path, config: WalkConfig | None = None) -> LocReport:
    """Count every included Go file under root, in traversal order."""
    report = LocReport()
    for rel_path, file_path in iter_source_files(root, config):
        report.files.append(count_file(file_path, rel_path))
    return report


def count_single_file(path: str | Path) -> int:
    """Count the token lines of one Go file.

    Raises:
        ValueError: if path is not a .go file.
    """
    path = Path(path)
    if path.suffix != GO_EXT:
        raise ValueError(f"Not a Go source file: {path}")
    return count_source(path.read_bytes(), path)
