"""Go front end: tree-sitter parse trees, token streams and compilation units."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
import logging
from pathlib import Path
from typing import Any, Iterator, NamedTuple

from tree_sitter import Language, Parser
import tree_sitter_go

from .errors import LoadError
from .workspace import iter_package_dirs

logger = logging.getLogger(__name__)

# Nodes the Go scanner reports as a single token even when tree-sitter
# splits them into quote and content children.
_ATOMIC_TOKENS = frozenset({
    "interpreted_string_literal",
    "raw_string_literal",
    "rune_literal",
})

# Leaves that are not tokens: comments and statement terminators.
_NON_TOKENS = frozenset({"comment", "\n", "\0"})

_DECLARATION_NODES = frozenset({
    "const_declaration",
    "var_declaration",
    "type_declaration",
    "function_declaration",
    "method_declaration",
})


class Token(NamedTuple):
    kind: str
    line: int  # 1-based


@lru_cache(maxsize=None)
def _go_language() -> Language:
    return Language(tree_sitter_go.language())


@lru_cache(maxsize=None)
def _get_parser() -> Parser:
    lang = _go_language()
    try:
        parser = Parser()
        parser.language = lang
    except (AttributeError, TypeError):
        parser = Parser(lang)
    return parser


def node_text(node: Any) -> str:
    return node.text.decode("utf-8", errors="replace")


def _first_error(node: Any) -> Any | None:
    if node.type == "ERROR" or node.is_missing:
        return node
    if not node.has_error:
        return None
    for child in node.children:
        found = _first_error(child)
        if found is not None:
            return found
    return node


def parse_go(source: bytes, path: str | Path = "<source>") -> Any:
    """Parse Go source into a tree-sitter tree.

    Raises:
        LoadError: if the source has a syntax error.
    """
    tree = _get_parser().parse(source)
    root = tree.root_node
    if root.has_error:
        bad = _first_error(root)
        row, col = bad.start_point[0] + 1, bad.start_point[1] + 1
        what = f"missing {bad.type}" if bad.is_missing else "syntax error"
        raise LoadError(f"{path}:{row}:{col}: {what}")
    return tree


def iter_tokens(tree: Any) -> Iterator[Token]:
    """Yield the lexical tokens of a parsed file in source order."""
    stack = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.type in _ATOMIC_TOKENS or node.child_count == 0:
            if node.type in _NON_TOKENS or node.start_byte == node.end_byte:
                continue
            if not node.text.strip():
                continue
            yield Token(node.type, node.start_point[0] + 1)
            continue
        stack.extend(reversed(node.children))


def import_paths(root: Any) -> list[str]:
    """Import paths declared by a source_file node, unquoted."""
    paths = []
    for decl in root.named_children:
        if decl.type != "import_declaration":
            continue
        specs = []
        for child in decl.named_children:
            if child.type == "import_spec":
                specs.append(child)
            elif child.type == "import_spec_list":
                specs.extend(c for c in child.named_children if c.type == "import_spec")
        for spec in specs:
            path_node = spec.child_by_field_name("path")
            if path_node is not None:
                paths.append(node_text(path_node)[1:-1])
    return paths


def package_name(root: Any) -> str:
    for child in root.named_children:
        if child.type == "package_clause":
            for ident in child.named_children:
                if ident.type == "package_identifier":
                    return node_text(ident)
    return ""


@dataclass
class CompilationUnit:
    """One parsed source file of a package."""

    path: Path
    namespace: str
    package_name: str = ""
    imports: set[str] = field(default_factory=set)
    declarations: list[Any] = field(default_factory=list)

    @classmethod
    def from_tree(cls, path: Path, namespace: str, tree: Any) -> "CompilationUnit":
        root = tree.root_node
        return cls(
            path=path,
            namespace=namespace,
            package_name=package_name(root),
            imports=set(import_paths(root)),
            declarations=[n for n in root.named_children if n.type in _DECLARATION_NODES],
        )


def read_source(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise LoadError(f"could not read {path}: {e}") from e


def load_units(project_dir: str | Path, module_path: str) -> list[CompilationUnit]:
    """Load and parse every package source file of the module.

    Raises:
        LoadError: if any directory or file cannot be read or parsed.
    """
    root = Path(project_dir)
    units: list[CompilationUnit] = []
    try:
        package_dirs = list(iter_package_dirs(root))
    except OSError as e:
        raise LoadError(f"could not walk {root}: {e}") from e

    for pkg_dir, sources in package_dirs:
        rel = pkg_dir.relative_to(root).as_posix()
        namespace = module_path if rel == "." else f"{module_path}/{rel}"
        logger.debug("Loading package %s (%d files)", namespace, len(sources))
        for source_path in sources:
            tree = parse_go(read_source(source_path), source_path)
            units.append(CompilationUnit.from_tree(source_path, namespace, tree))

    logger.debug("Loaded %d compilation units from %s", len(units), root)
    return units
