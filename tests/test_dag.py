"""Tests for the package dependency graph."""

from pathlib import Path
from textwrap import dedent

import pytest

from gomap.dag import ProjectUnit, accumulate, build_graph, build_project_graph, normalize
from gomap.errors import ConfigurationError, LoadError
from gomap.gosource import CompilationUnit, parse_go
from gomap.report import render_graph

MODULE = "example.com/app"


def _write(root: Path, rel: str, source: str) -> None:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dedent(source).lstrip())


def _unit(namespace: str, source: str, name: str = "x.go") -> CompilationUnit:
    tree = parse_go(dedent(source).lstrip().encode("utf-8"))
    return CompilationUnit.from_tree(Path(name), namespace, tree)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A small module with internal and external imports."""
    (tmp_path / "go.mod").write_text(f"module {MODULE}\n\ngo 1.22\n")
    _write(tmp_path, "main.go", """
        package main

        import (
            "fmt"

            "example.com/app/internal/store"
            "example.com/app/internal/api"
        )

        func main() { fmt.Println(store.New(), api.Routes) }
    """)
    _write(tmp_path, "internal/store/store.go", """
        package store

        import "sync"

        type Store interface {
            Get(id string) (Item, bool)
        }

        type memory struct {
            mu    sync.Mutex
            items map[string]Item
        }

        type Item struct{ ID string }

        type Option func(*memory)

        func New(opts ...Option) Store { return nil }

        func (m *memory) Get(id string) (Item, bool) { return Item{}, false }
    """)
    _write(tmp_path, "internal/store/helpers.go", """
        package store

        import "example.com/app/internal/store/codec"

        type Codec interface{ Encode(Item) []byte }

        func defaultCodec() codec.JSON { return codec.JSON{} }
    """)
    _write(tmp_path, "internal/store/store_test.go", """
        package store

        import "testing"

        func TestNew(t *testing.T) {}
    """)
    _write(tmp_path, "internal/store/codec/json.go", """
        package codec

        type JSON struct{}
    """)
    _write(tmp_path, "internal/api/api.go", """
        package api

        import (
            "net/http"

            "example.com/app/internal/store"
        )

        var Routes = map[string]http.HandlerFunc{}

        func Register(mux *http.ServeMux, s store.Store) error { return nil }
        func Handler(s store.Store) http.Handler { return nil }
    """)
    return tmp_path


# ---------------------------------------------------------------------------
# Graph construction
# ---------------------------------------------------------------------------


class TestBuildProjectGraph:
    def test_keys_are_module_relative(self, project: Path) -> None:
        graph = build_project_graph(project)
        assert list(graph) == [
            MODULE,
            "internal/api",
            "internal/store",
            "internal/store/codec",
        ]

    def test_external_imports_are_dropped(self, project: Path) -> None:
        graph = build_project_graph(project)
        assert graph[MODULE].imports == ("internal/api", "internal/store")
        assert graph["internal/api"].imports == ("internal/store",)
        assert graph["internal/store"].imports == ("internal/store/codec",)
        assert graph["internal/store/codec"].imports == ()

    def test_files_of_a_package_are_merged(self, project: Path) -> None:
        store = build_project_graph(project)["internal/store"]
        assert store.types == (
            "type Codec interface",
            "type Store interface",
            "type Item struct",
            "type memory struct",
            "type Option func(*memory)",
        )
        assert store.functions == (
            "func New(opts ...Option) Store",
            "func defaultCodec() codec.JSON",
        )

    def test_test_files_are_not_loaded(self, project: Path) -> None:
        store = build_project_graph(project)["internal/store"]
        assert not any("TestNew" in sig for sig in store.functions)

    def test_functions_sorted(self, project: Path) -> None:
        api = build_project_graph(project)["internal/api"]
        assert api.functions == (
            "func Handler(s store.Store) http.Handler",
            "func Register(mux *http.ServeMux, s store.Store) error",
        )

    def test_rebuild_is_byte_identical(self, project: Path) -> None:
        first = render_graph(build_project_graph(project))
        second = render_graph(build_project_graph(project))
        assert first == second

    def test_skipped_directories(self, project: Path) -> None:
        _write(project, "vendor/github.com/x/y/y.go", "package y\n")
        _write(project, "testdata/fixture.go", "package fixture\n")
        _write(project, ".hidden/h.go", "package hidden\n")
        _write(project, "_scratch/s.go", "package scratch\n")
        _write(project, "tools/go.mod", "module example.com/app/tools\n")
        _write(project, "tools/gen.go", "package tools\n")

        graph = build_project_graph(project)
        assert set(graph) == {
            MODULE,
            "internal/api",
            "internal/store",
            "internal/store/codec",
        }

    def test_missing_go_mod(self, tmp_path: Path) -> None:
        _write(tmp_path, "a.go", "package a\n")
        with pytest.raises(ConfigurationError):
            build_project_graph(tmp_path)

    def test_syntax_error_aborts(self, project: Path) -> None:
        _write(project, "internal/broken/broken.go", "package broken\n\nfunc (\n")
        with pytest.raises(LoadError, match="broken.go"):
            build_project_graph(project)


# ---------------------------------------------------------------------------
# Accumulate / normalize phases
# ---------------------------------------------------------------------------


class TestPhases:
    def test_units_outside_module_are_excluded(self) -> None:
        units = [
            _unit(f"{MODULE}/core", "package core\n"),
            _unit("example.com/other/core", "package core\n"),
            _unit("example.com/apparel", "package apparel\n"),
        ]
        assert list(build_graph(units, MODULE)) == ["core"]

    def test_units_without_package_name_are_excluded(self) -> None:
        units = [_unit(f"{MODULE}/empty", "// no package clause\n")]
        assert build_graph(units, MODULE) == {}

    def test_self_import_is_kept(self) -> None:
        units = [_unit(f"{MODULE}/loop", f'package loop\n\nimport _ "{MODULE}/loop"\n')]
        assert build_graph(units, MODULE)["loop"].imports == ("loop",)

    def test_duplicate_imports_and_signatures_collapse(self) -> None:
        source_a = f"""
            package sys

            import "{MODULE}/util"

            func Name() string {{ return "linux" }}
        """
        source_b = f"""
            package sys

            import "{MODULE}/util"

            func Name() string {{ return "windows" }}
        """
        units = [
            _unit(f"{MODULE}/sys", source_a, "sys_linux.go"),
            _unit(f"{MODULE}/sys", source_b, "sys_windows.go"),
        ]
        unit = build_graph(units, MODULE)["sys"]
        assert unit.imports == ("util",)
        assert unit.functions == ("func Name() string",)

    def test_accumulate_keeps_unsorted_sets(self) -> None:
        units = [
            _unit(f"{MODULE}/p", f'package p\n\nimport (\n\t"{MODULE}/z"\n\t"{MODULE}/a"\n)\n\nfunc b() {{}}\nfunc a() {{}}\n'),
        ]
        nodes = accumulate(units, MODULE)
        assert nodes["p"].imports == {"z", "a"}
        assert nodes["p"].declarations.functions == ["func b()", "func a()"]

        graph = normalize(nodes)
        assert graph["p"] == ProjectUnit(
            path="p",
            imports=("a", "z"),
            types=(),
            functions=("func a()", "func b()"),
        )

    def test_type_groups_ordered_interfaces_structs_others(self) -> None:
        source = """
            package t

            type Z interface{}
            type A int
            type Y struct{}
            type B interface{}
            type X struct{}
            type C []byte
        """
        unit = build_graph([_unit(f"{MODULE}/t", source)], MODULE)["t"]
        assert unit.types == (
            "type B interface",
            "type Z interface",
            "type X struct",
            "type Y struct",
            "type A int",
            "type C []byte",
        )
