from pathlib import Path

import pytest

from gomap.errors import ConfigurationError
from gomap.gomod import is_project_path, parse_module_path, read_module_path, strip_module_prefix


def test_read_module_path(tmp_path: Path) -> None:
    (tmp_path / "go.mod").write_text(
        "// service module\nmodule example.com/svc\n\ngo 1.22\n\nrequire github.com/x/y v1.0.0\n"
    )
    assert read_module_path(tmp_path) == "example.com/svc"


def test_parse_module_path_strips_quotes_and_comments() -> None:
    assert parse_module_path('module "example.com/quoted"\n') == "example.com/quoted"
    assert parse_module_path("module example.com/c // trailing\n") == "example.com/c"
    assert parse_module_path("  module   example.com/indented\n") == "example.com/indented"


def test_parse_module_path_ignores_lookalike_lines() -> None:
    assert parse_module_path("modulepath example.com/x\n") is None
    assert parse_module_path("go 1.22\n") is None


def test_missing_go_mod_is_configuration_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="could not read go.mod"):
        read_module_path(tmp_path)


def test_go_mod_without_module_is_configuration_error(tmp_path: Path) -> None:
    (tmp_path / "go.mod").write_text("go 1.22\n")
    with pytest.raises(ConfigurationError, match="module path not found"):
        read_module_path(tmp_path)


def test_strip_module_prefix() -> None:
    assert strip_module_prefix("example.com/app", "example.com/app/sub/pkg") == "sub/pkg"
    assert strip_module_prefix("example.com/app", "example.com/app") == "example.com/app"
    assert strip_module_prefix("example.com/app", "github.com/other/pkg") == "github.com/other/pkg"


def test_is_project_path_respects_segments() -> None:
    assert is_project_path("example.com/app", "example.com/app")
    assert is_project_path("example.com/app", "example.com/app/internal/db")
    assert not is_project_path("example.com/app", "example.com/apparel")
    assert not is_project_path("example.com/app", "fmt")
