#!/usr/bin/env python3
"""
gomap CLI - structural maps of Go modules.

Usage:
    gomap dag [--dir DIR]                    Package dependency graph with signatures
    gomap loc [path] [--ignore-tests]        Count token-bearing lines of Go code
"""
import argparse
import json
import logging
import sys
from pathlib import Path

from . import __version__


def _machine_output(result: dict | list) -> None:
    """Print result wrapped in the --machine success envelope:
    {"success": true, "result": <result>}
    """
    wrapped = {"success": True, "result": result}
    print(json.dumps(wrapped, separators=(",", ":"), ensure_ascii=False))


def _split_dirs(values: list[str] | None) -> list[str]:
    """Flatten repeated, comma-separated --ignore-dir values."""
    dirs: list[str] = []
    for value in values or []:
        dirs.extend(part.strip() for part in value.split(",") if part.strip())
    return dirs


def _run_dag(args) -> None:
    from .dag import build_project_graph
    from .report import graph_to_list, render_graph

    project = Path(args.dir)
    if not project.is_dir():
        raise FileNotFoundError(f"Directory does not exist: {args.dir}")

    graph = build_project_graph(project)
    if args.machine:
        _machine_output(graph_to_list(graph))
    else:
        sys.stdout.write(render_graph(graph))


def _run_loc(args) -> None:
    from .loc import count_directory, count_single_file
    from .report import loc_to_dict, render_loc_table
    from .workspace import load_walk_config

    if args.path is None:
        print("0 arguments given")
        return

    path = Path(args.path).resolve()
    if not path.exists():
        raise FileNotFoundError(f"Path not found: {args.path}")

    if path.is_dir():
        config = load_walk_config(path).extended(
            ignore_tests=args.ignore_tests,
            ignore_dirs=_split_dirs(args.ignore_dir),
        )
        report = count_directory(path, config)
        if args.machine:
            _machine_output(loc_to_dict(report))
        else:
            sys.stdout.write(render_loc_table(report))
        return

    lines = count_single_file(path)
    if args.machine:
        _machine_output({"lines": lines})
    else:
        print(f"{lines} lines of code")


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        prog="gomap",
        description="Structural maps of Go modules",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Version: %(prog)s """ + __version__ + """

Examples:
    gomap dag                            # Graph for the module in the current directory
    gomap dag --dir ~/src/service        # Graph for another module
    gomap loc .                          # Per-file line counts for a directory
    gomap loc main.go                    # Line count for one file
    gomap loc . --ignore-tests --ignore-dir gen,mocks

Walk Defaults:
    gomap loc reads .gomap.json in the walked directory, e.g.
    {"ignoreTests": true, "ignoreDirs": ["vendor"]}
    Command-line filters are added on top.
        """,
    )

    # Global flags
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--machine",
        action="store_true",
        help="Machine-readable output (JSON with consistent schema and error codes)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug details to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # gomap dag [--dir]
    dag_p = subparsers.add_parser("dag", help="Package dependency graph with type and function signatures")
    dag_p.add_argument("--dir", default=".", help="Directory of the Go module (default: .)")

    # gomap loc [path]
    loc_p = subparsers.add_parser("loc", help="Count lines holding at least one Go token")
    loc_p.add_argument("path", nargs="?", help="Go file or directory to count")
    loc_p.add_argument(
        "--ignore-tests", action="store_true", help="Skip _test.go files"
    )
    loc_p.add_argument(
        "--ignore-dir",
        action="append",
        metavar="NAME",
        help="Skip files under directories matching NAME (repeatable, comma-separated)",
    )

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        if args.command == "dag":
            _run_dag(args)
        elif args.command == "loc":
            _run_loc(args)
    except Exception as e:
        if args.machine:
            from .errors import error_code_for, make_error
            print(json.dumps(make_error(error_code_for(e), str(e))))
        else:
            print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
