"""
command-line interface for missingdefault.

provides the check command, which reports default imports of local
javascript and typescript modules that have no default export.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from . import __version__
from .analyzer import AnalysisResult, DefaultImportAnalyzer
from .config import SEVERITIES, Config
from .discovery import find_source_files
from .policy import Diagnostic


def create_parser() -> argparse.ArgumentParser:
    """
    create the argument parser for the cli.

    returns: `argparse.ArgumentParser`
        configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="missingdefault",
        description="find default imports of modules that have no default export",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  missingdefault check .                    # check entire project
  missingdefault check src/App.tsx          # check specific file
  missingdefault check --json .             # output as json
  missingdefault check --severity warning . # report as warnings
        """,
    )
    _ = parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="command")

    check_parser = subparsers.add_parser(
        "check",
        help="check default imports against the exports of imported modules",
    )
    _ = check_parser.add_argument(
        "paths",
        nargs="*",
        default=["."],
        help="files or directories to check (default: current directory)",
    )
    _ = check_parser.add_argument(
        "--include-ignored",
        action="store_true",
        help="also check files matched by .gitignore rules",
    )
    _ = check_parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="print a json report instead of text lines",
    )
    _ = check_parser.add_argument(
        "--output",
        "-o",
        type=str,
        help="write the report to this file instead of stdout",
    )
    _ = check_parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="print import counts after the issue summary",
    )
    _ = check_parser.add_argument(
        "--absolute",
        action="store_true",
        help="print absolute file paths (json reports always use absolute paths)",
    )
    _ = check_parser.add_argument(
        "--severity",
        choices=SEVERITIES,
        help="severity to report diagnostics with (default: from config, else error)",
    )
    _ = check_parser.add_argument(
        "--no-cache",
        action="store_true",
        help="re-read every imported module instead of caching its exports for the run",
    )
    _ = check_parser.add_argument(
        "--debug",
        action="store_true",
        help="log resolver, cache and scanner activity to stderr",
    )

    return parser


def _format_path(file_path: Path, use_absolute: bool) -> str:
    """
    render a diagnostic path, relative to the working directory when possible.

    arguments:
        `file_path: Path`
            absolute or relative path of a checked file
        `use_absolute: bool`
            skip the relative rendering

    returns: `str`
        path text for the report
    """
    if use_absolute:
        return str(file_path.absolute())

    try:
        return str(file_path.absolute().relative_to(Path.cwd()))
    except ValueError:
        # outside cwd
        return str(file_path.absolute())


def _format_diagnostic(diag: Diagnostic, use_absolute: bool) -> str:
    location = f"{_format_path(diag.file_path, use_absolute)}:{diag.line}:{diag.column}"
    return f"{location}: {diag.severity}: {diag.message} [{diag.kind}]"


def _render_text(result: AnalysisResult, use_absolute: bool, verbose: bool) -> list[str]:
    lines = [_format_diagnostic(diag, use_absolute) for diag in result.diagnostics]

    count = len(result.diagnostics)
    noun = "issue" if count == 1 else "issues"
    lines.append(f"{count} {noun} found")

    if verbose:
        lines.append("")
        lines.append("import summary:")
        lines.append(f"  files analysed: {len(set(result.files_analysed))}")
        lines.append(f"  imports checked: {result.imports_checked}")
        lines.append(f"  imports skipped: {result.imports_skipped}")

    return lines


def _render_json(result: AnalysisResult) -> str:
    output = {
        "diagnostics": [
            {
                "file": _format_path(d.file_path, use_absolute=True),
                "line": d.line,
                "column": d.column,
                "message": d.message,
                "kind": d.kind,
                "local_name": d.local_name,
                "specifier": d.specifier,
                "target": str(d.target) if d.target is not None else None,
                "named_exports": d.named_exports,
                "severity": d.severity,
            }
            for d in result.diagnostics
        ],
        "summary": {
            "files_analysed": len(set(result.files_analysed)),
            "imports_checked": result.imports_checked,
            "imports_skipped": result.imports_skipped,
            "issues_found": len(result.diagnostics),
        },
    }
    return json.dumps(output, indent=2)


def handle_check(args: argparse.Namespace, config: Config) -> int:
    """
    check the given files and directories and print a report.

    arguments:
        `args: argparse.Namespace`
            parsed `check` arguments
        `config: Config`
            loaded configuration, updated in place by the command-line flags

    returns: `int`
        0 when clean, 1 when issues were reported, 2 when no path could be checked
    """
    debug = bool(getattr(args, "debug", False))
    include_ignored = bool(getattr(args, "include_ignored", False))
    no_cache = bool(getattr(args, "no_cache", False))
    severity_raw = getattr(args, "severity", None)
    paths_raw = getattr(args, "paths", None)
    paths: list[str] = list(paths_raw) if paths_raw else ["."]
    verbose = bool(getattr(args, "verbose", False))
    absolute = bool(getattr(args, "absolute", False))
    json_output = bool(getattr(args, "json_output", False))
    output_raw = getattr(args, "output", None)
    output_file = str(output_raw) if output_raw is not None else None

    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="[%(name)s] %(message)s",
        )

    # flags win over every configuration source
    if include_ignored:
        config.respect_gitignore = False
    if no_cache:
        config.cache.enabled = False
    if severity_raw is not None:
        config.severity = str(severity_raw)

    source_files: list[Path] = []
    valid_paths = 0

    for raw_path in paths:
        path = Path(raw_path)

        if not path.exists():
            print(
                f"missingdefault: warning: skipping '{raw_path}', path does not exist",
                file=sys.stderr,
            )
            continue

        valid_paths += 1
        if path.is_file():
            source_files.append(path)
        else:
            source_files.extend(
                find_source_files(
                    root=path,
                    include=config.include,
                    exclude=config.exclude,
                    respect_gitignore=config.respect_gitignore,
                )
            )

    if valid_paths == 0:
        print("missingdefault: error: no valid paths to check", file=sys.stderr)
        return 2

    if not source_files:
        if verbose:
            print("no files to check")
        return 0

    analyzer = DefaultImportAnalyzer(config)
    result = analyzer.analyse_paths(source_files)

    if json_output:
        rendered = _render_json(result)
    else:
        rendered = "\n".join(_render_text(result, absolute, verbose))

    if output_file:
        _ = Path(output_file).write_text(rendered)
    else:
        print(rendered)

    if result.diagnostics:
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """
    parse the command line and dispatch to a command.

    arguments:
        `argv: Sequence[str] | None`
            command-line arguments (default: sys.argv[1:])

    returns: `int`
        exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    cmd_raw = getattr(args, "command", None)
    command = str(cmd_raw) if cmd_raw is not None else None

    if command == "check":
        return handle_check(args, Config.load())

    parser.print_help()
    return 2


if __name__ == "__main__":
    sys.exit(main())
