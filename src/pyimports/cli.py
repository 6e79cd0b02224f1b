"""Command-line entry point.

Each path argument is a file, a directory, or a recursive pattern such as
``./...``. With no arguments one document is read from standard input and
the result written to standard output.
"""

import argparse
import os
import sys
from pathlib import Path
from typing import BinaryIO

from pyimports.config import ConfigError, load_config
from pyimports.errors import PathLookupError, PyimportsError
from pyimports.formatter import DEFAULT_LINE_LENGTH, FormatOptions
from pyimports.paths import iter_source_files
from pyimports.process import STDIN_NAME, Settings, process_file
from pyimports.results import ExitCode, FileOutcome, RunResult


def _report(result: RunResult, error: PyimportsError) -> None:
    print(error, file=sys.stderr)
    result.add(FileOutcome(error.path, error=error))


def run_file(
    filename: str,
    settings: Settings,
    out: BinaryIO,
    result: RunResult,
    in_stream: BinaryIO | None = None,
) -> None:
    try:
        changed = process_file(filename, settings, out, in_stream=in_stream)
    except PyimportsError as exc:
        _report(result, exc)
    else:
        result.add(FileOutcome(filename, changed=changed))


def run_path(
    arg: str,
    settings: Settings,
    out: BinaryIO,
    result: RunResult,
    seen: set[str] | None = None,
) -> None:
    """Process every file *arg* resolves to, recording outcomes in *result*.

    Files whose real path is already in *seen* are skipped; newly processed
    ones are added to it.
    """
    if seen is None:
        seen = set()
    try:
        for filename in iter_source_files(
            arg, settings.exclude, on_error=lambda e: _report(result, e)
        ):
            key = os.path.realpath(filename)
            if key in seen:
                continue
            seen.add(key)
            run_file(filename, settings, out, result)
    except PathLookupError as exc:
        _report(result, exc)


def run(
    paths: list[str],
    settings: Settings,
    out: BinaryIO,
    in_stream: BinaryIO | None = None,
) -> RunResult:
    """Process *paths* in order, or *in_stream* when *paths* is empty.

    A file reached through more than one argument is processed once.
    """
    result = RunResult()
    if not paths:
        run_file(STDIN_NAME, settings, out, result, in_stream=in_stream)
        return result
    seen: set[str] = set()
    for arg in paths:
        run_path(arg, settings, out, result, seen)
    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pyimports",
        usage="%(prog)s [flags] [path ...]",
        description=(
            "Fix imports and format Python source. Paths may be files, "
            "directories, or recursive patterns like ./..."
        ),
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Files, directories or DIR/... patterns (default: read stdin)",
    )
    parser.add_argument(
        "-w",
        dest="write",
        action="store_true",
        help="write result to (source) file instead of stdout",
    )
    parser.add_argument(
        "-l",
        dest="list_files",
        action="store_true",
        help="list files whose formatting differs from pyimports'",
    )
    parser.add_argument(
        "-d",
        dest="diff",
        action="store_true",
        help="display diffs instead of rewriting files",
    )
    parser.add_argument(
        "-e",
        dest="all_errors",
        action="store_true",
        help="report all errors (not just the first 10 lines of each)",
    )
    parser.add_argument(
        "--local",
        default=None,
        metavar="PREFIXES",
        help=(
            "put imports beginning with these prefixes after 3rd-party "
            "packages; comma-separated list"
        ),
    )
    parser.add_argument(
        "--format-only",
        action="store_true",
        default=None,
        help="don't fix imports, only format",
    )
    parser.add_argument(
        "--srcdir",
        default=None,
        metavar="DIR",
        help="choose imports as if source code is from DIR",
    )
    parser.add_argument(
        "-v", dest="verbose", action="store_true", help="verbose logging"
    )
    parser.add_argument(
        "--line-length",
        type=int,
        default=None,
        help=f"Maximum line length (default: {DEFAULT_LINE_LENGTH})",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to pyproject.toml config file (default: auto-discover)",
    )
    return parser


def settings_from_args(args: argparse.Namespace, config: dict) -> Settings:
    """Merge CLI flags over config values over built-in defaults."""
    line_length = args.line_length
    if line_length is None:
        line_length = config.get("line-length", DEFAULT_LINE_LENGTH)
    local = args.local if args.local is not None else config.get("local", "")
    src_dir = args.srcdir if args.srcdir is not None else config.get("srcdir", "")
    format_only = args.format_only
    if format_only is None:
        format_only = config.get("format-only", False)

    options = FormatOptions(
        line_length=line_length,
        format_only=format_only,
        all_errors=args.all_errors,
        local_prefixes=FormatOptions.parse_local(local),
    )
    return Settings(
        write=args.write,
        list_files=args.list_files,
        diff=args.diff,
        verbose=args.verbose,
        src_dir=src_dir,
        exclude=tuple(config.get("extend-exclude", ())),
        options=options,
    )


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.paths and args.write:
        parser.error("cannot use -w with standard input")
    if args.line_length is not None and args.line_length <= 0:
        parser.error("--line-length must be positive")

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        print(f"pyimports: config error: {exc}", file=sys.stderr)
        raise SystemExit(ExitCode.ERROR)

    settings = settings_from_args(args, config)
    out = sys.stdout.buffer
    in_stream = None if args.paths else sys.stdin.buffer
    result = run(args.paths, settings, out, in_stream=in_stream)
    out.flush()
    raise SystemExit(result.exit_code)


if __name__ == "__main__":
    main()
