#!/usr/bin/env python3
"""Generate open source license files from bundled templates."""
from __future__ import annotations

import argparse
import logging
import re
import sys
from pathlib import Path
from typing import Optional, Sequence

from . import __version__
from .errors import EXIT_OK, LicenseGenError, PathNotFound, UsageError
from .headers import DEFAULT_COMMENT, add_headers, comment_block, spdx_header
from .registry import LICENSE_SPECS, LicenseKind, TemplateSpec, lookup, parse_kind
from .renderer import render, render_interactive, render_notice
from .resolver import RenderContext, resolve
from .writer import OutputTarget, write

PACKAGE_LOGGER = __package__ or "licensegen_cli"
DEFAULT_OUTPUT = "LICENSE"
STDOUT_MARKER = "-"
YEAR_PATTERN = re.compile(r"^\d{4}(-\d{4})?$")

logger = logging.getLogger(__name__)


def configure_logging(verbosity: int) -> None:
    """Send package log records to stderr at a level picked by -v/-q."""
    if verbosity < 0:
        level = logging.ERROR
    elif verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)


def license_kind(value: str) -> LicenseKind:
    try:
        return parse_kind(value)
    except KeyError as exc:
        raise argparse.ArgumentTypeError(exc.args[0]) from exc


def copyright_year(value: str) -> str:
    value = value.strip()
    if not YEAR_PATTERN.match(value):
        raise argparse.ArgumentTypeError(f"invalid year '{value}' (expected YYYY or YYYY-YYYY)")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="license",
        description="Generate popular open source licenses into a project directory.",
    )
    parser.add_argument(
        "kind",
        nargs="?",
        type=license_kind,
        metavar="KIND",
        help="License identifier or alias (e.g. MIT, Apache-2.0, bsd3)",
    )
    parser.add_argument("-a", "--author", help="Copyright holder (defaults to git/environment user name)")
    parser.add_argument("--year", type=copyright_year, help="Copyright year (defaults to the current year)")
    parser.add_argument("--project", help="Project name (defaults to the output directory name)")
    parser.add_argument(
        "--set",
        action="append",
        metavar="KEY=VALUE",
        default=[],
        help="Set an arbitrary template variable (repeatable)",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=DEFAULT_OUTPUT,
        help=f"File or directory to write to (default: {DEFAULT_OUTPUT}); '-' prints the license",
    )
    parser.add_argument("-f", "--force", action="store_true", help="Overwrite the output file if it exists")
    parser.add_argument("--prompt", action="store_true", help="Ask for each value interactively")
    parser.add_argument(
        "--add-header",
        metavar="PATH",
        type=Path,
        help="Prepend an SPDX license header to this file, or to every file under this directory",
    )
    parser.add_argument(
        "--comment",
        default=DEFAULT_COMMENT,
        help=f"Comment marker used for source headers (default: '{DEFAULT_COMMENT}')",
    )
    parser.add_argument("--list", action="store_true", help="List supported licenses and exit")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More diagnostic output (repeatable)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only report errors")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def build_cli_overrides(args: argparse.Namespace) -> RenderContext:
    overrides: RenderContext = {}

    def push(value: Optional[str], key: str) -> None:
        if value is None:
            return
        trimmed = value.strip()
        if trimmed:
            overrides[key] = trimmed

    for assignment in args.set:
        if "=" not in assignment:
            raise UsageError(f"Invalid --set value '{assignment}'. Expected KEY=VALUE.")
        key, value = assignment.split("=", 1)
        key = key.strip()
        if not key:
            raise UsageError("Override key cannot be empty.")
        push(value, key)

    push(args.author, "fullname")
    push(args.year, "year")
    push(args.project, "project")
    return overrides


def resolve_output_path(raw: str) -> Path:
    path = Path(raw).expanduser()
    if path.is_dir():
        return path / DEFAULT_OUTPUT
    return path


def display_license_list(specs: Sequence[TemplateSpec]) -> None:
    width = max(len(spec.kind.value) for spec in specs)
    for spec in specs:
        aliases = ", ".join(spec.aliases)
        alias_text = f" (aliases: {aliases})" if aliases else ""
        print(f"{spec.kind.value.ljust(width)} - {spec.name}{alias_text}")


def report_success(
    spec: TemplateSpec,
    path: Path,
    context: RenderContext,
    comment: str,
    tagged: Optional[Sequence[Path]] = None,
) -> None:
    print(f"Wrote {spec.kind} license to {path}")
    notice = render_notice(spec, context)
    if notice:
        print("\nAttach this notice to your source files or README:\n")
        print(notice, end="")
    interactive = render_interactive(spec, context)
    if interactive:
        print("\nIf the program is interactive, show this notice when it starts:\n")
        print(interactive, end="")
    if tagged is None:
        print("\nAdd this header to the top of your source files:\n")
        print(comment_block(spdx_header(spec), comment), end="")
    else:
        print(f"\nAdded license header to {len(tagged)} file(s)")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(-1 if args.quiet else args.verbose)
    if args.list:
        display_license_list(LICENSE_SPECS)
        return EXIT_OK
    if args.kind is None:
        parser.error("no license specified; use --list to see available options")
    spec = lookup(args.kind)
    to_stdout = args.output == STDOUT_MARKER
    try:
        overrides = build_cli_overrides(args)
        if args.add_header is not None:
            if to_stdout:
                raise UsageError("--add-header cannot be combined with --output -")
            if not args.add_header.exists():
                raise PathNotFound(args.add_header, "Source path")
        target = None if to_stdout else OutputTarget(resolve_output_path(args.output), overwrite=args.force)
        directory = target.path.parent if target else Path.cwd()
        context = resolve(spec, overrides, directory=directory, interactive=args.prompt)
        text = render(spec, context)
        if target is None:
            sys.stdout.write(text)
            return EXIT_OK
        path = write(target, text)
        tagged = None
        if args.add_header is not None:
            tagged = add_headers(args.add_header, spec, args.comment, exclude=(path,))
        report_success(spec, path, context, args.comment, tagged)
    except LicenseGenError as exc:
        logger.error("%s", exc)
        return exc.exit_code
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
