"""SPDX license headers for source files."""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator, List, Sequence

from .errors import PathNotFound, WriteError
from .registry import TemplateSpec
from .writer import OutputTarget, write

logger = logging.getLogger(__name__)

SPDX_TAG = "SPDX-License-Identifier:"
DEFAULT_COMMENT = "#"
# How many leading lines are searched for an existing tag.
SCAN_LINES = 5
ENCODING_LINE = re.compile(r"^[ \t\f]*#.*?coding[:=]")


def spdx_header(spec: TemplateSpec) -> str:
    return f"{SPDX_TAG} {spec.kind.value}"


def comment_block(text: str, prefix: str = DEFAULT_COMMENT) -> str:
    return "".join(f"{prefix} {line}".rstrip() + "\n" for line in text.splitlines())


def has_header(source: str) -> bool:
    return any(SPDX_TAG in line for line in source.splitlines()[:SCAN_LINES])


def with_header(source: str, block: str) -> str:
    """Insert ``block`` at the top of ``source``, after any shebang or encoding line."""
    lines = source.splitlines(keepends=True)
    keep = 0
    if lines and lines[0].startswith("#!"):
        keep = 1
    if len(lines) > keep and ENCODING_LINE.match(lines[keep]):
        keep += 1
    head = "".join(lines[:keep])
    if head and not head.endswith("\n"):
        head += "\n"
    return head + block + "".join(lines[keep:])


def iter_source_files(root: Path) -> Iterator[Path]:
    if root.is_file():
        yield root
        return
    for path in sorted(root.rglob("*")):
        relative = path.relative_to(root)
        if any(part.startswith(".") for part in relative.parts):
            continue
        if path.is_file():
            yield path


def add_header(path: Path, block: str) -> bool:
    """Prepend ``block`` to ``path``. Returns False if the file was left alone."""
    try:
        source = path.read_bytes().decode("utf-8")
    except OSError as exc:
        raise WriteError(path, exc.strerror or str(exc)) from exc
    except UnicodeDecodeError:
        logger.warning("Skipping %s: not a UTF-8 text file", path)
        return False
    if "\0" in source:
        logger.warning("Skipping %s: looks like a binary file", path)
        return False
    if has_header(source):
        logger.info("Skipping %s: already has an SPDX header", path)
        return False
    write(OutputTarget(path, overwrite=True), with_header(source, block))
    logger.debug("Added license header to %s", path)
    return True


def add_headers(
    root: Path,
    spec: TemplateSpec,
    prefix: str = DEFAULT_COMMENT,
    exclude: Sequence[Path] = (),
) -> List[Path]:
    if not root.exists():
        raise PathNotFound(root, "Source path")
    block = comment_block(spdx_header(spec), prefix)
    skipped = {path.resolve() for path in exclude}
    return [
        path
        for path in iter_source_files(root)
        if path.resolve() not in skipped and add_header(path, block)
    ]
