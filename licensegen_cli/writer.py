"""Atomic file output with an explicit overwrite policy."""
from __future__ import annotations

import logging
import os
import stat
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Iterator

from .errors import AlreadyExists, PathNotFound, WriteError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutputTarget:
    path: Path
    overwrite: bool = False


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def target_mode(path: Path) -> int:
    """Permissions for the file that will end up at ``path``."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        return 0o666 & ~_current_umask()


@contextmanager
def atomic_open(path: Path, mode: int, overwrite: bool = True) -> Iterator[IO[str]]:
    """Yield a handle on a temporary sibling of ``path``.

    The temporary file takes the place of ``path`` only if the block
    completes; on any exception it is closed and removed, and ``path`` is
    left as it was. Without ``overwrite`` the file is hard-linked into place,
    so a ``path`` created meanwhile by someone else raises
    ``FileExistsError`` instead of being replaced.
    """
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            yield handle
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp_path, mode)
        if overwrite:
            os.replace(tmp_path, path)
        else:
            os.link(tmp_path, path)
            tmp_path.unlink()
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def write(target: OutputTarget, content: str) -> Path:
    path = target.path
    if not path.parent.is_dir():
        raise PathNotFound(path.parent)
    if path.is_dir():
        raise WriteError(path, "destination is a directory")
    if path.exists() and not target.overwrite:
        raise AlreadyExists(path)
    try:
        with atomic_open(path, target_mode(path), overwrite=target.overwrite) as handle:
            handle.write(content)
    except FileExistsError as exc:
        raise AlreadyExists(path) from exc
    except OSError as exc:
        raise WriteError(path, exc.strerror or str(exc)) from exc
    logger.info("Wrote %d bytes to %s", len(content.encode("utf-8")), path)
    return path
