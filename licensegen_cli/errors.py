"""Errors raised by the license generation pipeline.

Each error carries the process exit code the CLI reports for it.
"""
from __future__ import annotations

from pathlib import Path

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_MISSING_VARIABLE = 3
EXIT_ALREADY_EXISTS = 4
EXIT_PATH_NOT_FOUND = 5
EXIT_WRITE_FAILED = 6
EXIT_INTERNAL = 70


class LicenseGenError(Exception):
    exit_code = 1


class UsageError(LicenseGenError):
    exit_code = EXIT_USAGE


class MissingVariable(LicenseGenError):
    exit_code = EXIT_MISSING_VARIABLE

    def __init__(self, name: str) -> None:
        super().__init__(f"Missing value for '{name}'. Pass it on the command line or use --set {name}=VALUE.")
        self.name = name


class TemplateError(LicenseGenError):
    """Template and registry disagree; should not happen for shipped templates."""

    exit_code = EXIT_INTERNAL


class AlreadyExists(LicenseGenError):
    exit_code = EXIT_ALREADY_EXISTS

    def __init__(self, path: Path) -> None:
        super().__init__(f"Refusing to overwrite existing file: {path}. Use --force to override.")
        self.path = path


class PathNotFound(LicenseGenError):
    exit_code = EXIT_PATH_NOT_FOUND

    def __init__(self, path: Path, what: str = "Directory") -> None:
        super().__init__(f"{what} does not exist: {path}")
        self.path = path


class WriteError(LicenseGenError):
    exit_code = EXIT_WRITE_FAILED

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to write {path}: {reason}")
        self.path = path
