"""Shared fixtures for the licensegen test suite."""

import logging

import pytest

from licensegen_cli import resolver
from licensegen_cli.registry import LicenseKind, lookup

MIT_CONTEXT = {"year": "2024", "fullname": "Jane Doe"}


@pytest.fixture(autouse=True)
def no_author_detection(monkeypatch):
    """Hide the developer's real identity from author detection."""
    for var in resolver.AUTHOR_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(resolver, "read_git_config", lambda key: "")


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    package_logger = logging.getLogger("licensegen_cli")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def mit_spec():
    return lookup(LicenseKind.MIT)


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    """An empty project directory that is also the working directory."""
    directory = tmp_path / "demo-project"
    directory.mkdir()
    monkeypatch.chdir(directory)
    return directory
