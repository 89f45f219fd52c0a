"""Work out the values substituted into a license template."""
from __future__ import annotations

import datetime as _dt
import logging
import os
import subprocess
import sys
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional

from .errors import MissingVariable
from .registry import FieldSpec, TemplateSpec

logger = logging.getLogger(__name__)

RenderContext = Dict[str, str]
DefaultFactory = Callable[[Path], Optional[str]]

AUTHOR_ENV_VARS = (
    "LICENSE_AUTHOR",
    "GIT_AUTHOR_NAME",
    "AUTHOR",
    "FULLNAME",
    "NAME",
    "USER",
    "USERNAME",
)


def read_git_config(key: str) -> str:
    try:
        completed = subprocess.run(
            ["git", "config", "--get", key],
            check=True,
            capture_output=True,
            text=True,
        )
    except (subprocess.CalledProcessError, FileNotFoundError):
        return ""
    return completed.stdout.strip()


def guess_full_name() -> str:
    for var in AUTHOR_ENV_VARS:
        value = os.environ.get(var, "").strip()
        if value:
            logger.debug("Using author %r from $%s", value, var)
            return value
    git_name = read_git_config("user.name")
    if git_name:
        logger.debug("Using author %r from git config", git_name)
    return git_name


def default_year(_: Path) -> str:
    return str(_dt.date.today().year)


def default_fullname(_: Path) -> Optional[str]:
    return guess_full_name() or None


def default_project(directory: Path) -> Optional[str]:
    return directory.resolve().name or None


DEFAULT_FACTORIES: Mapping[str, DefaultFactory] = {
    "year": default_year,
    "fullname": default_fullname,
    "project": default_project,
}


def ensure_value(text: Optional[str]) -> str:
    return text.strip() if text else ""


def prompt_for(field: FieldSpec, default: str) -> str:
    prompt = field.prompt
    if default:
        prompt = f"{prompt} [{default}]"
    prompt += ": "
    while True:
        try:
            user_input = input(prompt)
        except EOFError:
            return default
        user_input = user_input.strip() or default
        if user_input or field.optional:
            return user_input
        print("This field is required.", file=sys.stderr)


def resolve(
    spec: TemplateSpec,
    overrides: Optional[Mapping[str, str]] = None,
    *,
    directory: Optional[Path] = None,
    interactive: bool = False,
) -> RenderContext:
    """Build the render context for ``spec``.

    Each field takes the explicit value from ``overrides`` when one is given,
    then its computed default, then (with ``interactive``) whatever the user
    types. Optional fields fall back to an empty string; a required field
    with no value raises :class:`MissingVariable` and nothing is returned.
    """
    directory = directory or Path.cwd()
    values: RenderContext = {}
    if overrides:
        for key, value in overrides.items():
            trimmed = ensure_value(value)
            if trimmed:
                values[key] = trimmed
    for field in spec.fields:
        if values.get(field.key):
            logger.debug("%s: using explicit value", field.key)
            continue
        factory = DEFAULT_FACTORIES.get(field.key)
        default = ensure_value(factory(directory) if factory else "")
        if interactive:
            value = prompt_for(field, default)
        else:
            value = default
            if value:
                logger.info("%s: defaulting to %r", field.key, value)
        if not value and not field.optional:
            raise MissingVariable(field.key)
        values[field.key] = value
    return values
