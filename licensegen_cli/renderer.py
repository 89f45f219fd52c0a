"""Render license templates with Jinja2."""
from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional

from jinja2 import (
    Environment,
    FunctionLoader,
    StrictUndefined,
    TemplateNotFound,
    TemplateSyntaxError,
    UndefinedError,
    meta,
)

from .errors import TemplateError
from .registry import TemplateSpec, load_template_text

logger = logging.getLogger(__name__)


def _load_source(name: str) -> Optional[str]:
    try:
        return load_template_text(name)
    except FileNotFoundError:
        return None


ENVIRONMENT = Environment(
    loader=FunctionLoader(_load_source),
    undefined=StrictUndefined,
    autoescape=False,
    trim_blocks=True,
    keep_trailing_newline=True,
)


def referenced_variables(template_name: str) -> set:
    source, _, _ = ENVIRONMENT.loader.get_source(ENVIRONMENT, template_name)
    return meta.find_undeclared_variables(ENVIRONMENT.parse(source))


def template_context(spec: TemplateSpec, ctx: Mapping[str, str]) -> Dict[str, object]:
    """``ctx`` plus the kind's fixed values, which always win."""
    return {**ctx, **dict(spec.constants)}


def render_template(template_name: str, ctx: Mapping[str, object]) -> str:
    try:
        missing = sorted(referenced_variables(template_name) - set(ctx))
        if missing:
            raise TemplateError(
                f"Template {template_name} references undeclared variable(s): {', '.join(missing)}"
            )
        text = ENVIRONMENT.get_template(template_name).render(ctx)
    except TemplateNotFound as exc:
        raise TemplateError(f"Template file not found: {exc.name}") from exc
    except TemplateSyntaxError as exc:
        raise TemplateError(f"Template {template_name} is malformed: {exc}") from exc
    except UndefinedError as exc:
        raise TemplateError(f"Template {template_name}: {exc}") from exc
    if not text.endswith("\n"):
        text += "\n"
    return text


def render(spec: TemplateSpec, ctx: Mapping[str, str]) -> str:
    logger.debug("Rendering %s from %s", spec.kind, spec.filename)
    return render_template(spec.filename, template_context(spec, ctx))


def render_notice(spec: TemplateSpec, ctx: Mapping[str, str]) -> Optional[str]:
    """Render the per-file notice some licenses ask you to attach, if any."""
    if not spec.notice:
        return None
    return render_template(spec.notice, template_context(spec, ctx))


def render_interactive(spec: TemplateSpec, ctx: Mapping[str, str]) -> Optional[str]:
    if not spec.interactive:
        return None
    return render_template(spec.interactive, template_context(spec, ctx))
