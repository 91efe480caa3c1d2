"""
Template rendering for scaffolding tasks.

Templates live in appforge/templates and are addressed by relative path,
independent of the current directory. Rendering uses Jinja2 with
StrictUndefined so a misspelled variable fails the run instead of writing
an empty string into the new app.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound, UndefinedError
from loguru import logger

from appforge.errors import TemplateError

TEMPLATES_ROOT = Path(__file__).parent / "templates"


@lru_cache(maxsize=None)
def _environment(templates_root: Path) -> Environment:
    return Environment(
        loader=FileSystemLoader(templates_root),
        autoescape=False,  # generated files are code, not HTML
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


def _write(target: Path, content: str) -> Path:
    target = Path(target)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
    except OSError as e:
        raise TemplateError(f"Could not write {target}: {e}") from e
    return target


def render_template(
    src: str,
    target: Path | str,
    variables: dict[str, Any],
    *,
    templates_root: Path = TEMPLATES_ROOT,
) -> Path:
    """Render templates_root/src with variables and write it to target, overwriting."""
    try:
        template = _environment(Path(templates_root)).get_template(src)
        content = template.render(**variables)
    except TemplateNotFound as e:
        raise TemplateError(f"Template not found: {src} (in {templates_root})") from e
    except UndefinedError as e:
        raise TemplateError(f"Template {src}: {e}") from e

    logger.debug(f"[TEMPLATE] {src} -> {target}")
    return _write(Path(target), content)


def copy(src: str, target: Path | str, *, templates_root: Path = TEMPLATES_ROOT) -> Path:
    """Copy templates_root/src to target verbatim (static assets)."""
    source = Path(templates_root) / src
    try:
        content = source.read_text()
    except FileNotFoundError as e:
        raise TemplateError(f"Template not found: {src} (in {templates_root})") from e
    except OSError as e:
        raise TemplateError(f"Cannot read template {src}: {e}") from e

    logger.debug(f"[COPY] {src} -> {target}")
    return _write(Path(target), content)
