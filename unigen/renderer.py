"""Jinja2 template rendering for generator outputs.

Provides the TemplateRenderer class which loads ``*.u.j2`` templates from the
bundled ``unigen/templates/`` directory (or a configured override) and
renders them against a resolved argument context.  Output target paths are
themselves small inline templates, rendered with :meth:`render_string`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
    TemplateRuntimeError,
    TemplateSyntaxError,
)

from .casing import CASE_HELPERS
from .errors import TemplateError
from .typemap import decoder_field, encoder_field, field_list, type_fields


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_SUFFIX = ".j2"


# ---------------------------------------------------------------------------
# Comparison / string helpers
# ---------------------------------------------------------------------------


def eq(a: Any, b: Any) -> bool:
    return a == b


def neq(a: Any, b: Any) -> bool:
    return a != b


def starts_with(text: Any, prefix: str) -> bool:
    if not isinstance(text, str):
        return False
    return text.startswith(prefix)


def substring(text: Any, start: int, end: int | None = None) -> str:
    if not isinstance(text, str):
        return ""
    return text[start:end] if end else text[start:]


def split(text: Any, separator: str) -> list[str]:
    if not isinstance(text, str):
        return []
    return [part for part in text.split(separator) if part]


def join(items: Any, separator: str) -> str:
    if not isinstance(items, (list, tuple)):
        return ""
    return separator.join(str(item) for item in items)


def is_last(index: int, items: list[Any]) -> bool:
    return index == len(items) - 1


HELPERS: dict[str, Any] = {
    **CASE_HELPERS,
    "eq": eq,
    "neq": neq,
    "starts_with": starts_with,
    "substring": substring,
    "split": split,
    "join": join,
    "is_last": is_last,
    "encoder_field": encoder_field,
    "decoder_field": decoder_field,
    "field_list": field_list,
    "type_fields": type_fields,
}

# Helpers that read naturally as ``value | helper`` inside templates.
FILTERS = (
    *CASE_HELPERS,
    "encoder_field",
    "decoder_field",
    "field_list",
    "type_fields",
)


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for generator outputs.

    Templates are addressed by id: ``"crud-module.u"`` loads
    ``crud-module.u.j2`` from the template directory.  Undefined variables
    raise instead of rendering as empty text, so a template that references
    an argument its generator never declares fails loudly.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.globals.update(HELPERS)
        for name in FILTERS:
            self.env.filters[name] = HELPERS[name]

    # -- Rendering ---------------------------------------------------------

    def render(self, template_id: str, context: dict[str, Any]) -> str:
        """Render the template *template_id* with the provided context.

        Raises:
            TemplateError: The template does not exist, cannot be read as
                UTF-8, does not parse, or fails while rendering (for example
                a variable missing from *context*).
        """
        name = template_id if template_id.endswith(TEMPLATE_SUFFIX) else template_id + TEMPLATE_SUFFIX
        try:
            template = self.env.get_template(name)
        except TemplateNotFound as exc:
            raise TemplateError(f"Template not found: {self.template_dir / name}") from exc
        except TemplateSyntaxError as exc:
            raise TemplateError(f"Template {name} line {exc.lineno}: {exc.message}") from exc
        except OSError as exc:
            raise TemplateError(f"Cannot read template {self.template_dir / name}: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise TemplateError(
                f"Cannot read template {self.template_dir / name}: not valid UTF-8 ({exc.reason})"
            ) from exc
        return self._render(template, context, name)

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render an inline template string with the provided context.

        Used for output target paths such as
        ``"{{ entityName | kebab_case }}-crud.u"``.
        """
        try:
            template = self.env.from_string(template_string)
        except TemplateSyntaxError as exc:
            raise TemplateError(f"Invalid inline template {template_string!r}: {exc.message}") from exc
        return self._render(template, context, template_string)

    def _render(self, template: Any, context: dict[str, Any], label: str) -> str:
        try:
            return template.render(**context)
        except TemplateRuntimeError as exc:
            raise TemplateError(f"Rendering {label} failed: {exc.message}") from exc

    # -- Utility -----------------------------------------------------------

    def list_templates(self) -> list[str]:
        """Return the sorted ids of all templates in the template directory."""
        if not self.template_dir.is_dir():
            return []
        return sorted(
            p.name[: -len(TEMPLATE_SUFFIX)]
            for p in self.template_dir.glob(f"*{TEMPLATE_SUFFIX}")
        )
