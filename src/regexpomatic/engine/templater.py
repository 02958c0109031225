# src/regexpomatic/engine/templater.py
"""Jinja2-based tag templating.

Each tag template is a sandboxed Jinja2 template rendered against one
record. The render context exposes:

    {{ tags.feature_name }}   tags after field extraction (snapshot)
    {{ data }}                the payload text
    {{ namespace }}           namespace elements (tuple)
    {{ unit }} {{ description }} {{ version }} {{ timestamp }}

Snapshot semantics: every template in a set sees the same tag map, the one
produced by field extraction. A template never observes the output of a
sibling template, regardless of declaration order.

Looking up a tag that is not set renders as the empty string, so a record
kept by its emission policy is never lost because a capture group did not
match. An unknown top-level name or a sandbox refusal still fails.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from jinja2 import ChainableUndefined, TemplateSyntaxError, UndefinedError
from jinja2.exceptions import SecurityError
from jinja2.sandbox import SandboxedEnvironment
from jinja2.utils import missing

from regexpomatic.contracts.errors import InvalidTemplateError, TemplateRenderError
from regexpomatic.contracts.records import Record


class MissingTagUndefined(ChainableUndefined):
    """Undefined that renders missing attributes and items as "".

    ``{{ tags.absent }}`` and ``{{ tags.absent.deeper }}`` render empty.
    Undefined top-level names and sandbox refusals raise when rendered.
    """

    __slots__ = ()

    def __str__(self) -> str:
        if self._undefined_exception is not UndefinedError or self._undefined_obj is missing:
            self._fail_with_undefined_error()
        return ""


# One environment for all templates; SandboxedEnvironment holds no per-render state
_ENV = SandboxedEnvironment(
    undefined=MissingTagUndefined,
    autoescape=False,  # Tags are plain text
)


class TagTemplate:
    """A named, compiled tag template.

    Example:
        template = TagTemplate("label", "yay: {{ tags.feature_name }}")
        template.render(record)  # "yay: 1"
    """

    def __init__(self, name: str, body: str) -> None:
        """Compile template.

        Args:
            name: Tag the rendered value is stored under
            body: Jinja2 template source

        Raises:
            InvalidTemplateError: If template syntax is invalid
        """
        self.name = name
        self.body = body
        try:
            self._template = _ENV.from_string(body)
        except TemplateSyntaxError as e:
            raise InvalidTemplateError(name, str(e)) from e

    def __repr__(self) -> str:
        return f"TagTemplate({self.name!r}, {self.body!r})"

    def render(self, context: dict[str, Any]) -> str:
        """Render template with a prepared context.

        Raises:
            TemplateRenderError: If rendering fails (unknown name, sandbox violation, runtime error)
        """
        try:
            return self._template.render(**context)
        except UndefinedError as e:
            raise TemplateRenderError(self.name, f"Undefined variable: {e}") from e
        except SecurityError as e:
            raise TemplateRenderError(self.name, f"Sandbox violation: {e}") from e
        except Exception as e:
            raise TemplateRenderError(self.name, f"Template rendering failed: {e}") from e


def build_context(record: Record) -> dict[str, Any]:
    """Render context for a record, with a private copy of its tags."""
    return {
        "tags": dict(record.tags),
        "data": record.data,
        "namespace": record.namespace,
        "unit": record.unit,
        "description": record.description,
        "version": record.version,
        "timestamp": record.timestamp,
    }


class TagTemplateSet:
    """Ordered collection of tag templates rendered together."""

    def __init__(self, templates: tuple[TagTemplate, ...] = ()) -> None:
        self._templates = templates

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self) -> Iterator[TagTemplate]:
        return iter(self._templates)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(t.name for t in self._templates)

    def render(self, record: Record) -> dict[str, str]:
        """Render every template against one record.

        Args:
            record: Record whose tags already hold extracted fields

        Returns:
            Tag name -> rendered value, in declaration order

        Raises:
            TemplateRenderError: On the first template that fails
        """
        context = build_context(record)
        return {template.name: template.render(context) for template in self._templates}
