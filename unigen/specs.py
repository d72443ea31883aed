"""Field and operation spec parsing.

Generators accept field lists in two notations::

    name:Text,count:Nat,active:Boolean
    [{"name": "name", "type": "Text"}, {"name": "count", "type": "Nat"}]

and operation lists as a JSON array only::

    [{"name": "get", "inputType": "Text", "outputType": "Optional User"}]

The ``try_parse_*`` functions return a :class:`ParseResult` so the caller
decides what a malformed list means.  ``parse_field_specs`` and
``parse_operation_specs`` are the fail-soft forms: they print the parse
error as a warning and return an empty list.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import SpecParseError
from .utils import print_warning

DEFAULT_FIELD_TYPE = "Text"


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class FieldSpec(BaseModel):
    """A single record field: ``name`` and its Unison type."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., description="Field name, e.g. 'title'")
    type: str = Field(default=DEFAULT_FIELD_TYPE, description="Unison type, e.g. 'Optional Nat'")

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("field name must not be empty")
        return value


class OperationSpec(BaseModel):
    """A repository, ability, or HTTP operation.

    Which optional keys matter depends on the template consuming it.
    """

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., description="Operation name, e.g. 'getByEmail'")
    inputType: Optional[str] = Field(default=None, description="Argument type")
    outputType: Optional[str] = Field(default=None, description="Return type")
    httpMethod: Optional[str] = Field(default=None, description="GET, POST, ...")
    endpoint: Optional[str] = Field(default=None, description="Path below the base URL")
    responseType: Optional[str] = Field(default=None, description="Decoded response type")


SpecT = TypeVar("SpecT", FieldSpec, OperationSpec)


@dataclass
class ParseResult(Generic[SpecT]):
    """Outcome of parsing a spec list: the specs, or the reason there are none."""

    specs: list[SpecT] = field(default_factory=list)
    error: SpecParseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap_or_empty(self) -> list[SpecT]:
        return list(self.specs) if self.ok else []


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def try_parse_field_specs(text: str | None) -> ParseResult[FieldSpec]:
    """Parse a field list from JSON or ``name:Type`` shorthand."""
    if not text:
        return ParseResult()

    if text.strip().startswith("["):
        return _parse_json_array(text, FieldSpec, "fields")

    specs: list[FieldSpec] = []
    for segment in text.split(","):
        name, _, type_name = segment.partition(":")
        name = name.strip()
        if not name:
            continue
        specs.append(FieldSpec(name=name, type=type_name.strip() or DEFAULT_FIELD_TYPE))
    return ParseResult(specs=specs)


def try_parse_operation_specs(text: str | None) -> ParseResult[OperationSpec]:
    """Parse an operation list.  Only the JSON array form is accepted."""
    if not text:
        return ParseResult()
    return _parse_json_array(text, OperationSpec, "operations")


def parse_field_specs(text: str | None) -> list[FieldSpec]:
    return _or_warn(try_parse_field_specs(text))


def parse_operation_specs(text: str | None) -> list[OperationSpec]:
    return _or_warn(try_parse_operation_specs(text))


def parse_name_list(text: str | None) -> list[str]:
    """Split ``create, get,listAll`` into ``["create", "get", "listAll"]``."""
    if not text:
        return []
    return [part.strip() for part in text.split(",") if part.strip()]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _parse_json_array(text: str, model: type[SpecT], kind: str) -> ParseResult[SpecT]:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        return ParseResult(error=SpecParseError(kind, text, str(exc)))

    if not isinstance(raw, list):
        return ParseResult(
            error=SpecParseError(kind, text, f"expected a JSON array, got {type(raw).__name__}")
        )

    try:
        specs = [model.model_validate(item) for item in raw]
    except PydanticValidationError as exc:
        reason = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'item'}: {err['msg']}"
            for err in exc.errors()
        )
        return ParseResult(error=SpecParseError(kind, text, reason))
    return ParseResult(specs=specs)


def _or_warn(result: ParseResult[SpecT]) -> list[SpecT]:
    if result.error is not None:
        print_warning(str(result.error))
    return result.unwrap_or_empty()
