"""Type-name lookup tables for generated JSON encoders and decoders.

A field's declared type is first unwrapped structurally (``Optional T`` and
``[T]``, recursively), then the innermost name is looked up.  Names missing
from the tables are treated as user-defined record types that ship their
own ``<Type>.encoder`` / ``<Type>.decoder``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

OPTIONAL_PREFIX = "Optional "

ADD_FUNCTIONS: dict[str, str] = {
    "Text": "addText",
    "Nat": "addNat",
    "Int": "addInt",
    "Float": "addFloat",
    "Boolean": "addBoolean",
}
FALLBACK_ADD_FUNCTION = "addJson"

ENCODERS: dict[str, str] = {
    "Text": "Json.String",
    "Nat": "Json.Number",
    "Int": "Json.Number",
    "Float": "Json.Number",
    "Boolean": "Json.Boolean",
}

DECODERS: dict[str, str] = {
    "Text": "Decoder.text",
    "Nat": "Decoder.nat",
    "Int": "Decoder.int",
    "Float": "Decoder.float",
    "Boolean": "Decoder.boolean",
}


# ---------------------------------------------------------------------------
# Type structure
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Named:
    name: str


@dataclass(frozen=True)
class OptionalOf:
    inner: "TypeRef"


@dataclass(frozen=True)
class ListOf:
    inner: "TypeRef"


TypeRef = Union[Named, OptionalOf, ListOf]


def parse_type(type_name: str) -> TypeRef:
    """Unwrap ``Optional`` and ``[...]`` wrappers into a :data:`TypeRef` tree.

    ``"Optional [Nat]"`` -> ``OptionalOf(ListOf(Named("Nat")))``.
    """
    text = type_name.strip()
    if text.startswith(OPTIONAL_PREFIX):
        return OptionalOf(parse_type(text[len(OPTIONAL_PREFIX):]))
    if text.startswith("["):
        inner = text[1:-1] if text.endswith("]") else text[1:]
        return ListOf(parse_type(inner))
    return Named(text)


# ---------------------------------------------------------------------------
# Table lookups
# ---------------------------------------------------------------------------


def add_function(type_name: str) -> str:
    """``object.<fn>`` used to add a scalar of *type_name* to a JSON object."""
    return ADD_FUNCTIONS.get(type_name, FALLBACK_ADD_FUNCTION)


def encoder_for(type_ref: TypeRef) -> str:
    """Unison expression of type ``T -> Json`` for *type_ref*."""
    if isinstance(type_ref, OptionalOf):
        inner = encoder_for(type_ref.inner)
        return f"(o -> Optional.getOrElse Json.Null (Optional.map {inner} o))"
    if isinstance(type_ref, ListOf):
        return f"(xs -> Json.Array (List.map {encoder_for(type_ref.inner)} xs))"
    return ENCODERS.get(type_ref.name, f"{type_ref.name}.encoder")


def decoder_for(type_ref: TypeRef) -> str:
    """Unison decoder expression for *type_ref*."""
    if isinstance(type_ref, OptionalOf):
        return f"(Decoder.optional {decoder_for(type_ref.inner)})"
    if isinstance(type_ref, ListOf):
        return f"(Decoder.array {decoder_for(type_ref.inner)})"
    return DECODERS.get(type_ref.name, f"{type_ref.name}.decoder")


# ---------------------------------------------------------------------------
# Per-field snippets
# ---------------------------------------------------------------------------


def _field_parts(field: Any) -> tuple[str, str]:
    if isinstance(field, dict):
        return field["name"], field.get("type") or "Text"
    return field.name, field.type or "Text"


def _add_call(name: str, type_ref: TypeRef, value: str) -> str:
    if isinstance(type_ref, Named):
        fn = add_function(type_ref.name)
        if fn == FALLBACK_ADD_FUNCTION:
            return f'object.{fn} "{name}" ({type_ref.name}.encoder {value})'
        return f'object.{fn} "{name}" {value}'
    if isinstance(type_ref, ListOf):
        return f'object.addArray "{name}" (List.map {encoder_for(type_ref.inner)} {value})'
    return f'object.{FALLBACK_ADD_FUNCTION} "{name}" ({encoder_for(type_ref)} {value})'


def encoder_field(field: Any) -> str:
    """One ``|> object.addX`` line of a record encoder pipeline."""
    name, type_name = _field_parts(field)
    type_ref = parse_type(type_name)
    if isinstance(type_ref, OptionalOf):
        return (
            f"|> (match value.{name} with\n"
            f"      Some v -> {_add_call(name, type_ref.inner, 'v')}\n"
            f"      None -> identity)"
        )
    return f"|> {_add_call(name, type_ref, f'value.{name}')}"


def decoder_field(field: Any) -> str:
    """One ``name = at! "name" decoder`` binding of a record decoder."""
    name, type_name = _field_parts(field)
    type_ref = parse_type(type_name)
    if isinstance(type_ref, OptionalOf):
        return f'{name} = atOptional "{name}" {decoder_for(type_ref.inner)}'
    return f'{name} = at! "{name}" {decoder_for(type_ref)}'


def field_list(fields: list[Any]) -> str:
    """``a, b, c`` -- field names for a record constructor pattern."""
    return ", ".join(_field_parts(f)[0] for f in fields)


def type_fields(fields: list[Any]) -> str:
    """Record body lines ``  , name : Type``."""
    return "\n".join(f"  , {name} : {type_name}" for name, type_name in map(_field_parts, fields))
