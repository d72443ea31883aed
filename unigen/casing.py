"""Text-case helpers used by templates and output paths.

Every function here is total: any input string produces a string, and
nothing raises.  Pluralisation is a suffix heuristic, so irregular nouns
(``person``, ``child``, ``mouse``) and ``vowel + y`` words (``key`` ->
``keies``) come out wrong; templates that need those should take the plural
as an explicit argument.
"""

from __future__ import annotations

import re

_SEGMENT_BREAK = re.compile(r"[-_\s]+(.)?")
_LOWER_UPPER = re.compile(r"([a-z])([A-Z])")


def _join_segments(value: str) -> str:
    return _SEGMENT_BREAK.sub(lambda m: (m.group(1) or "").upper(), value)


def pascal_case(value: str) -> str:
    """Convert ``user-name`` / ``user_name`` / ``user name`` to ``UserName``."""
    joined = _join_segments(value)
    return joined[:1].upper() + joined[1:]


def camel_case(value: str) -> str:
    """Convert ``user-name`` / ``user_name`` / ``user name`` to ``userName``."""
    joined = _join_segments(value)
    return joined[:1].lower() + joined[1:]


def kebab_case(value: str) -> str:
    """Convert ``UserName`` or ``user_name`` to ``user-name``."""
    value = _LOWER_UPPER.sub(r"\1-\2", value)
    return re.sub(r"[_\s]+", "-", value).lower()


def snake_case(value: str) -> str:
    """Convert ``UserName`` or ``user-name`` to ``user_name``."""
    value = _LOWER_UPPER.sub(r"\1_\2", value)
    return re.sub(r"[-\s]+", "_", value).lower()


def lowercase(value: str) -> str:
    return value.lower()


def uppercase(value: str) -> str:
    return value.upper()


def pluralize(word: str) -> str:
    """Simple English pluralization."""
    if word.endswith("y"):
        return word[:-1] + "ies"
    if word.endswith(("s", "x", "ch", "sh")):
        return word + "es"
    return word + "s"


def singularize(word: str) -> str:
    """Simple English singularization, the inverse of :func:`pluralize`."""
    if word.endswith("ies") and len(word) > 3:
        return word[:-3] + "y"
    if word.endswith(("ses", "xes", "ches", "shes")):
        return word[:-2]
    if word.endswith("s") and not word.endswith("ss"):
        return word[:-1]
    return word


CASE_HELPERS = {
    "pascal_case": pascal_case,
    "camel_case": camel_case,
    "kebab_case": kebab_case,
    "snake_case": snake_case,
    "lowercase": lowercase,
    "uppercase": uppercase,
    "pluralize": pluralize,
    "singularize": singularize,
}
