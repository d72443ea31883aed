"""Exception hierarchy for the scaffolding engine.

Library code raises these; only the CLI turns them into exit codes.
``SpecParseError`` is the one recoverable kind: the spec parser returns it
inside a ``ParseResult`` instead of raising, and the resolver decides
whether to degrade or abort.
"""

from __future__ import annotations


class UnigenError(Exception):
    """Base class for every error the engine reports to the user."""


class UsageError(UnigenError):
    """No generator, or an unknown generator, was requested."""

    def __init__(self, message: str, available: list[str] | None = None) -> None:
        super().__init__(message)
        self.available = list(available or [])


class ValidationError(UnigenError):
    """Resolved arguments do not satisfy a generator's declared schema.

    ``missing`` lists every absent required argument; ``problems`` lists
    shape problems (wrong kind, value outside ``choices``, unparseable
    spec in strict mode).  Both are reported together.
    """

    def __init__(
        self,
        generator: str,
        missing: list[str] | None = None,
        problems: list[str] | None = None,
    ) -> None:
        self.generator = generator
        self.missing = list(missing or [])
        self.problems = list(problems or [])
        super().__init__(self._format())

    def _format(self) -> str:
        parts: list[str] = []
        if self.missing:
            flags = ", ".join(f"--{name}" for name in self.missing)
            parts.append(f"Missing required arguments: {flags}")
        parts.extend(self.problems)
        return "; ".join(parts) or f"Invalid arguments for {self.generator}"


class SpecParseError(UnigenError):
    """A field or operation list could not be parsed."""

    def __init__(self, kind: str, source: str, reason: str) -> None:
        self.kind = kind
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to parse {kind} JSON: {reason}")


class TemplateError(UnigenError):
    """A template is missing, unreadable, or failed to render."""


class OutputError(UnigenError):
    """A rendered file could not be written."""
