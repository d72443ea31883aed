"""unigen -- configuration-driven scaffolding for Unison web applications.

A generator name plus ``--flag value`` arguments are resolved against the
generator's declared schema, shorthand field and operation lists are
normalised, Jinja2 templates are rendered, and the results are created or
appended on disk.

Quick usage::

    from unigen import Config, TemplateRenderer, execute, get_generator, resolve

    resolution = resolve(get_generator("crud-module"), {"entityName": "Workout"})
    execute(resolution.outputs, TemplateRenderer(), resolution.context)
"""

from unigen.config import Config
from unigen.errors import (
    OutputError,
    SpecParseError,
    TemplateError,
    UnigenError,
    UsageError,
    ValidationError,
)
from unigen.registry import GENERATORS, GeneratorDefinition, OutputInstruction, get_generator
from unigen.renderer import TemplateRenderer
from unigen.resolver import Resolution, resolve
from unigen.specs import FieldSpec, OperationSpec, parse_field_specs, parse_operation_specs
from unigen.writer import WriteResult, execute, write_output

__version__ = "0.1.0"

__all__ = [
    "Config",
    "FieldSpec",
    "GENERATORS",
    "GeneratorDefinition",
    "OperationSpec",
    "OutputError",
    "OutputInstruction",
    "Resolution",
    "SpecParseError",
    "TemplateError",
    "TemplateRenderer",
    "UnigenError",
    "UsageError",
    "ValidationError",
    "WriteResult",
    "execute",
    "get_generator",
    "parse_field_specs",
    "parse_operation_specs",
    "resolve",
    "write_output",
]
