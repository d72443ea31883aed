"""Argument resolution: CLI bag -> validated render context + output plan.

Steps, in order:

1. merge generator defaults with CLI values (CLI wins);
2. collect every missing required argument and every shape problem, and
   raise them together as one :class:`~unigen.errors.ValidationError`;
3. normalise shorthand strings into structured lists according to each
   argument's declared :class:`~unigen.registry.ArgKind`;
4. run the generator's own pre-processing step;
5. evaluate the output plan against the final context.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

from .errors import ValidationError
from .registry import ArgKind, ArgSpec, GeneratorDefinition, OutputInstruction
from .specs import parse_name_list, try_parse_field_specs, try_parse_operation_specs


@dataclass
class Resolution:
    """Fully resolved invocation: context, planned outputs, and warnings."""

    context: dict[str, Any]
    outputs: list[OutputInstruction]
    warnings: list[str] = field(default_factory=list)


def merge_args(definition: GeneratorDefinition, cli_args: dict[str, Any]) -> dict[str, Any]:
    context = copy.deepcopy(dict(definition.default_args))
    for key, value in context.items():
        if isinstance(value, tuple):
            context[key] = list(value)
    context.update(cli_args)
    return context


def missing_required(definition: GeneratorDefinition, context: dict[str, Any]) -> list[str]:
    """Return every required argument that is absent or falsy, in declaration order."""
    return [name for name in definition.required_args if not context.get(name)]


def shape_problems(definition: GeneratorDefinition, context: dict[str, Any]) -> list[str]:
    """Check each declared argument's value against its :class:`ArgSpec`."""
    problems: list[str] = []
    for name, spec in definition.arg_specs.items():
        if name not in context:
            continue
        problem = _check_shape(name, context[name], spec)
        if problem:
            problems.append(problem)
    return problems


def resolve(
    definition: GeneratorDefinition,
    cli_args: dict[str, Any],
    *,
    strict: bool = False,
) -> Resolution:
    """Resolve *cli_args* for *definition*.

    Args:
        definition: The generator being invoked.
        cli_args: Flat ``{flag: value}`` bag from the command line.  Values
            are strings or booleans.
        strict: Treat a malformed fields/operations list as a validation
            failure instead of degrading it to an empty list.

    Returns:
        The resolved :class:`Resolution`.

    Raises:
        ValidationError: One or more required arguments are missing, or
            values have the wrong shape.  All problems are reported at once.
    """
    context = merge_args(definition, cli_args)

    missing = missing_required(definition, context)
    problems = shape_problems(definition, context)
    if missing or problems:
        raise ValidationError(definition.name, missing, problems)

    warnings: list[str] = []
    for name, spec in definition.arg_specs.items():
        value = context.get(name)
        if not isinstance(value, str):
            continue
        if spec.kind is ArgKind.NAMES:
            context[name] = parse_name_list(value)
        elif spec.kind in (ArgKind.FIELDS, ArgKind.OPERATIONS):
            parse = try_parse_field_specs if spec.kind is ArgKind.FIELDS else try_parse_operation_specs
            result = parse(value)
            if result.error is not None:
                if strict:
                    problems.append(f"--{name}: {result.error}")
                else:
                    warnings.append(f"--{name}: {result.error}; continuing with no {spec.kind.value}")
            context[name] = result.unwrap_or_empty()

    if problems:
        raise ValidationError(definition.name, problems=problems)

    if definition.pre_process is not None:
        context = definition.pre_process(context)

    return Resolution(
        context=context,
        outputs=definition.plan_outputs(context),
        warnings=warnings,
    )


def _check_shape(name: str, value: Any, spec: ArgSpec) -> str | None:
    if spec.kind is ArgKind.FLAG:
        if not isinstance(value, bool):
            return f"--{name} expects true or false, got {value!r}"
        return None

    if isinstance(value, bool):
        return f"--{name} expects a value"

    if spec.kind is ArgKind.TEXT and spec.choices and value not in spec.choices:
        return f"--{name} must be one of {', '.join(spec.choices)}, got {value!r}"
    return None
