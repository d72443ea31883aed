"""Command-line entry point.

Usage::

    unigen <generator> [--flag value ...]

Examples::

    unigen unison-web-app --appName MyApp
    unigen crud-module --entityName Workout --fields "name:Text,reps:Nat" --includeJson true
    unigen json-mappers --typeName Set --fields "reps:Nat,weight:Optional Float" --appendTo workout-crud.u

Every ``--flag`` is forwarded to the generator.  Engine settings come from
``UNIGEN_*`` environment variables (see :class:`unigen.config.Config`).
"""

from __future__ import annotations

import sys
from typing import Any

from .config import Config
from .errors import OutputError, TemplateError, UsageError, ValidationError
from .registry import GENERATORS, generator_names, get_generator
from .renderer import TemplateRenderer
from .resolver import resolve
from .utils import print_error, print_generator_table, print_info, print_success, print_warning
from .writer import execute

USAGE = "Usage: unigen <generator> --arg value ..."


def parse_args(argv: list[str]) -> tuple[str | None, dict[str, Any]]:
    """Split *argv* into a generator name and a flat ``{flag: value}`` bag.

    A ``--flag`` followed by a token that does not start with ``--`` takes
    that token as its value; otherwise it is boolean ``True``.  The values
    ``"true"`` and ``"false"`` become booleans.
    """
    if not argv:
        return None, {}

    args: dict[str, Any] = {}
    i = 1
    while i < len(argv):
        token = argv[i]
        if token.startswith("--"):
            key = token[2:]
            value = argv[i + 1] if i + 1 < len(argv) else None
            if value and not value.startswith("--"):
                args[key] = _coerce(value)
                i += 1
            else:
                args[key] = True
        i += 1
    return argv[0], args


def _coerce(value: str) -> Any:
    if value == "true":
        return True
    if value == "false":
        return False
    return value


def print_help() -> None:
    print_generator_table((d.name, d.description) for d in GENERATORS.values())
    print_info(USAGE)


def main(argv: list[str] | None = None, config: Config | None = None) -> int:
    """Run one generator invocation and return the process exit code."""
    if argv is None:
        argv = sys.argv[1:]

    generator, args = parse_args(argv)
    if generator is None:
        print_help()
        return 0

    config = config or Config.from_env()

    try:
        definition = get_generator(generator)
        resolution = resolve(definition, args, strict=config.strict_specs)
        for warning in resolution.warnings:
            print_warning(warning)

        renderer = TemplateRenderer(config.template_dir)
        execute(
            resolution.outputs,
            renderer,
            resolution.context,
            base_dir=config.output_dir,
            on_write=lambda result: print_success(f"✓ {result.describe()}"),
        )
    except UsageError as exc:
        print_error(str(exc))
        print_error(f"Available generators: {', '.join(exc.available or generator_names())}")
        return 1
    except ValidationError as exc:
        print_error(str(exc))
        return 1
    except (TemplateError, OutputError) as exc:
        print_error(f"Error: {exc}")
        return 1

    print_info("\nDone! Files generated successfully.")
    return 0


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
