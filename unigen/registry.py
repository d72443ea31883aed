"""Generator definitions.

Each generator declares its required arguments, defaults, the expected
shape of every argument, an optional pre-processing step, and an output
plan.  The table is built once at import time and exposed read-only;
look generators up with :func:`get_generator`.

Output target paths are inline Jinja2 templates rendered against the final
context, e.g. ``"{{ entityName | kebab_case }}-crud.u"``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Union

from .casing import lowercase
from .errors import UsageError

DEFAULT_HTML_LIB = "tapegram_html_2_0_0"


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


class ArgKind(str, Enum):
    """Expected shape of a resolved argument value."""

    TEXT = "text"
    FLAG = "flag"
    FIELDS = "fields"
    OPERATIONS = "operations"
    NAMES = "names"


@dataclass(frozen=True)
class ArgSpec:
    kind: ArgKind = ArgKind.TEXT
    choices: tuple[str, ...] = ()


@dataclass(frozen=True)
class OutputInstruction:
    """One planned write: render *template_id* into *target_path*."""

    target_path: str
    template_id: str
    append: bool = False


Context = dict[str, Any]
OutputPlan = Union[tuple[OutputInstruction, ...], Callable[[Context], list[OutputInstruction]]]


@dataclass(frozen=True)
class GeneratorDefinition:
    name: str
    description: str
    output_plan: OutputPlan
    required_args: tuple[str, ...] = ()
    default_args: Mapping[str, Any] = field(default_factory=dict)
    arg_specs: Mapping[str, ArgSpec] = field(default_factory=dict)
    pre_process: Callable[[Context], Context] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "default_args", MappingProxyType(dict(self.default_args)))
        object.__setattr__(self, "arg_specs", MappingProxyType(dict(self.arg_specs)))

    def plan_outputs(self, context: Context) -> list[OutputInstruction]:
        """Evaluate the output plan against the final context."""
        if callable(self.output_plan):
            return list(self.output_plan(context))
        return list(self.output_plan)


TEXT = ArgSpec()
FLAG = ArgSpec(ArgKind.FLAG)
FIELDS = ArgSpec(ArgKind.FIELDS)
OPERATIONS = ArgSpec(ArgKind.OPERATIONS)
NAMES = ArgSpec(ArgKind.NAMES)


# ---------------------------------------------------------------------------
# Output plans and pre-processing steps
# ---------------------------------------------------------------------------


def _primary_output(context: Context, default_path: str, template_id: str) -> OutputInstruction:
    """Target ``--appendTo`` in append mode when given, else *default_path*."""
    if context.get("appendTo"):
        return OutputInstruction(context["appendTo"], template_id, append=True)
    return OutputInstruction(default_path, template_id)


def _single_output(default_path: str, template_id: str) -> Callable[[Context], list[OutputInstruction]]:
    def plan(context: Context) -> list[OutputInstruction]:
        return [_primary_output(context, default_path, template_id)]

    return plan


def _crud_outputs(context: Context) -> list[OutputInstruction]:
    primary = _primary_output(
        context, "{{ entityName | kebab_case }}-crud.u", "crud-module.u"
    )
    outputs = [primary]
    if context.get("includeJson"):
        outputs.append(OutputInstruction(primary.target_path, "json-mappers.u", append=True))
    return outputs


def _default_route_path(context: Context) -> Context:
    if not context.get("routePath"):
        context["routePath"] = lowercase(context["pageName"])
    return context


def _default_repository_name(context: Context) -> Context:
    if not context.get("repositoryName"):
        context["repositoryName"] = context["entityName"] + "Repository"
    return context


# ---------------------------------------------------------------------------
# Generator table
# ---------------------------------------------------------------------------


_DEFINITIONS: tuple[GeneratorDefinition, ...] = (
    GeneratorDefinition(
        name="unison-web-app",
        description="Scaffold a new Unison web application",
        required_args=("appName",),
        default_args={"htmlLib": DEFAULT_HTML_LIB},
        arg_specs={"appName": TEXT, "htmlLib": TEXT},
        output_plan=(
            OutputInstruction("app-main.u", "app-main.u"),
            OutputInstruction("web-utilities.u", "web-utilities.u"),
        ),
    ),
    GeneratorDefinition(
        name="crud-module",
        description="Generate a complete CRUD module (domain, repository, service, routes, pages)",
        required_args=("entityName",),
        default_args={
            "htmlLib": DEFAULT_HTML_LIB,
            "includeJson": True,
            "fields": "name:Text",
            "customOperations": "",
            "appendTo": "",
        },
        arg_specs={
            "entityName": TEXT,
            "htmlLib": TEXT,
            "includeJson": FLAG,
            "fields": FIELDS,
            "customOperations": OPERATIONS,
            "appendTo": TEXT,
        },
        output_plan=_crud_outputs,
    ),
    GeneratorDefinition(
        name="ability-handler",
        description="Generate a port (ability) and adapter (handler)",
        required_args=("abilityName",),
        default_args={
            "adapterType": "Custom",
            "includeFake": True,
            "operations": '[{"name":"doSomething","inputType":"Text","outputType":"()"}]',
            "appendTo": "",
        },
        arg_specs={
            "abilityName": TEXT,
            "adapterType": ArgSpec(ArgKind.TEXT, choices=("Database", "Http", "Custom")),
            "includeFake": FLAG,
            "operations": OPERATIONS,
            "appendTo": TEXT,
        },
        output_plan=_single_output(
            "{{ abilityName | kebab_case }}-port-adapter.u", "ability-handler.u"
        ),
    ),
    GeneratorDefinition(
        name="json-mappers",
        description="Generate JSON encoder/decoder for a type",
        required_args=("typeName",),
        default_args={"fields": "id:Text,name:Text", "appendTo": ""},
        arg_specs={"typeName": TEXT, "fields": FIELDS, "appendTo": TEXT},
        output_plan=_single_output(
            "{{ typeName | kebab_case }}-json.u", "json-mappers-standalone.u"
        ),
    ),
    GeneratorDefinition(
        name="page-route",
        description="Generate a page, controller, and route",
        required_args=("pageName",),
        default_args={
            "routePath": "",
            "httpMethod": "GET",
            "hasParams": False,
            "htmlLib": DEFAULT_HTML_LIB,
            "appendTo": "",
        },
        arg_specs={
            "pageName": TEXT,
            "routePath": TEXT,
            "httpMethod": ArgSpec(ArgKind.TEXT, choices=("GET", "POST", "PUT", "DELETE")),
            "hasParams": FLAG,
            "htmlLib": TEXT,
            "appendTo": TEXT,
        },
        pre_process=_default_route_path,
        output_plan=_single_output("{{ pageName | kebab_case }}-page.u", "page-route.u"),
    ),
    GeneratorDefinition(
        name="api-client",
        description="Generate an HTTP API client with ability",
        required_args=("clientName",),
        default_args={
            "baseUrl": "api.example.com",
            "operations": (
                '[{"name":"getData","httpMethod":"GET","endpoint":"/data","responseType":"Json"}]'
            ),
            "appendTo": "",
        },
        arg_specs={
            "clientName": TEXT,
            "baseUrl": TEXT,
            "operations": OPERATIONS,
            "appendTo": TEXT,
        },
        output_plan=_single_output(
            "{{ clientName | kebab_case }}-api-client.u", "api-client.u"
        ),
    ),
    GeneratorDefinition(
        name="service-tests",
        description="Generate tests for a service",
        required_args=("serviceName", "entityName"),
        default_args={
            "repositoryName": "",
            "operations": ("create", "get", "listAll", "update", "delete"),
            "appendTo": "",
        },
        arg_specs={
            "serviceName": TEXT,
            "entityName": TEXT,
            "repositoryName": TEXT,
            "operations": NAMES,
            "appendTo": TEXT,
        },
        pre_process=_default_repository_name,
        output_plan=_single_output(
            "{{ serviceName | kebab_case }}-tests.u", "service-tests.u"
        ),
    ),
    GeneratorDefinition(
        name="auth-module",
        description="Generate authentication module (login, signup, sessions)",
        default_args={
            "htmlLib": DEFAULT_HTML_LIB,
            "cookieName": "session",
            "sessionDays": "30",
            "minPasswordLength": "8",
            "saltPrefix": "monorail",
            "appendTo": "",
        },
        arg_specs={
            "htmlLib": TEXT,
            "cookieName": TEXT,
            "sessionDays": TEXT,
            "minPasswordLength": TEXT,
            "saltPrefix": TEXT,
            "appendTo": TEXT,
        },
        output_plan=_single_output("auth.u", "auth-module.u"),
    ),
)

GENERATORS: Mapping[str, GeneratorDefinition] = MappingProxyType(
    {definition.name: definition for definition in _DEFINITIONS}
)


def generator_names() -> list[str]:
    return list(GENERATORS)


def get_generator(name: str) -> GeneratorDefinition:
    """Look up a generator by name.

    Raises:
        UsageError: *name* is not a known generator.
    """
    try:
        return GENERATORS[name]
    except KeyError:
        raise UsageError(f"Unknown generator: {name}", generator_names()) from None
