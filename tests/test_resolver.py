"""Unit tests for argument resolution (unigen.resolver).

Tests cover:
- Defaults merged under CLI values
- Aggregated ValidationError for missing required args and shape problems
- Shorthand normalisation (fields, operations, name lists)
- Fail-soft vs strict handling of malformed spec JSON
- Generator pre-processing (computed defaults)
- Output plan evaluation
"""

from __future__ import annotations

import pytest

from unigen.errors import ValidationError
from unigen.registry import (
    ArgKind,
    ArgSpec,
    GeneratorDefinition,
    OutputInstruction,
    get_generator,
)
from unigen.resolver import merge_args, missing_required, resolve
from unigen.specs import FieldSpec, OperationSpec

pytestmark = pytest.mark.unit


@pytest.fixture
def two_required() -> GeneratorDefinition:
    return GeneratorDefinition(
        name="two-required",
        description="needs two args",
        required_args=("entityName", "serviceName"),
        arg_specs={"entityName": ArgSpec(), "serviceName": ArgSpec()},
        output_plan=(OutputInstruction("out.u", "hello.u"),),
    )


class TestMerge:
    def test_cli_wins(self):
        ctx = merge_args(get_generator("crud-module"), {"entityName": "Workout", "htmlLib": "h"})
        assert ctx["htmlLib"] == "h"
        assert ctx["includeJson"] is True

    def test_defaults_are_copied(self):
        definition = get_generator("service-tests")
        ctx = merge_args(definition, {})
        ctx["operations"].append("extra")
        assert "extra" not in definition.default_args["operations"]


class TestValidation:
    def test_reports_every_missing_arg(self, two_required):
        with pytest.raises(ValidationError) as exc_info:
            resolve(two_required, {})
        message = str(exc_info.value)
        assert "--entityName" in message
        assert "--serviceName" in message
        assert exc_info.value.missing == ["entityName", "serviceName"]

    def test_empty_string_counts_as_missing(self, two_required):
        assert missing_required(two_required, {"entityName": "", "serviceName": "S"}) == ["entityName"]

    def test_service_tests_requires_both(self):
        with pytest.raises(ValidationError) as exc_info:
            resolve(get_generator("service-tests"), {})
        assert exc_info.value.missing == ["serviceName", "entityName"]

    def test_bare_flag_for_text_arg(self):
        with pytest.raises(ValidationError) as exc_info:
            resolve(get_generator("crud-module"), {"entityName": True})
        assert "--entityName expects a value" in str(exc_info.value)

    def test_string_for_flag_arg(self):
        with pytest.raises(ValidationError) as exc_info:
            resolve(get_generator("crud-module"), {"entityName": "W", "includeJson": "yes"})
        assert "--includeJson expects true or false" in str(exc_info.value)

    def test_choices(self):
        with pytest.raises(ValidationError) as exc_info:
            resolve(get_generator("page-route"), {"pageName": "About", "httpMethod": "PATCH"})
        assert "--httpMethod must be one of GET, POST, PUT, DELETE" in str(exc_info.value)

    def test_missing_and_shape_problems_together(self):
        with pytest.raises(ValidationError) as exc_info:
            resolve(get_generator("page-route"), {"httpMethod": "PATCH"})
        error = exc_info.value
        assert error.missing == ["pageName"]
        assert len(error.problems) == 1

    def test_unknown_keys_pass_through(self):
        resolution = resolve(get_generator("json-mappers"), {"typeName": "Set", "extra": "x"})
        assert resolution.context["extra"] == "x"


class TestNormalisation:
    def test_default_fields_parsed(self):
        resolution = resolve(get_generator("crud-module"), {"entityName": "Workout"})
        assert resolution.context["fields"] == [FieldSpec(name="name", type="Text")]
        assert resolution.context["customOperations"] == []

    def test_fields_shorthand(self, workout_fields):
        resolution = resolve(
            get_generator("json-mappers"), {"typeName": "Workout", "fields": workout_fields}
        )
        assert [f.type for f in resolution.context["fields"]] == [
            "Text", "Nat", "Optional Float", "[Text]",
        ]

    def test_operations_json(self, repository_operations):
        resolution = resolve(
            get_generator("crud-module"),
            {"entityName": "Workout", "customOperations": repository_operations},
        )
        assert resolution.context["customOperations"][1] == OperationSpec(
            name="countAll", inputType="()", outputType="Nat"
        )

    def test_default_operations_parsed(self):
        resolution = resolve(get_generator("api-client"), {"clientName": "GitHub"})
        assert resolution.context["operations"] == [
            OperationSpec(name="getData", httpMethod="GET", endpoint="/data", responseType="Json")
        ]

    def test_name_list(self):
        resolution = resolve(
            get_generator("service-tests"),
            {"serviceName": "WorkoutService", "entityName": "Workout", "operations": "create, get"},
        )
        assert resolution.context["operations"] == ["create", "get"]

    def test_default_name_list_is_a_list(self):
        resolution = resolve(
            get_generator("service-tests"), {"serviceName": "S", "entityName": "E"}
        )
        assert resolution.context["operations"] == ["create", "get", "listAll", "update", "delete"]


class TestMalformedSpecs:
    def test_degrades_to_empty_with_warning(self):
        resolution = resolve(
            get_generator("json-mappers"), {"typeName": "Set", "fields": "[not json"}
        )
        assert resolution.context["fields"] == []
        assert len(resolution.warnings) == 1
        assert resolution.warnings[0].startswith("--fields: Failed to parse fields JSON")

    def test_operations_degrade_to_empty(self):
        resolution = resolve(
            get_generator("ability-handler"), {"abilityName": "Mailer", "operations": "send:Text"}
        )
        assert resolution.context["operations"] == []
        assert "continuing with no operations" in resolution.warnings[0]

    def test_strict_mode_aborts(self):
        with pytest.raises(ValidationError) as exc_info:
            resolve(
                get_generator("json-mappers"),
                {"typeName": "Set", "fields": "[not json"},
                strict=True,
            )
        assert "--fields: Failed to parse fields JSON" in str(exc_info.value)


class TestPreProcess:
    def test_route_path_defaults_to_lowercased_page_name(self):
        resolution = resolve(get_generator("page-route"), {"pageName": "UserProfile"})
        assert resolution.context["routePath"] == "userprofile"

    def test_explicit_route_path_kept(self):
        resolution = resolve(
            get_generator("page-route"), {"pageName": "User", "routePath": "users/:id"}
        )
        assert resolution.context["routePath"] == "users/:id"

    def test_repository_name_derived(self):
        resolution = resolve(
            get_generator("service-tests"), {"serviceName": "WorkoutService", "entityName": "Workout"}
        )
        assert resolution.context["repositoryName"] == "WorkoutRepository"

    def test_custom_pre_process_runs_after_parsing(self):
        seen = {}

        def capture(ctx):
            seen["fields"] = ctx["fields"]
            ctx["count"] = len(ctx["fields"])
            return ctx

        definition = GeneratorDefinition(
            name="custom",
            description="custom",
            arg_specs={"fields": ArgSpec(ArgKind.FIELDS)},
            default_args={"fields": "a,b"},
            pre_process=capture,
            output_plan=(OutputInstruction("x.u", "hello.u"),),
        )
        resolution = resolve(definition, {})
        assert [f.name for f in seen["fields"]] == ["a", "b"]
        assert resolution.context["count"] == 2


class TestOutputs:
    def test_plan_uses_final_context(self):
        resolution = resolve(
            get_generator("crud-module"), {"entityName": "Workout", "includeJson": False}
        )
        assert [o.template_id for o in resolution.outputs] == ["crud-module.u"]

    def test_append_to(self):
        resolution = resolve(
            get_generator("api-client"), {"clientName": "GitHub", "appendTo": "app.u"}
        )
        assert resolution.outputs == [OutputInstruction("app.u", "api-client.u", append=True)]
