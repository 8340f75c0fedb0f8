"""Tests for the operation registry and its result envelope mapping."""

import pytest

from github_pages_mcp.models.pages import RepositoryInput
from github_pages_mcp.registry.operation_registry import (
    ErrorKind,
    InvalidOperationDescriptor,
    OperationAlreadyRegistered,
    OperationDescriptor,
    OperationMetadata,
    OperationNotFound,
    OperationRegistry,
    OperationResult,
)
from github_pages_mcp.registry.operations import create_pages_registry
from github_pages_mcp.validators import schema as s

EXPECTED_ORDER = [
    "enable_github_pages",
    "get_github_pages_info",
    "deploy_to_github_pages",
    "disable_github_pages",
    "update_github_pages_config",
]


async def noop_handler(client, params):
    return OperationResult.ok("done")


def make_descriptor(name="noop", **kwargs):
    return OperationDescriptor(
        name=name,
        description=kwargs.pop("description", "Does nothing"),
        input_schema=kwargs.pop("input_schema", s.ObjectSchema({"owner": s.string()})),
        input_model=RepositoryInput,
        handler=kwargs.pop("handler", noop_handler),
        **kwargs,
    )


class TestPagesRegistry:

    def test_exactly_five_operations_in_order(self):
        registry = create_pages_registry()

        assert [op.name for op in registry.list()] == EXPECTED_ORDER
        assert len(registry) == 5

    def test_listing_is_stable(self):
        registry = create_pages_registry()

        assert [op.name for op in registry.list()] == [op.name for op in registry.list()]

    def test_every_schema_requires_owner_and_repo(self):
        for operation in create_pages_registry().list():
            required = operation.input_schema.required_fields()
            assert required[:2] == ["owner", "repo"], operation.name

    def test_only_info_is_read_only(self):
        read_only = [op.name for op in create_pages_registry().list() if op.metadata.read_only]

        assert read_only == ["get_github_pages_info"]

    def test_get_unknown(self):
        registry = create_pages_registry()

        with pytest.raises(OperationNotFound, match="Unknown tool: publish_site"):
            registry.get("publish_site")

    def test_independent_registries(self):
        # No global state shared between registries
        assert create_pages_registry() is not create_pages_registry()


class TestRegistration:

    def test_duplicate_rejected(self):
        registry = OperationRegistry()
        registry.register(make_descriptor())

        with pytest.raises(OperationAlreadyRegistered):
            registry.register(make_descriptor())

    @pytest.mark.parametrize("kwargs", [
        {"name": ""},
        {"description": ""},
        {"handler": None},
        {"input_schema": {"type": "object"}},
    ])
    def test_invalid_descriptor(self, kwargs):
        registry = OperationRegistry()

        with pytest.raises(InvalidOperationDescriptor):
            registry.register(make_descriptor(**kwargs))

    def test_default_metadata(self):
        descriptor = make_descriptor()

        assert descriptor.metadata == OperationMetadata()
        assert descriptor.metadata.read_only is False


class TestOperationResult:

    def test_success_envelope(self):
        result = OperationResult.ok("Files deployed successfully", commit_sha="abc", files_deployed=2)

        assert result.to_envelope() == {
            "success": True,
            "message": "Files deployed successfully",
            "commit_sha": "abc",
            "files_deployed": 2,
        }
        assert not result.is_error

    def test_success_envelope_without_message(self):
        result = OperationResult.ok(status="built")

        assert result.to_envelope() == {"success": True, "status": "built"}

    def test_upstream_failure_defaults_details(self):
        result = OperationResult.failure(ErrorKind.UPSTREAM, "Bad credentials")

        assert result.to_envelope() == {
            "success": False,
            "error": "Bad credentials",
            "details": "Unknown error",
        }
        assert result.is_error

    def test_upstream_failure_keeps_body(self):
        body = {"message": "Bad credentials"}
        result = OperationResult.failure(ErrorKind.UPSTREAM, "Bad credentials", details=body)

        assert result.to_envelope()["details"] == body

    def test_not_enabled_is_not_an_error(self):
        result = OperationResult.failure(ErrorKind.NOT_ENABLED, "GitHub Pages is not enabled for this repository")

        assert result.to_envelope() == {
            "success": False,
            "error": "GitHub Pages is not enabled for this repository",
        }
        assert not result.is_error

    @pytest.mark.parametrize("kind", [
        ErrorKind.VALIDATION,
        ErrorKind.UNKNOWN_TOOL,
        ErrorKind.PRECONDITION,
    ])
    def test_local_failures_are_errors(self, kind):
        result = OperationResult.failure(kind, "nope")

        assert result.is_error
        assert "details" not in result.to_envelope()
