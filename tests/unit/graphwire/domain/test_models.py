"""Unit tests for domain models."""

import pytest
from pydantic import ValidationError

from graphwire.domain.enums import ErrorKind
from graphwire.domain.exceptions import (
    ConstructionError,
    InternalConsistencyError,
    NotConstructibleError,
    NotYetCreatedError,
    TypeNotFoundError,
)
from graphwire.domain.models import AliasTable, ResolutionResult, TypeDescriptor


class Repository:
    pass


class SqlRepository(Repository):
    pass


class TestTypeDescriptor:
    """Test cases for the TypeDescriptor model."""

    def test_defaults_describe_missing_type(self):
        """Test that a bare descriptor describes a missing type."""
        descriptor = TypeDescriptor(identifier="app.Missing")

        assert descriptor.exists is False
        assert descriptor.constructible is False
        assert descriptor.constructor_parameter_types == ()
        assert descriptor.reason is None

    def test_dependencies_filter_non_object_parameters(self):
        """Test that dependencies drop None entries and keep order."""
        descriptor = TypeDescriptor(
            identifier="app.Service",
            exists=True,
            constructible=True,
            constructor_parameter_types=("app.B", None, "app.A", None),
        )

        assert descriptor.dependencies == ("app.B", "app.A")

    def test_dependencies_empty_without_parameters(self):
        """Test that a parameterless constructor has no dependencies."""
        descriptor = TypeDescriptor(identifier="app.Service", exists=True, constructible=True)

        assert descriptor.dependencies == ()

    def test_descriptor_is_frozen(self):
        """Test that descriptors cannot be modified."""
        descriptor = TypeDescriptor(identifier="app.Service")

        with pytest.raises(ValidationError):
            descriptor.exists = True

    def test_list_parameter_types_are_coerced_to_tuple(self):
        """Test that parameter types given as a list are stored as a tuple."""
        descriptor = TypeDescriptor(identifier="app.Service", constructor_parameter_types=["app.A", None])

        assert descriptor.constructor_parameter_types == ("app.A", None)


class TestResolutionResult:
    """Test cases for the ResolutionResult model."""

    def test_success(self):
        """Test a successful result."""
        instance = Repository()
        result = ResolutionResult.success("app.Repository", instance)

        assert result.ok is True
        assert result.instance is instance
        assert result.error is None
        assert result.unwrap() is instance

    def test_success_is_truthy(self):
        """Test that successful results are truthy."""
        assert ResolutionResult.success("app.Repository", object())

    def test_failure(self):
        """Test a failed result."""
        result = ResolutionResult.failure("app.Missing", ErrorKind.TYPE_NOT_FOUND, "no class with this name")

        assert result.ok is False
        assert not result
        assert result.instance is None
        assert result.error == ErrorKind.TYPE_NOT_FOUND
        assert result.reason == "no class with this name"

    def test_success_with_falsy_instance_is_truthy(self):
        """Test that truthiness follows ok, not the instance."""
        result = ResolutionResult.success("builtins.list", [])

        assert result
        assert result.unwrap() == []

    @pytest.mark.parametrize(
        "kind, exception_class",
        [
            (ErrorKind.TYPE_NOT_FOUND, TypeNotFoundError),
            (ErrorKind.NOT_CONSTRUCTIBLE, NotConstructibleError),
            (ErrorKind.CONSTRUCTION_FAILED, ConstructionError),
            (ErrorKind.NOT_YET_CREATED, NotYetCreatedError),
        ],
    )
    def test_unwrap_raises_matching_exception(self, kind, exception_class):
        """Test that unwrap raises the exception matching the failure kind."""
        result = ResolutionResult.failure("app.Service", kind, "details")

        with pytest.raises(exception_class) as exc_info:
            result.unwrap()

        assert exc_info.value.identifier == "app.Service"
        assert exc_info.value.reason == "details"

    def test_to_error_on_success_is_none(self):
        """Test that a successful result has no error."""
        assert ResolutionResult.success("app.Repository", object()).to_error() is None

    @pytest.mark.parametrize(
        "error, kind",
        [
            (TypeNotFoundError("app.A"), ErrorKind.TYPE_NOT_FOUND),
            (NotConstructibleError("app.A", "abstract class"), ErrorKind.NOT_CONSTRUCTIBLE),
            (ConstructionError("app.A", "boom"), ErrorKind.CONSTRUCTION_FAILED),
            (NotYetCreatedError("app.A"), ErrorKind.NOT_YET_CREATED),
        ],
    )
    def test_from_error(self, error, kind):
        """Test converting a resolution error into a failure result."""
        result = ResolutionResult.from_error(error)

        assert result.identifier == "app.A"
        assert result.error == kind
        assert result.reason == error.reason

    def test_requested_defaults_to_identifier(self):
        """Test that requested matches identifier unless given."""
        assert ResolutionResult.success("app.Repository", object()).requested == "app.Repository"
        assert ResolutionResult.failure("app.Missing", ErrorKind.TYPE_NOT_FOUND).requested == "app.Missing"

    def test_from_error_keeps_requested_identifier(self):
        """Test that a failing dependency does not hide the requested type."""
        result = ResolutionResult.from_error(TypeNotFoundError("app.Missing"), requested="app.Service")

        assert result.identifier == "app.Missing"
        assert result.requested == "app.Service"

    def test_from_error_rejects_unmapped_errors(self):
        """Test that errors without a failure kind are rejected."""
        with pytest.raises(ValueError):
            ResolutionResult.from_error(InternalConsistencyError("bug"))

    def test_result_is_frozen(self):
        """Test that results cannot be modified."""
        result = ResolutionResult.success("app.Repository", object())

        with pytest.raises(ValidationError):
            result.instance = None


class TestAliasTable:
    """Test cases for the AliasTable model."""

    def test_empty_table(self):
        """Test that the default table has no aliases."""
        table = AliasTable()

        assert table.aliases == {}
        assert len(table) == 0
        assert table.lookup("app.IRepository") is None

    def test_keys_and_values_are_normalized(self):
        """Test that aliases are stored in canonical form."""
        table = AliasTable.from_mapping({".app:IRepository": "app.SqlRepository."})

        assert table.aliases == {"app.IRepository": "app.SqlRepository"}

    def test_classes_are_accepted(self):
        """Test that classes may be used as keys and values."""
        table = AliasTable.from_mapping({Repository: SqlRepository})

        assert table.lookup(f"{__name__}.Repository") == f"{__name__}.SqlRepository"

    def test_lookup(self):
        """Test looking up a configured alias."""
        table = AliasTable(aliases={"app.IRepository": "app.SqlRepository"})

        assert table.lookup("app.IRepository") == "app.SqlRepository"
        assert table.lookup("app.SqlRepository") is None
        assert len(table) == 1

    def test_from_mapping_none(self):
        """Test that a missing mapping yields an empty table."""
        assert AliasTable.from_mapping(None).aliases == {}

    def test_non_mapping_is_rejected(self):
        """Test that aliases must be a mapping."""
        with pytest.raises(ValidationError):
            AliasTable(aliases=["app.IRepository"])

    def test_invalid_identifier_is_rejected(self):
        """Test that non-string identifiers are rejected."""
        with pytest.raises(ValidationError):
            AliasTable(aliases={1: "app.SqlRepository"})

    def test_empty_identifier_is_rejected(self):
        """Test that empty identifiers are rejected."""
        with pytest.raises(ValidationError):
            AliasTable(aliases={"": "app.SqlRepository"})

    def test_table_is_frozen(self):
        """Test that the alias table cannot be reassigned."""
        table = AliasTable()

        with pytest.raises(ValidationError):
            table.aliases = {"app.A": "app.B"}
