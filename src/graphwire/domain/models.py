from typing import Any, Dict, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field, field_validator

from graphwire.domain.enums import ErrorKind
from graphwire.domain.exceptions import (
    ConstructionError,
    NotConstructibleError,
    NotYetCreatedError,
    ResolutionError,
    TypeNotFoundError,
)
from graphwire.domain.naming import normalize

_ERRORS: Dict[ErrorKind, Type[ResolutionError]] = {
    ErrorKind.TYPE_NOT_FOUND: TypeNotFoundError,
    ErrorKind.NOT_CONSTRUCTIBLE: NotConstructibleError,
    ErrorKind.CONSTRUCTION_FAILED: ConstructionError,
    ErrorKind.NOT_YET_CREATED: NotYetCreatedError,
}


class TypeDescriptor(BaseModel):
    """Metadata derived once for a type identifier.

    Attributes:
        identifier: The canonical identifier described.
        exists: Whether the identifier names a class.
        constructible: Whether the class can be instantiated.
        constructor_parameter_types: Positional constructor parameters in order;
            an identifier for object parameters, None for anything else.
        reason: Why the class is missing or not constructible.
    """

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(..., description="The canonical type identifier.")
    exists: bool = Field(default=False, description="Whether the identifier names a class.")
    constructible: bool = Field(default=False, description="Whether the class can be instantiated.")
    constructor_parameter_types: Tuple[Optional[str], ...] = Field(
        default=(),
        description="Positional constructor parameter types, None for non-object parameters.",
    )
    reason: Optional[str] = Field(default=None, description="Why the type cannot be used.")

    @property
    def dependencies(self) -> Tuple[str, ...]:
        """Object-typed constructor parameters in constructor order."""
        return tuple(parameter for parameter in self.constructor_parameter_types if parameter is not None)


class ResolutionResult(BaseModel):
    """Outcome of a ``create`` or ``get`` call.

    Exactly one of ``instance`` and ``error`` is meaningful: callers check
    ``ok`` (or call ``unwrap``) before using the instance.

    Attributes:
        identifier: The requested identifier after aliasing on success, the
            identifier of the failing type on failure.
        requested: The requested identifier after aliasing, on success and
            on failure. Differs from ``identifier`` when a dependency failed.
        instance: The resolved instance on success.
        error: The failure kind, None on success.
        reason: Why the request failed.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    identifier: str = Field(..., description="The identifier the result is about.")
    requested: Optional[str] = Field(default=None, description="The identifier that was asked for.")
    instance: Optional[Any] = Field(default=None, description="The resolved instance.")
    error: Optional[ErrorKind] = Field(default=None, description="Failure kind, None on success.")
    reason: Optional[str] = Field(default=None, description="Why the request failed.")

    @classmethod
    def success(cls, identifier: str, instance: Any) -> "ResolutionResult":
        return cls(identifier=identifier, requested=identifier, instance=instance)

    @classmethod
    def failure(
        cls,
        identifier: str,
        error: ErrorKind,
        reason: Optional[str] = None,
        requested: Optional[str] = None,
    ) -> "ResolutionResult":
        return cls(identifier=identifier, requested=requested or identifier, error=error, reason=reason)

    @classmethod
    def from_error(cls, error: ResolutionError, requested: Optional[str] = None) -> "ResolutionResult":
        """Build a failure result from a resolution error raised while resolving ``requested``."""
        for kind, error_class in _ERRORS.items():
            if isinstance(error, error_class):
                return cls.failure(error.identifier, kind, error.reason, requested)
        raise ValueError(f"No failure kind for {type(error).__name__}")

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_error(self) -> Optional[ResolutionError]:
        if self.error is None:
            return None
        return _ERRORS[self.error](self.identifier, self.reason)

    def unwrap(self) -> Any:
        """Return the instance, or raise the exception matching the failure.

        Raises:
            ResolutionError: The subclass matching ``error``.
        """
        error = self.to_error()
        if error is not None:
            raise error
        return self.instance

    def __bool__(self) -> bool:
        return self.ok


class AliasTable(BaseModel):
    """Static mapping from abstract identifiers to concrete identifiers.

    Keys and values are normalized on validation; values may be given as
    classes. The table is frozen once built.

    Attributes:
        aliases: Abstract identifier to concrete identifier.
    """

    model_config = ConfigDict(frozen=True)

    aliases: Dict[str, str] = Field(default_factory=dict, description="Abstract to concrete identifiers.")

    @field_validator("aliases", mode="before")
    @classmethod
    def _normalize_aliases(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        try:
            return {normalize(abstract): normalize(concrete) for abstract, concrete in value.items()}
        except TypeError as e:
            raise ValueError(str(e)) from e

    @classmethod
    def from_mapping(cls, mapping: Optional[Dict[Any, Any]] = None) -> "AliasTable":
        return cls(aliases=dict(mapping or {}))

    def lookup(self, identifier: str) -> Optional[str]:
        return self.aliases.get(identifier)

    def __len__(self) -> int:
        return len(self.aliases)
