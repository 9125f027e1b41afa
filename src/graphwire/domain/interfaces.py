from abc import ABC, abstractmethod
from typing import Any, Iterator, Optional, Sequence, Tuple, Union

from graphwire.domain.models import ResolutionResult, TypeDescriptor

TypeReference = Union[str, type]


class IContainer(ABC):
    """Abstract interface for the object-graph container."""

    @abstractmethod
    def create(self, type_identifier: TypeReference, extra_args: Optional[Sequence[Any]] = None) -> ResolutionResult:
        """Create (or reuse) the singleton for a type, wiring its dependencies.

        Args:
            type_identifier: Dotted path or class to create.
            extra_args: Positional arguments appended after the resolved
                dependencies of the requested type.
        """

    @abstractmethod
    def get(self, type_identifier: TypeReference) -> ResolutionResult:
        """Return the already created instance for a type, never creating it.

        Args:
            type_identifier: Dotted path or class to look up.
        """

    @abstractmethod
    def resolve(self, type_identifier: TypeReference, extra_args: Optional[Sequence[Any]] = None) -> Any:
        """Create the instance and return it, raising on failure."""

    @abstractmethod
    def clear(self) -> None:
        """Discard all created instances. Aliases and cached type metadata are kept."""


class ITypeInspector(ABC):
    """Abstract interface for deriving constructor metadata."""

    @abstractmethod
    def describe(self, identifier: str) -> TypeDescriptor:
        """Return the cached descriptor for an identifier, computing it once.

        Args:
            identifier: Canonical type identifier.
        """

    @abstractmethod
    def list_dependencies(self, identifier: str) -> Tuple[str, ...]:
        """Return the object-typed constructor parameters of a type, in order.

        Args:
            identifier: Canonical type identifier.
        """

    @abstractmethod
    def type_for(self, identifier: str) -> type:
        """Return the class behind a constructible identifier."""


class IObjectRegistry(ABC):
    """Abstract interface for the store of singleton instances."""

    @abstractmethod
    def get(self, identifier: str) -> Any:
        """Return the instance registered under an identifier.

        Raises:
            KeyError: If nothing is registered.
        """

    @abstractmethod
    def put(self, identifier: str, instance: Any) -> None:
        """Register the single instance for an identifier."""

    @abstractmethod
    def contains(self, identifier: str) -> bool:
        """Whether an instance is registered under an identifier."""

    @abstractmethod
    def identifiers(self) -> Iterator[str]:
        """Iterate over registered identifiers in registration order."""

    @abstractmethod
    def clear(self) -> None:
        """Drop every registered instance."""
