from typing import List, Optional


class DIException(Exception):
    """Base exception for DI-related errors."""


class CircularDependencyError(DIException):
    """Raised when a circular dependency is detected.

    Raised directly rather than reported as a failure result: a cycle would
    otherwise recurse without bound.

    Attributes:
        dependency_chain: Identifiers involved in the cycle, first one repeated at the end.
    """

    def __init__(self, dependency_chain: List[str]) -> None:
        self.dependency_chain = dependency_chain
        message = f"Circular dependency detected: {' -> '.join(dependency_chain)}"
        super().__init__(message)


class ResolutionError(DIException):
    """Base class for failures tied to a single type identifier.

    Attributes:
        identifier: The type identifier that failed.
        reason: Optional reason for the failure.
    """

    summary = "Cannot resolve type"

    def __init__(self, identifier: str, reason: Optional[str] = None) -> None:
        self.identifier = identifier
        self.reason = reason
        message = f"{self.summary}: {identifier}"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class TypeNotFoundError(ResolutionError):
    """Raised when an identifier does not name a known class."""

    summary = "Type not found"


class NotConstructibleError(ResolutionError):
    """Raised when a class exists but cannot be instantiated.

    This occurs when:
    - The class is abstract and no alias points to a concrete class.
    - The class is a Protocol.
    - The constructor signature cannot be inspected.
    """

    summary = "Type is not constructible"


class ConstructionError(ResolutionError):
    """Raised when a constructor raises while the graph is being built."""

    summary = "Failed to construct instance"


class NotYetCreatedError(ResolutionError):
    """Raised when an instance is requested before it was created."""

    summary = "No instance has been created for type"


class InternalConsistencyError(DIException):
    """Raised when the registry contradicts the computed instantiation order.

    Signals a bug in the container, never a user error.
    """


class ConfigurationError(DIException):
    """Raised for an unreadable or malformed alias configuration."""
