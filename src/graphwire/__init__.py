"""
graphwire: Type-hint based object-graph builder with one instance per type.

Public API exports for the graphwire package.
"""

# Application exports
from graphwire.application.container import DIContainer

# Domain exports
from graphwire.domain.enums import ErrorKind
from graphwire.domain.exceptions import (
    CircularDependencyError,
    ConfigurationError,
    ConstructionError,
    DIException,
    InternalConsistencyError,
    NotConstructibleError,
    NotYetCreatedError,
    ResolutionError,
    TypeNotFoundError,
)
from graphwire.domain.models import AliasTable, ResolutionResult, TypeDescriptor
from graphwire.domain.naming import normalize

__version__ = "0.1.0"

__all__ = [
    # Container
    "DIContainer",
    # Models
    "AliasTable",
    "ResolutionResult",
    "TypeDescriptor",
    # Enums
    "ErrorKind",
    # Naming
    "normalize",
    # Exceptions
    "DIException",
    "CircularDependencyError",
    "ConfigurationError",
    "ConstructionError",
    "InternalConsistencyError",
    "NotConstructibleError",
    "NotYetCreatedError",
    "ResolutionError",
    "TypeNotFoundError",
]
