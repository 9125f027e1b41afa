"""
Domain layer - Core rules and models.

This layer contains naming rules, value objects and errors for object-graph
construction. It has no dependencies on other layers.
"""

from .enums import ErrorKind
from .exceptions import (
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
from .interfaces import IContainer, IObjectRegistry, ITypeInspector, TypeReference
from .models import AliasTable, ResolutionResult, TypeDescriptor
from .naming import normalize

__all__ = [
    # Enums
    "ErrorKind",
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
    # Interfaces
    "IContainer",
    "IObjectRegistry",
    "ITypeInspector",
    "TypeReference",
    # Models
    "AliasTable",
    "ResolutionResult",
    "TypeDescriptor",
    # Naming
    "normalize",
]
