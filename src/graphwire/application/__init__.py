"""
Application layer - Use cases and orchestration.

This layer contains the components that turn a type identifier into a wired
object graph. It depends only on the Domain layer.
"""

from .alias_resolver import AliasResolver
from .circular_detector import CircularDependencyDetector
from .container import DIContainer
from .instantiator import Instantiator
from .registry import ObjectRegistry
from .tree_builder import DependencyTreeBuilder
from .type_cache import TypeDescriptorCache

__all__ = [
    "DIContainer",
    "AliasResolver",
    "CircularDependencyDetector",
    "DependencyTreeBuilder",
    "Instantiator",
    "ObjectRegistry",
    "TypeDescriptorCache",
]
