import logging
import threading
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from graphwire.application.alias_resolver import AliasResolver
from graphwire.application.circular_detector import CircularDependencyDetector
from graphwire.application.instantiator import Instantiator
from graphwire.application.registry import ObjectRegistry
from graphwire.application.tree_builder import DependencyTreeBuilder
from graphwire.application.type_cache import TypeDescriptorCache
from graphwire.domain import (
    AliasTable,
    ErrorKind,
    IContainer,
    ResolutionError,
    ResolutionResult,
    TypeDescriptor,
    TypeReference,
    normalize,
)

logger = logging.getLogger(__name__)

_MISSING = object()


class DIContainer(IContainer):
    """Automatic object-graph builder holding one instance per concrete type.

    Inspects constructor type hints to discover dependencies, creates missing
    dependencies from the leaves up and memoizes every instance for the
    lifetime of the container. Abstract types are mapped to concrete ones by
    an alias table fixed at construction.

    ``create`` and ``get`` report recoverable failures as
    :class:`ResolutionResult` values. Dependency cycles and internal
    inconsistencies are raised.

    Attributes:
        _lock: Single lock guarding caches and registry; reentrant so
            constructors may call back into the container.
        _type_cache: Cached type descriptors and dependency lists.
        _aliases: Alias substitution.
        _registry: Created singleton instances.
        _circular_detector: Active resolution path.
        _tree_builder: Dependency tree expansion.
        _instantiator: Leaf-to-root construction.
    """

    def __init__(self, aliases: Optional[Union[AliasTable, Mapping[TypeReference, TypeReference]]] = None) -> None:
        """Initialize the container with an optional alias table.

        Args:
            aliases: An :class:`AliasTable`, or a mapping from abstract to
                concrete types given as identifiers or classes.
        """
        self._lock = threading.RLock()
        self._type_cache = TypeDescriptorCache()
        self._registry = ObjectRegistry()
        self._circular_detector = CircularDependencyDetector()

        if isinstance(aliases, AliasTable):
            table = aliases
        else:
            mapping = dict(aliases or {})
            for reference in [*mapping.keys(), *mapping.values()]:
                if isinstance(reference, type):
                    self._type_cache.remember(reference)
            table = AliasTable.from_mapping(mapping)

        self._aliases = AliasResolver(table)
        self._tree_builder = DependencyTreeBuilder(self._type_cache, self._aliases, self._circular_detector)
        self._instantiator = Instantiator(self._type_cache, self._aliases, self._registry, self._circular_detector)

    @property
    def aliases(self) -> Dict[str, str]:
        """Copy of the alias table."""
        return dict(self._aliases.table.aliases)

    def _identify(self, type_identifier: TypeReference) -> str:
        if isinstance(type_identifier, type):
            identifier = self._type_cache.remember(type_identifier)
        else:
            identifier = normalize(type_identifier)
        return self._aliases.resolve(identifier)

    def create(self, type_identifier: TypeReference, extra_args: Optional[Sequence[Any]] = None) -> ResolutionResult:
        """Create, store and return the singleton instance of a type.

        Normalizes and aliases the identifier, builds its dependency tree and
        instantiates every missing type from the leaves up. An instance that
        already exists is returned as is.

        Args:
            type_identifier: Dotted path (``"app.services.UserService"``) or class.
            extra_args: Positional arguments appended after the resolved
                dependencies of the requested type only. Ignored when the
                instance already exists.

        Returns:
            A successful result holding the instance, or a failure with kind
            ``TYPE_NOT_FOUND``, ``NOT_CONSTRUCTIBLE`` or ``CONSTRUCTION_FAILED``.
            On failure no new instance is registered.

        Raises:
            CircularDependencyError: If the dependency graph contains a cycle,
                or a constructor re-enters the container for a type being built.

        Example:
            >>> container = DIContainer({"app.IRepository": "app.SqlRepository"})
            >>> result = container.create("app.UserService", [42])
            >>> if result.ok:
            ...     service = result.instance
        """
        with self._lock:
            identifier = self._identify(type_identifier)

            existing = self._instantiator.find(identifier, _MISSING)
            if existing is not _MISSING:
                if extra_args:
                    logger.warning("Instance of %s already exists, ignoring extra arguments", identifier)
                return ResolutionResult.success(identifier, existing)

            try:
                tree = self._tree_builder.build(identifier)
                instance = self._instantiator.instantiate(identifier, tree, extra_args)
            except ResolutionError as e:
                logger.warning("Could not create %s: %s", identifier, e)
                return ResolutionResult.from_error(e, requested=identifier)

            logger.debug("Created %s", identifier)
            return ResolutionResult.success(identifier, instance)

    def get(self, type_identifier: TypeReference) -> ResolutionResult:
        """Return a previously created instance without ever creating one.

        Args:
            type_identifier: Dotted path or class.

        Returns:
            A successful result, or a ``NOT_YET_CREATED`` failure.
        """
        with self._lock:
            identifier = self._identify(type_identifier)
            instance = self._instantiator.find(identifier, _MISSING)
            if instance is _MISSING:
                return ResolutionResult.failure(identifier, ErrorKind.NOT_YET_CREATED)
            return ResolutionResult.success(identifier, instance)

    def resolve(self, type_identifier: TypeReference, extra_args: Optional[Sequence[Any]] = None) -> Any:
        """Create the instance of a type and return it, raising on failure.

        Raises:
            TypeNotFoundError: If the type or a dependency does not exist.
            NotConstructibleError: If the type or a dependency cannot be instantiated.
            ConstructionError: If a constructor raised.
            CircularDependencyError: If the dependency graph contains a cycle.

        Example:
            >>> user_service = container.resolve(UserService)
        """
        return self.create(type_identifier, extra_args).unwrap()

    def is_created(self, type_identifier: TypeReference) -> bool:
        return self.get(type_identifier).ok

    def registered_types(self) -> List[str]:
        """Identifiers of the created instances, in creation order."""
        with self._lock:
            return list(self._registry.identifiers())

    def describe(self, type_identifier: TypeReference) -> TypeDescriptor:
        """Return the cached constructor metadata of a type, after aliasing."""
        with self._lock:
            return self._type_cache.describe(self._identify(type_identifier))

    def list_dependencies(self, type_identifier: TypeReference) -> Tuple[str, ...]:
        """Return the object dependencies of a type, in constructor order, after aliasing."""
        with self._lock:
            identifier = self._identify(type_identifier)
            dependencies = self._type_cache.list_dependencies(identifier)
            return tuple(self._aliases.resolve(dependency) for dependency in dependencies)

    def build_tree(self, type_identifier: TypeReference) -> List[str]:
        """Return the pre-order dependency tree of a type without creating anything.

        Raises:
            TypeNotFoundError: If the type or a dependency does not exist.
            NotConstructibleError: If the type or a dependency cannot be instantiated.
            CircularDependencyError: If the dependency graph contains a cycle.
        """
        with self._lock:
            return self._tree_builder.build(self._identify(type_identifier))

    def clear(self) -> None:
        """Discard every created instance.

        Type metadata stays cached since classes do not change during the
        lifetime of the container. Useful for testing.
        """
        with self._lock:
            self._registry.clear()
            self._circular_detector.clear()
