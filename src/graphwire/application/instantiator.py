import logging
from typing import Any, Dict, List, Optional, Sequence

from graphwire.application.alias_resolver import AliasResolver
from graphwire.application.circular_detector import CircularDependencyDetector
from graphwire.domain import (
    CircularDependencyError,
    ConstructionError,
    InternalConsistencyError,
    IObjectRegistry,
    ITypeInspector,
)

logger = logging.getLogger(__name__)

_MISSING = object()


class Instantiator:
    """Creates the instances of a dependency tree from the leaves up.

    The tree is walked in reverse. In a pre-order tree every occurrence of a
    type is directly followed by its complete subtree, so in the reversed walk
    the first occurrence of a type comes after the expansion of all of its
    dependencies. Later occurrences are skipped because the type is already
    present.

    Instances created during a walk are staged and only committed to the
    registry once the whole walk has succeeded; a failing walk leaves the
    registry untouched. Walks started from inside a constructor stage on top
    of the outer walk and commit into it.

    Attributes:
        _inspector: Source of classes and dependency lists.
        _aliases: Alias substitution for dependency identifiers.
        _registry: Committed singleton instances.
        _circular_detector: Tracks types whose constructor is running.
        _staging: One layer of uncommitted instances per active walk.
    """

    def __init__(
        self,
        inspector: ITypeInspector,
        aliases: AliasResolver,
        registry: IObjectRegistry,
        circular_detector: CircularDependencyDetector,
    ) -> None:
        self._inspector = inspector
        self._aliases = aliases
        self._registry = registry
        self._circular_detector = circular_detector
        self._staging: List[Dict[str, Any]] = []

    def find(self, identifier: str, default: Any = None) -> Any:
        """Return the committed or staged instance for an identifier, or ``default``."""
        if self._registry.contains(identifier):
            return self._registry.get(identifier)
        for staged in reversed(self._staging):
            if identifier in staged:
                return staged[identifier]
        return default

    def instantiate(
        self,
        class_name: str,
        tree: List[str],
        extra_args: Optional[Sequence[Any]] = None,
    ) -> Any:
        """Create every missing instance of a tree and return the root instance.

        Args:
            class_name: Identifier of the requested type; receives ``extra_args``.
            tree: Pre-order dependency tree of ``class_name``.
            extra_args: Positional arguments appended after the resolved
                dependencies of ``class_name``.

        Returns:
            The instance registered for ``class_name``.

        Raises:
            ConstructionError: If a constructor raises.
            CircularDependencyError: If a constructor re-enters the container for
                a type that is still being built.
            InternalConsistencyError: If a dependency is missing when its dependent
                is constructed.
        """
        staged: Dict[str, Any] = {}
        self._staging.append(staged)
        try:
            for identifier in reversed(tree):
                if self.find(identifier, _MISSING) is not _MISSING:
                    continue

                arguments = [
                    self._require(self._aliases.resolve(dependency), identifier)
                    for dependency in self._inspector.list_dependencies(identifier)
                ]
                if identifier == class_name and extra_args is not None:
                    arguments.extend(extra_args)

                staged[identifier] = self._construct(identifier, arguments)
        finally:
            self._staging.pop()

        self._commit(staged)
        return self.find(class_name)

    def _require(self, dependency: str, dependent: str) -> Any:
        instance = self.find(dependency, _MISSING)
        if instance is _MISSING:
            raise InternalConsistencyError(
                f"Dependency {dependency} of {dependent} was not created before {dependent}"
            )
        return instance

    def _construct(self, identifier: str, arguments: List[Any]) -> Any:
        cls = self._inspector.type_for(identifier)
        logger.debug("Instantiating %s with %d argument(s)", identifier, len(arguments))

        self._circular_detector.push(identifier)
        try:
            return cls(*arguments)
        except (CircularDependencyError, InternalConsistencyError):
            raise
        except Exception as e:
            raise ConstructionError(identifier, f"{type(e).__name__}: {e}") from e
        finally:
            self._circular_detector.pop()

    def _commit(self, staged: Dict[str, Any]) -> None:
        if self._staging:
            self._staging[-1].update(staged)
            return
        for identifier, instance in staged.items():
            self._registry.put(identifier, instance)
