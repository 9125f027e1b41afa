import logging
from typing import List

from graphwire.application.alias_resolver import AliasResolver
from graphwire.application.circular_detector import CircularDependencyDetector
from graphwire.domain import ITypeInspector, NotConstructibleError, TypeNotFoundError

logger = logging.getLogger(__name__)


class DependencyTreeBuilder:
    """Expands a root type into the pre-order list of its transitive dependencies.

    The tree keeps duplicates: a type shared by several branches appears once
    per branch. Every identifier is validated while it is expanded, so a tree
    that is returned contains only constructible types.

    Attributes:
        _inspector: Source of dependency lists.
        _aliases: Alias substitution for discovered dependencies.
        _circular_detector: Tracks the active expansion path.
    """

    def __init__(
        self,
        inspector: ITypeInspector,
        aliases: AliasResolver,
        circular_detector: CircularDependencyDetector,
    ) -> None:
        self._inspector = inspector
        self._aliases = aliases
        self._circular_detector = circular_detector

    def build(self, root: str) -> List[str]:
        """Build the dependency tree of an already aliased root identifier.

        Args:
            root: Canonical, aliased identifier of the requested type.

        Returns:
            Depth-first pre-order traversal starting with ``root``.

        Raises:
            TypeNotFoundError: If the root or a transitive dependency is missing.
            NotConstructibleError: If one of them cannot be instantiated.
            CircularDependencyError: If a type depends on itself, directly or not.

        Example:
            >>> # D(B, C), B(A), C(A)
            >>> builder.build("app.D")
            ['app.D', 'app.B', 'app.A', 'app.C', 'app.A']
        """
        tree: List[str] = []
        self._expand(root, tree)
        logger.debug("Dependency tree for %s: %s", root, tree)
        return tree

    def _expand(self, identifier: str, tree: List[str]) -> None:
        self._circular_detector.push(identifier)
        try:
            descriptor = self._inspector.describe(identifier)
            if not descriptor.exists:
                raise TypeNotFoundError(identifier, descriptor.reason)
            if not descriptor.constructible:
                raise NotConstructibleError(identifier, descriptor.reason)

            tree.append(identifier)
            for dependency in self._inspector.list_dependencies(identifier):
                self._expand(self._aliases.resolve(dependency), tree)
        finally:
            self._circular_detector.pop()
