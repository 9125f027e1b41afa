"""Application layer - Circular dependency detection."""

from typing import List

from graphwire.domain import CircularDependencyError


class CircularDependencyDetector:
    """Tracks the types on the active resolution path.

    Types are pushed while their dependency tree is expanded and while their
    constructor runs, so a type appearing twice on the path (a dependency
    cycle, or a constructor re-entering the container for a type still being
    built) is detected immediately. Holds a single path; callers serialize
    access with the container lock.

    Attributes:
        _path: Identifiers being resolved, outermost first.
    """

    def __init__(self) -> None:
        self._path: List[str] = []

    def push(self, identifier: str) -> None:
        """Add a type identifier to the resolution path.

        Args:
            identifier: The type being resolved.

        Raises:
            CircularDependencyError: If the type is already on the path.

        Example:
            >>> detector = CircularDependencyDetector()
            >>> detector.push("app.ServiceA")
            >>> detector.push("app.ServiceB")
            >>> detector.push("app.ServiceA")  # Raises CircularDependencyError
        """
        if identifier in self._path:
            cycle = self._path[self._path.index(identifier):] + [identifier]
            raise CircularDependencyError(cycle)

        self._path.append(identifier)

    def pop(self) -> None:
        """Remove the last identifier from the resolution path."""
        if self._path:
            self._path.pop()

    def active(self) -> List[str]:
        """Return a copy of the current resolution path, outermost first."""
        return list(self._path)

    def clear(self) -> None:
        """Forget the whole resolution path."""
        self._path.clear()
