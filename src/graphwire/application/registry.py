from typing import Any, Dict, Iterator

from graphwire.domain import IObjectRegistry, InternalConsistencyError


class ObjectRegistry(IObjectRegistry):
    """Process-lifetime store of one shared instance per type identifier.

    The registry is the only long-lived owner of the instances; dependents
    hold plain references to the same objects. Entries are never replaced.

    Attributes:
        _objects: Registered instances by identifier, in registration order.
    """

    def __init__(self) -> None:
        self._objects: Dict[str, Any] = {}

    def get(self, identifier: str) -> Any:
        return self._objects[identifier]

    def put(self, identifier: str, instance: Any) -> None:
        """Register the single instance for an identifier.

        Raises:
            InternalConsistencyError: If an instance is already registered.
        """
        if identifier in self._objects:
            raise InternalConsistencyError(f"An instance of {identifier} is already registered")
        self._objects[identifier] = instance

    def contains(self, identifier: str) -> bool:
        return identifier in self._objects

    def identifiers(self) -> Iterator[str]:
        return iter(list(self._objects))

    def clear(self) -> None:
        self._objects.clear()

    def __len__(self) -> int:
        return len(self._objects)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._objects
