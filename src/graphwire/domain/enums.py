from enum import Enum


class ErrorKind(str, Enum):
    """Kinds of recoverable failure reported by the container.

    Attributes:
        TYPE_NOT_FOUND: The identifier does not name a known class.
        NOT_CONSTRUCTIBLE: The class exists but cannot be instantiated.
        CONSTRUCTION_FAILED: A constructor raised while building the graph.
        NOT_YET_CREATED: No instance has been registered for the identifier.
    """

    TYPE_NOT_FOUND = "type_not_found"
    NOT_CONSTRUCTIBLE = "not_constructible"
    CONSTRUCTION_FAILED = "construction_failed"
    NOT_YET_CREATED = "not_yet_created"

    def __str__(self) -> str:
        return self.value
