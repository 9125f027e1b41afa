import importlib
import inspect
import logging
from typing import Any, Dict, Optional, Tuple, get_type_hints

from graphwire.domain import ITypeInspector, NotConstructibleError, TypeDescriptor, TypeNotFoundError, normalize
from graphwire.domain.naming import SEPARATOR

logger = logging.getLogger(__name__)

# Annotations from these modules are values or typing constructs, never injectable objects.
_NON_OBJECT_MODULES = frozenset({"builtins", "typing", "typing_extensions", "collections.abc"})

_SKIPPED_KINDS = (
    inspect.Parameter.VAR_POSITIONAL,
    inspect.Parameter.VAR_KEYWORD,
    inspect.Parameter.KEYWORD_ONLY,
)


class TypeDescriptorCache(ITypeInspector):
    """Computes and caches constructor metadata per type identifier.

    Classes are located either in the table of classes already seen (passed
    directly, found in annotations or used as alias targets) or by importing
    the longest importable module prefix of the identifier. Each descriptor
    and dependency list is computed once and never invalidated.

    Attributes:
        _known_types: Classes seen so far, by identifier.
        _descriptors: Cached descriptors, including negative results.
        _dependencies: Cached dependency lists.
    """

    def __init__(self) -> None:
        self._known_types: Dict[str, type] = {}
        self._descriptors: Dict[str, TypeDescriptor] = {}
        self._dependencies: Dict[str, Tuple[str, ...]] = {}

    def remember(self, cls: type) -> str:
        """Record a class so it can be found by identifier without importing.

        Args:
            cls: The class to record.

        Returns:
            The canonical identifier of the class.
        """
        identifier = normalize(cls)
        self._known_types.setdefault(identifier, cls)
        return identifier

    def describe(self, identifier: str) -> TypeDescriptor:
        """Return the descriptor for an identifier, probing the class on first use.

        Args:
            identifier: Canonical type identifier.

        Returns:
            The cached descriptor. Missing classes yield ``exists=False``.

        Example:
            >>> cache = TypeDescriptorCache()
            >>> cache.describe("collections.OrderedDict").exists
            True
        """
        descriptor = self._descriptors.get(identifier)
        if descriptor is None:
            logger.debug("Describing type %s", identifier)
            descriptor = self._probe(identifier)
            self._descriptors[identifier] = descriptor
        return descriptor

    def list_dependencies(self, identifier: str) -> Tuple[str, ...]:
        """Return the object-typed constructor parameters of a type, in order.

        Missing, non-constructible and parameterless types have no dependencies.
        """
        dependencies = self._dependencies.get(identifier)
        if dependencies is None:
            dependencies = self.describe(identifier).dependencies
            self._dependencies[identifier] = dependencies
        return dependencies

    def type_for(self, identifier: str) -> type:
        """Return the class behind a constructible identifier.

        Raises:
            TypeNotFoundError: If the identifier names no class.
            NotConstructibleError: If the class cannot be instantiated.
        """
        descriptor = self.describe(identifier)
        if not descriptor.exists:
            raise TypeNotFoundError(identifier, descriptor.reason)
        if not descriptor.constructible:
            raise NotConstructibleError(identifier, descriptor.reason)
        return self._known_types[identifier]

    def _probe(self, identifier: str) -> TypeDescriptor:
        try:
            cls = self._locate(identifier)
        except Exception as e:
            # Module top-level code may raise anything, including a broken import of its own.
            logger.debug("Importing %s failed: %r", identifier, e)
            return TypeDescriptor(identifier=identifier, reason=f"import failed: {e!r}")
        if cls is None:
            return TypeDescriptor(identifier=identifier, reason="no class with this name")
        self._known_types.setdefault(identifier, cls)

        if inspect.isabstract(cls):
            return TypeDescriptor(identifier=identifier, exists=True, reason="abstract class")
        if getattr(cls, "_is_protocol", False):
            return TypeDescriptor(identifier=identifier, exists=True, reason="protocol class")

        try:
            parameter_types = self._constructor_parameter_types(cls)
        except (AttributeError, NameError, SyntaxError, TypeError, ValueError) as e:
            return TypeDescriptor(
                identifier=identifier,
                exists=True,
                reason=f"constructor cannot be inspected: {e}",
            )

        return TypeDescriptor(
            identifier=identifier,
            exists=True,
            constructible=True,
            constructor_parameter_types=parameter_types,
        )

    def _locate(self, identifier: str) -> Optional[type]:
        if identifier in self._known_types:
            return self._known_types[identifier]

        parts = identifier.split(SEPARATOR)
        for split in range(len(parts) - 1, 0, -1):
            module_name = SEPARATOR.join(parts[:split])
            try:
                target: Any = importlib.import_module(module_name)
            except ModuleNotFoundError as e:
                # Only a missing candidate module means "try a shorter prefix".
                if e.name is None or not (module_name == e.name or module_name.startswith(e.name + SEPARATOR)):
                    raise
                continue

            for attribute in parts[split:]:
                target = getattr(target, attribute, None)
                if target is None:
                    return None
            return target if isinstance(target, type) else None
        return None

    def _constructor_parameter_types(self, cls: type) -> Tuple[Optional[str], ...]:
        initializer = cls.__init__
        if initializer is object.__init__:
            return ()

        signature = inspect.signature(initializer)
        type_hints = get_type_hints(initializer)

        parameter_types = []
        # The first positional parameter is the instance itself.
        for parameter in list(signature.parameters.values())[1:]:
            if parameter.kind in _SKIPPED_KINDS:
                continue
            parameter_types.append(self._object_identifier(type_hints.get(parameter.name)))
        return tuple(parameter_types)

    def _object_identifier(self, annotation: Any) -> Optional[str]:
        if not isinstance(annotation, type) or annotation.__module__ in _NON_OBJECT_MODULES:
            return None
        return self.remember(annotation)

