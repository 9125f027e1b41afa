"""Canonical naming of type identifiers."""

import re
from typing import Union

SEPARATOR = "."

_REPEATED_SEPARATORS = re.compile(r"\.{2,}")


def normalize(raw: Union[str, type]) -> str:
    """Canonicalize a type identifier.

    Classes become ``module.QualName``. Strings are stripped of surrounding
    whitespace and of leading or trailing separators, the ``module:QualName``
    entry-point form is converted to a dotted path, and runs of separators are
    collapsed. The result never starts or ends with a separator, which matches
    the form produced from ``cls.__module__``.

    Args:
        raw: A dotted path, an entry-point style path or a class object.

    Returns:
        The canonical identifier. ``normalize(normalize(x)) == normalize(x)``.

    Raises:
        ValueError: If the input is empty once normalized.
        TypeError: If the input is neither a string nor a class.

    Example:
        >>> normalize(".app.services:UserService")
        'app.services.UserService'
    """
    if isinstance(raw, type):
        return f"{raw.__module__}{SEPARATOR}{raw.__qualname__}"
    if not isinstance(raw, str):
        raise TypeError(f"Type identifier must be a string or a class, got {type(raw).__name__}")

    identifier = raw.strip().replace(":", SEPARATOR)
    identifier = _REPEATED_SEPARATORS.sub(SEPARATOR, identifier).strip(SEPARATOR)
    if not identifier:
        raise ValueError(f"Empty type identifier: {raw!r}")
    return identifier
