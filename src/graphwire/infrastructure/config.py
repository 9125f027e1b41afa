"""Alias table loading from YAML or JSON files."""

import json
import logging
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import ValidationError

from graphwire.application import DIContainer
from graphwire.domain import AliasTable, ConfigurationError

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = (".yaml", ".yml")
_JSON_SUFFIXES = (".json",)


def load_alias_table(path: Union[str, Path]) -> AliasTable:
    """Load an alias table from a YAML or JSON file.

    The document is either a flat mapping of abstract to concrete identifiers
    or a mapping with a top-level ``aliases`` key holding one. A missing file
    yields an empty table.

    Args:
        path: Path to a ``.yaml``, ``.yml`` or ``.json`` file.

    Returns:
        The loaded alias table.

    Raises:
        ConfigurationError: If the extension is unsupported or the content is malformed.

    Example:
        >>> # aliases.yaml
        >>> # aliases:
        >>> #   app.repositories.IUserRepository: app.repositories.SqlUserRepository
        >>> table = load_alias_table("aliases.yaml")
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in _YAML_SUFFIXES + _JSON_SUFFIXES:
        raise ConfigurationError(f"Unsupported alias file format: {path}")

    if not path.is_file():
        logger.info("Alias file %s not found, using an empty alias table", path)
        return AliasTable()

    try:
        with open(path, encoding="utf-8") as f:
            if suffix in _JSON_SUFFIXES:
                table = _from_document(json.load(f))
            else:
                table = _from_document(yaml.safe_load(f))
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in alias file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in alias file {path}: {e}") from e
    except ValidationError as e:
        raise ConfigurationError(f"Invalid alias table in {path}: {e}") from e

    logger.info("Loaded %d alias(es) from %s", len(table), path)
    return table


def _from_document(document: Any) -> AliasTable:
    if document is None:
        return AliasTable()
    if isinstance(document, dict) and set(document) == {"aliases"}:
        return AliasTable.model_validate(document)
    return AliasTable.model_validate({"aliases": document})


def container_from_config(path: Union[str, Path]) -> DIContainer:
    """Create a container whose alias table is loaded from a YAML or JSON file.

    Args:
        path: Path to the alias file. A missing file yields an empty alias table.

    Returns:
        A new container.

    Raises:
        ConfigurationError: If the file cannot be parsed.
    """
    return DIContainer(load_alias_table(path))
