"""Resolve ``package.module:attribute`` strings to versioned entities."""

import importlib

from verdantic.entity import VersionedEntity
from verdantic.exceptions import EntityLoadError


def load_entity(target: str) -> VersionedEntity:
    """Import and return the entity named by ``target``.

    Args:
        target: Import path in the form ``package.module:attribute``. Dotted
            attributes (``module:Namespace.ENTITY``) are followed.

    Returns:
        VersionedEntity: The referenced entity

    Raises:
        EntityLoadError: If the module cannot be imported, the attribute is missing,
            or it is not a VersionedEntity
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise EntityLoadError(f"Expected 'module:attribute', got {target!r}")

    try:
        obj = importlib.import_module(module_name)
    except ImportError as e:
        raise EntityLoadError(f"Cannot import module {module_name!r}: {e}") from e

    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise EntityLoadError(f"{module_name!r} has no attribute {attr_path!r}") from e

    if not isinstance(obj, VersionedEntity):
        raise EntityLoadError(f"{target!r} is a {type(obj).__name__}, not a VersionedEntity")
    return obj
