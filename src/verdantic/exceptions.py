"""Exceptions raised by verdantic's raising conveniences.

The core query and parse operations never raise for bad input or malformed
version maps; they return ``Ok``/``Err`` results. The exceptions here back
the helpers layered on top (``parse``, ``assert_well_formed``, the loader and
the config manager).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from verdantic.checks import DefinitionProblem
    from verdantic.results import ParseError


class VerdanticError(Exception):
    """Base class for all verdantic errors."""


class VersionDefinitionError(VerdanticError, ValueError):
    """A single version definition has an inconsistent shape."""


class DefinitionError(VerdanticError):
    """The version map of an entity is malformed."""

    def __init__(self, message: str, problems: list[DefinitionProblem] | None = None):
        super().__init__(message)
        self.problems = problems or []


class EntityParseError(VerdanticError, ValueError):
    """Raised by ``VersionedEntity.parse`` when parsing returns an error."""

    def __init__(self, error: ParseError):
        super().__init__(f"Failed to parse entity: {error.describe()}")
        self.error = error


class EntityLoadError(VerdanticError):
    """A ``module:attribute`` target could not be resolved to an entity."""


class ConfigError(VerdanticError):
    """The tool configuration file could not be read or migrated."""
