"""Versioned entities: version resolution, validation and migration chains.

A ``VersionedEntity`` wraps an immutable map of version number to
``VersionDefinition``, the latest version number, and a detection function
that classifies raw input. Parsing resolves the version of the input,
validates it against that version's schema, then applies each following
version's ``up`` function in order until the target version is reached.

Entities hold no mutable state, so one instance can be shared across threads
and may be re-entered from inside its own upgrade functions (recursive
entities migrating their children with ``safe_parse_up_to_version``).
"""

import logging
import numbers
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from verdantic.checks import DefinitionProblem, check_version_map
from verdantic.exceptions import DefinitionError, EntityParseError
from verdantic.results import (
    Err,
    GivenVersionValidationFailed,
    IntermediateMarkedInitial,
    InvalidVersion,
    NoIntermediateFound,
    Ok,
    ParseResult,
    VersionCheckFailed,
)
from verdantic.validators import SchemaValidator
from verdantic.versions import VersionDefinition

logger = logging.getLogger(__name__)

T = TypeVar("T")

VersionDetector = Callable[[Any], int | None]


class VersionedEntity(Generic[T]):
    """An entity whose shape evolved through an ordered chain of versions."""

    def __init__(
        self,
        version_map: Mapping[int, VersionDefinition],
        latest_version: int,
        get_version: VersionDetector,
    ):
        """Initialize VersionedEntity.

        The version map is not checked here. Gaps and misplaced initial versions are
        reported as ``BUG_*`` errors when a migration walks through them; use
        ``check_definition`` for an eager check.

        Args:
            version_map: Mapping of version number to its definition
            latest_version: The newest version number
            get_version: Detection function returning the version of raw data, or
                None when the data cannot be classified
        """
        self._version_map: Mapping[int, VersionDefinition] = MappingProxyType(dict(version_map))
        self._latest_version = latest_version
        self._get_version = get_version

    @property
    def version_map(self) -> Mapping[int, VersionDefinition]:
        return self._version_map

    @property
    def latest_version(self) -> int:
        return self._latest_version

    @property
    def known_versions(self) -> tuple[int, ...]:
        """All version numbers present in the version map, ascending."""
        return tuple(sorted(self._version_map))

    @property
    def latest_schema(self) -> SchemaValidator:
        """The validator of the latest version.

        Raises:
            DefinitionError: If the latest version is not in the version map
        """
        latest_def = self._version_map.get(self._latest_version)
        if latest_def is None:
            raise DefinitionError(f"Latest version {self._latest_version} is not defined")
        return latest_def.schema

    def version_of(self, data: Any) -> int | float | None:  # noqa: ANN401
        """Classify data with the entity's detection function.

        Integral numbers such as ``2.0`` resolve to the matching ``int``. Other numbers
        are returned unchanged and fail the version map lookup as ``INVALID_VER``.
        Booleans and non-numbers count as unclassifiable.
        """
        ver = self._get_version(data)
        if isinstance(ver, bool) or not isinstance(ver, numbers.Real):
            return None
        if isinstance(ver, int):
            return ver
        if float(ver).is_integer():
            return int(ver)
        return ver

    def is_(self, data: Any) -> bool:  # noqa: ANN401
        """Return whether data is a valid entity of any known version."""
        ver = self.version_of(data)
        if ver is None:
            return False

        ver_def = self._version_map.get(ver)
        if ver_def is None:
            return False

        return ver_def.schema.validate(data).success

    def is_latest(self, data: Any) -> bool:  # noqa: ANN401
        """Return whether data is a valid entity of the latest version.

        Version detection is bypassed; data is checked directly against the latest
        version's schema.
        """
        latest_def = self._version_map.get(self._latest_version)
        if latest_def is None:
            return False
        return latest_def.schema.validate(data).success

    def is_up_to_version(self, data: Any, up_to_version: int) -> bool:  # noqa: ANN401
        """Return whether data is a valid entity of ``up_to_version`` or an older version.

        Args:
            data: The data to check
            up_to_version: Highest accepted version, inclusive

        Returns:
            bool: False when the data's version is newer than ``up_to_version``,
                unknown, or when the data fails that version's schema
        """
        ver = self.version_of(data)
        if ver is None:
            return False

        if ver > up_to_version:
            return False

        ver_def = self._version_map.get(ver)
        if ver_def is None:
            return False

        return ver_def.schema.validate(data).success

    def safe_parse(self, data: Any) -> ParseResult[T]:  # noqa: ANN401
        """Validate data and migrate it to the latest version.

        Args:
            data: The data to parse

        Returns:
            ParseResult: ``Ok`` with the latest-version value, or ``Err`` describing
                the first failure
        """
        ver = self.version_of(data)
        if ver is None:
            logger.debug("Could not determine entity version")
            return Err(VersionCheckFailed())

        if ver not in self._version_map:
            logger.debug("Entity version %s is not in the version map", ver)
            return Err(InvalidVersion(version=ver))

        return self._validate_and_migrate(data, ver, self._latest_version)

    def safe_parse_up_to_version(self, data: Any, version: int) -> ParseResult[Any]:  # noqa: ANN401
        """Validate data and migrate it up to ``version``, never beyond.

        Upgrade functions of recursive entities use this to migrate their children
        only as far as the version they were written for.

        Args:
            data: The data to parse
            version: Target version; data newer than this is rejected

        Returns:
            ParseResult: ``Ok`` with the value at ``version``, or ``Err``. Data whose
                version is above ``version`` yields ``INVALID_VER``; there is no
                downgrading.
        """
        ver = self.version_of(data)
        if ver is None:
            logger.debug("Could not determine entity version")
            return Err(VersionCheckFailed())

        if ver > version:
            logger.debug("Entity version %s is newer than requested version %s", ver, version)
            return Err(InvalidVersion(version=ver, bound=version))

        if ver not in self._version_map:
            logger.debug("Entity version %s is not in the version map", ver)
            return Err(InvalidVersion(version=ver, bound=version))

        return self._validate_and_migrate(data, ver, version)

    def parse(self, data: Any) -> T:  # noqa: ANN401
        """Like ``safe_parse`` but return the value directly.

        Raises:
            EntityParseError: If parsing fails, carrying the structured error
        """
        result = self.safe_parse(data)
        if isinstance(result, Err):
            raise EntityParseError(result.error)
        return result.value

    def parse_up_to_version(self, data: Any, version: int) -> Any:  # noqa: ANN401
        """Like ``safe_parse_up_to_version`` but return the value directly.

        Raises:
            EntityParseError: If parsing fails, carrying the structured error
        """
        result = self.safe_parse_up_to_version(data, version)
        if isinstance(result, Err):
            raise EntityParseError(result.error)
        return result.value

    def check_definition(self) -> list[DefinitionProblem]:
        """Check the whole version map eagerly.

        Returns:
            list[DefinitionProblem]: Defects found, empty when well formed
        """
        return check_version_map(self._version_map, self._latest_version)

    def assert_well_formed(self) -> None:
        """Raise if the version map is malformed.

        Raises:
            DefinitionError: Listing every defect found
        """
        problems = self.check_definition()
        if problems:
            raise DefinitionError(
                f"Malformed version map: {'; '.join(str(p) for p in problems)}", problems
            )

    def _validate_and_migrate(
        self, data: Any, ver: int, target: int  # noqa: ANN401
    ) -> ParseResult[Any]:
        """Validate data at ``ver`` and apply each upgrade up to ``target``."""
        ver_def = self._version_map[ver]
        validation = ver_def.schema.validate(data)
        if not validation.success:
            logger.debug("Entity data failed validation for version %s", ver)
            return Err(
                GivenVersionValidationFailed(
                    version=ver, version_def=ver_def, error=validation.error
                )
            )

        value = validation.value
        for up in range(ver + 1, target + 1):
            up_def = self._version_map.get(up)

            if up_def is None:
                logger.error("Version map has no definition for intermediate version %s", up)
                return Err(NoIntermediateFound(missing_ver=up))

            if up_def.initial:
                logger.error("Intermediate version %s is marked initial", up)
                return Err(IntermediateMarkedInitial(ver=up))

            logger.debug("Migrating entity from version %s to %s", up - 1, up)
            value = up_def.up(value)

        return Ok(value)

    def __repr__(self) -> str:
        return (
            f"VersionedEntity(latest_version={self._latest_version}, "
            f"versions={list(self.known_versions)})"
        )


def create_versioned_entity(
    *,
    version_map: Mapping[int, VersionDefinition],
    latest_version: int,
    get_version: VersionDetector,
) -> VersionedEntity:
    """Create a versioned entity.

    Args:
        version_map: Mapping of version number to its definition
        latest_version: The newest version number
        get_version: Detection function classifying raw data

    Returns:
        VersionedEntity: The entity
    """
    return VersionedEntity(version_map, latest_version, get_version)


_MISSING = object()


def field_version_detector(field: str = "v", *, default: int | None = None) -> VersionDetector:
    """Build a detection function reading an integer version field.

    The field is looked up as a mapping key, or as an attribute for other objects
    (pydantic models, dataclasses).

    Args:
        field: Name of the version discriminator
        default: Version assumed when the field is absent

    Returns:
        VersionDetector: Returns the field's value when it is an integer, ``default``
            when the field is missing, otherwise None
    """

    def get_version(data: Any) -> int | None:  # noqa: ANN401
        if isinstance(data, Mapping):
            ver = data.get(field, _MISSING)
        elif data is None or isinstance(data, str | bytes | int | float | list | tuple):
            return None
        else:
            ver = getattr(data, field, _MISSING)

        if ver is _MISSING:
            return default
        if isinstance(ver, bool) or not isinstance(ver, int):
            return None
        return ver

    return get_version
