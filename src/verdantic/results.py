"""Result types returned by versioned entity parsing.

Parsing never raises for bad input or malformed version maps. Instead it
returns either ``Ok`` with the migrated value or ``Err`` with one of five
tagged error records. The two ``BUG_*`` kinds point at a defect in how the
version map was written, never at the input data.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, ClassVar, Generic, Literal, TypeVar

T = TypeVar("T")


class ErrorKind(StrEnum):
    """Tags for the parse error taxonomy."""

    VER_CHECK_FAIL = "VER_CHECK_FAIL"
    INVALID_VER = "INVALID_VER"
    GIVEN_VER_VALIDATION_FAIL = "GIVEN_VER_VALIDATION_FAIL"
    BUG_NO_INTERMEDIATE_FOUND = "BUG_NO_INTERMEDIATE_FOUND"
    BUG_INTERMEDIATE_MARKED_INITIAL = "BUG_INTERMEDIATE_MARKED_INITIAL"

    @property
    def is_bug(self) -> bool:
        """Whether this kind signals a malformed version map."""
        return self in (
            ErrorKind.BUG_NO_INTERMEDIATE_FOUND,
            ErrorKind.BUG_INTERMEDIATE_MARKED_INITIAL,
        )


@dataclass(frozen=True)
class VersionCheckFailed:
    """The version detection function could not classify the data."""

    type: ClassVar[ErrorKind] = ErrorKind.VER_CHECK_FAIL

    def describe(self) -> str:
        return "could not determine the version of the data"


@dataclass(frozen=True)
class InvalidVersion:
    """The detected version is not in the version map, or exceeds the requested bound.

    Attributes:
        version: The detected version, possibly a non-integral number
        bound: The requested upper bound, if the data was parsed up to a version
    """

    type: ClassVar[ErrorKind] = ErrorKind.INVALID_VER

    version: int | float
    bound: int | None = None

    def describe(self) -> str:
        if self.bound is not None and self.version > self.bound:
            return f"version {self.version} is newer than the requested version {self.bound}"
        return f"version {self.version} is not a known version"


@dataclass(frozen=True)
class GivenVersionValidationFailed:
    """The detected version is known but the data does not pass its schema.

    Attributes:
        version: The detected version
        version_def: The definition of the detected version
        error: Structured failure detail from the version's validator
    """

    type: ClassVar[ErrorKind] = ErrorKind.GIVEN_VER_VALIDATION_FAIL

    version: int
    version_def: Any
    error: Any

    def describe(self) -> str:
        return f"data does not match the schema of version {self.version}: {self.error}"


@dataclass(frozen=True)
class NoIntermediateFound:
    """The migration chain needs a version that the version map lacks.

    With versions 1 and 3 defined and latest 3, parsing version 1 data fails with
    ``missing_ver == 2``, since migration steps through 2 before reaching 3.
    """

    type: ClassVar[ErrorKind] = ErrorKind.BUG_NO_INTERMEDIATE_FOUND

    missing_ver: int

    def describe(self) -> str:
        return f"version map has no definition for intermediate version {self.missing_ver}"


@dataclass(frozen=True)
class IntermediateMarkedInitial:
    """The migration chain reaches a version flagged initial, which has no upgrade."""

    type: ClassVar[ErrorKind] = ErrorKind.BUG_INTERMEDIATE_MARKED_INITIAL

    ver: int

    def describe(self) -> str:
        return f"intermediate version {self.ver} is marked initial and cannot be upgraded to"


ParseError = (
    VersionCheckFailed
    | InvalidVersion
    | GivenVersionValidationFailed
    | NoIntermediateFound
    | IntermediateMarkedInitial
)


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful parse carrying the (migrated) value."""

    value: T
    type: Literal["ok"] = "ok"

    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed parse carrying a tagged error record."""

    error: ParseError
    type: Literal["err"] = "err"

    def is_ok(self) -> bool:
        return False

    @property
    def kind(self) -> ErrorKind:
        return self.error.type

    @property
    def is_bug(self) -> bool:
        return self.error.type.is_bug


ParseResult = Ok[T] | Err
