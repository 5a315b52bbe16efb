"""Definition of a single entity schema version."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from verdantic.exceptions import VersionDefinitionError
from verdantic.validators import SchemaValidator, as_validator

NewT = TypeVar("NewT")
OldT = TypeVar("OldT")


@dataclass(frozen=True)
class VersionDefinition(Generic[NewT, OldT]):
    """One schema generation of a versioned entity.

    Attributes:
        schema: Validator for data shaped like this version
        initial: Whether this is the first version, with nothing to upgrade from
        up: Upgrade from the previous version's validated data to this version's
            shape. Present iff ``initial`` is False. It receives data that already
            passed the previous version's validator, so it is expected never to fail.
    """

    schema: SchemaValidator
    initial: bool
    up: Callable[[OldT], NewT] | None = None

    def __post_init__(self) -> None:
        if self.initial and self.up is not None:
            raise VersionDefinitionError("An initial version cannot define an upgrade function")
        if not self.initial and self.up is None:
            raise VersionDefinitionError("A non-initial version must define an upgrade function")


def define_version(
    schema: Any,  # noqa: ANN401
    *,
    up: Callable[[OldT], NewT] | None = None,
    initial: bool | None = None,
) -> VersionDefinition[NewT, OldT]:
    """Define a version of an entity and how to upgrade from the previous version.

    Args:
        schema: A ``SchemaValidator`` or anything pydantic can validate
        up: Upgrade function from the previous version's validated data
        initial: Whether this is the initial version. Defaults to ``up is None``.

    Returns:
        VersionDefinition: The immutable version record

    Raises:
        VersionDefinitionError: If ``initial`` and ``up`` contradict each other
    """
    if initial is None:
        initial = up is None
    return VersionDefinition(schema=as_validator(schema), initial=initial, up=up)


def initial_version(schema: Any) -> VersionDefinition:  # noqa: ANN401
    """Define the initial version of an entity."""
    return define_version(schema, initial=True)
