"""Embed versioned entities as fields of larger pydantic schemas.

``entity_reference`` and ``entity_ref_up_to_version`` produce annotations
that validate a nested value with the entity and replace it with the
migrated result::

    class Project(BaseModel):
        owner: entity_reference(UserEntity)
        members: list[entity_ref_up_to_version(UserEntity, 2)]

A failed nested parse is an ordinary pydantic rejection. Callers that need
the structured error should call the entity's own parse methods.

Self-referential entities pass a zero-argument callable instead of the
entity; it is resolved on every validation, so the schema can be written
before the entity it refers to exists::

    children: list[entity_ref_up_to_version(lambda: TreeEntity, 1)]
"""

from collections.abc import Callable
from typing import Annotated, Any

from pydantic import PlainValidator

from verdantic.entity import VersionedEntity
from verdantic.results import Err
from verdantic.validators import Validation

EntityTarget = VersionedEntity | Callable[[], VersionedEntity]


class EntityRef:
    """Validator delegating to a versioned entity's validate-and-migrate pipeline."""

    def __init__(self, entity: EntityTarget, up_to: int | None = None):
        """Initialize EntityRef.

        Args:
            entity: The entity, or a callable returning it (deferred reference)
            up_to: Migrate only up to this version; None migrates to the latest
        """
        self._entity = entity
        self.up_to = up_to

    @property
    def entity(self) -> VersionedEntity:
        if isinstance(self._entity, VersionedEntity):
            return self._entity
        return self._entity()

    def validate(self, data: Any) -> Validation:  # noqa: ANN401
        """Parse data with the referenced entity.

        Returns:
            Validation: accepted with the migrated value, or rejected with the
                entity's structured error
        """
        entity = self.entity
        if self.up_to is None:
            result = entity.safe_parse(data)
        else:
            result = entity.safe_parse_up_to_version(data, self.up_to)

        if isinstance(result, Err):
            return Validation.rejected(result.error)
        return Validation.accepted(result.value)

    def __call__(self, data: Any) -> Any:  # noqa: ANN401
        """Pydantic field validator entry point."""
        validation = self.validate(data)
        if not validation.success:
            error = validation.error
            raise ValueError(f"Invalid entity ({error.type}): {error.describe()}")
        return validation.value

    def __repr__(self) -> str:
        return f"EntityRef(up_to={self.up_to})"


def entity_reference(entity: EntityTarget) -> Any:  # noqa: ANN401
    """Annotation for a field holding an entity migrated to its latest version."""
    return Annotated[Any, PlainValidator(EntityRef(entity))]


def entity_ref_up_to_version(entity: EntityTarget, up_to_version: int) -> Any:  # noqa: ANN401
    """Annotation for a field holding an entity migrated only up to ``up_to_version``.

    Data newer than ``up_to_version`` is rejected, so an upgrade function written
    against a given version never receives children from a later one.
    """
    return Annotated[Any, PlainValidator(EntityRef(entity, up_to=up_to_version))]
