"""Structural validators used by version definitions.

Each version of an entity owns one validator. The engine only relies on the
``SchemaValidator`` protocol: a ``validate`` call that either accepts the data
(possibly normalizing it) or rejects it with a structured error. Pydantic is
the stock implementation; any object with a matching ``validate`` method can
be used instead.
"""

from dataclasses import dataclass
from functools import cached_property
from typing import Any, Protocol, runtime_checkable

from pydantic import TypeAdapter, ValidationError


@dataclass(frozen=True)
class Validation:
    """Outcome of a single validator call.

    Attributes:
        success: Whether the data was accepted
        value: The accepted (and possibly coerced) data, None on failure
        error: Structured failure detail, None on success
    """

    success: bool
    value: Any = None
    error: Any = None

    @classmethod
    def accepted(cls, value: Any) -> "Validation":  # noqa: ANN401
        return cls(success=True, value=value)

    @classmethod
    def rejected(cls, error: Any) -> "Validation":  # noqa: ANN401
        return cls(success=False, error=error)


@runtime_checkable
class SchemaValidator(Protocol):
    """Protocol for per-version structural validators."""

    def validate(self, data: Any) -> Validation:  # noqa: ANN401
        """Validate data against this version's shape."""
        ...


class PydanticValidator:
    """Validator backed by a pydantic ``TypeAdapter``.

    The adapter is built on first use, so the wrapped type may refer to models or
    entities that are only defined after the version itself (self-referential
    entities).
    """

    def __init__(self, schema: Any):  # noqa: ANN401
        """Initialize PydanticValidator.

        Args:
            schema: Any type pydantic can validate: a BaseModel subclass, a TypedDict,
                a parametrized container or an Annotated type.
        """
        self.schema = schema

    @cached_property
    def adapter(self) -> TypeAdapter:
        return TypeAdapter(self.schema)

    def validate(self, data: Any) -> Validation:  # noqa: ANN401
        """Validate data with pydantic.

        Args:
            data: Untyped input

        Returns:
            Validation: accepted with the validated value, or rejected with the
                ``pydantic.ValidationError``
        """
        try:
            value = self.adapter.validate_python(data)
        except ValidationError as e:
            return Validation.rejected(e)
        return Validation.accepted(value)

    def __repr__(self) -> str:
        name = getattr(self.schema, "__name__", None) or repr(self.schema)
        return f"PydanticValidator({name})"


def as_validator(schema: Any) -> SchemaValidator:  # noqa: ANN401
    """Coerce a schema into a ``SchemaValidator``.

    Objects already implementing the protocol are returned unchanged; anything
    else is handed to pydantic.
    """
    if isinstance(schema, SchemaValidator) and not isinstance(schema, type):
        return schema
    return PydanticValidator(schema)
