"""Tests for the validator protocol and its pydantic implementation."""

from typing import Literal, TypedDict

from pydantic import BaseModel, ValidationError

from verdantic.validators import PydanticValidator, SchemaValidator, Validation, as_validator


class Point(BaseModel):
    x: int
    y: int


class Tagged(TypedDict):
    kind: Literal["tagged"]
    value: float


class TestPydanticValidator:
    """Test PydanticValidator."""

    def test_accepts_and_coerces(self):
        """Should return the validated, coerced value."""
        validation = PydanticValidator(Point).validate({"x": "1", "y": 2})

        assert validation.success
        assert validation.value == Point(x=1, y=2)
        assert validation.error is None

    def test_rejects_with_validation_error(self):
        """Should return pydantic's ValidationError on failure."""
        validation = PydanticValidator(Point).validate({"x": "one"})

        assert not validation.success
        assert validation.value is None
        assert isinstance(validation.error, ValidationError)
        assert {e["loc"] for e in validation.error.errors()} == {("x",), ("y",)}

    def test_typed_dicts_and_containers(self):
        """Should validate any type pydantic can adapt."""
        assert PydanticValidator(Tagged).validate({"kind": "tagged", "value": 1}).value == {
            "kind": "tagged",
            "value": 1.0,
        }
        assert PydanticValidator(list[int]).validate(["1", 2]).value == [1, 2]

    def test_adapter_built_lazily(self):
        """Should not build the type adapter until first use."""
        validator = PydanticValidator(Point)

        assert "adapter" not in validator.__dict__
        validator.validate({"x": 1, "y": 1})
        assert "adapter" in validator.__dict__

    def test_repr(self):
        """Should name the wrapped schema."""
        assert repr(PydanticValidator(Point)) == "PydanticValidator(Point)"


class TestAsValidator:
    """Test as_validator coercion."""

    def test_model_class_is_wrapped(self):
        """Should wrap model classes even though they have a validate attribute."""
        assert isinstance(as_validator(Point), PydanticValidator)

    def test_protocol_instance_is_kept(self):
        """Should return protocol implementations unchanged."""

        class Reject:
            def validate(self, data):
                return Validation.rejected("no")

        reject = Reject()

        assert as_validator(reject) is reject
        assert isinstance(reject, SchemaValidator)

    def test_generic_alias_is_wrapped(self):
        """Should wrap parametrized types."""
        assert isinstance(as_validator(dict[str, int]), PydanticValidator)
