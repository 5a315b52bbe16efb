"""Versioned entities with validate-and-migrate chains.

An entity's shape evolves through an ordered chain of schema versions. Each
version has a structural validator and, apart from the initial version, an
upgrade function from the previous version. ``VersionedEntity`` detects the
version of raw input, validates it and migrates it forward to the latest
version or to an explicit bound.
"""

from .entity import VersionedEntity, create_versioned_entity, field_version_detector
from .exceptions import (
    DefinitionError,
    EntityParseError,
    VerdanticError,
    VersionDefinitionError,
)
from .references import EntityRef, entity_ref_up_to_version, entity_reference
from .results import (
    Err,
    ErrorKind,
    GivenVersionValidationFailed,
    IntermediateMarkedInitial,
    InvalidVersion,
    NoIntermediateFound,
    Ok,
    ParseError,
    ParseResult,
    VersionCheckFailed,
)
from .validators import PydanticValidator, SchemaValidator, Validation, as_validator
from .versions import VersionDefinition, define_version, initial_version

__all__ = [
    "DefinitionError",
    "EntityParseError",
    "EntityRef",
    "Err",
    "ErrorKind",
    "GivenVersionValidationFailed",
    "IntermediateMarkedInitial",
    "InvalidVersion",
    "NoIntermediateFound",
    "Ok",
    "ParseError",
    "ParseResult",
    "PydanticValidator",
    "SchemaValidator",
    "Validation",
    "VerdanticError",
    "VersionCheckFailed",
    "VersionDefinition",
    "VersionDefinitionError",
    "VersionedEntity",
    "as_validator",
    "create_versioned_entity",
    "define_version",
    "entity_ref_up_to_version",
    "entity_reference",
    "field_version_detector",
    "initial_version",
]
