"""Configuration file versions.

Each version module holds the schema of that config file generation and the
upgrade from the previous one. The config file is itself a versioned entity,
migrated with the same engine the tool exposes.
"""

from verdantic.entity import create_versioned_entity, field_version_detector

from . import v1, v2

CURRENT_VERSION = 2

CONFIG_ENTITY = create_versioned_entity(
    version_map={
        1: v1.VERSION,
        2: v2.VERSION,
    },
    latest_version=CURRENT_VERSION,
    # Files predating config_version tracking are version 1
    get_version=field_version_detector("config_version", default=1),
)

__all__ = ["CONFIG_ENTITY", "CURRENT_VERSION"]
