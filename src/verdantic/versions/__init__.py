"""Version definitions.

A version definition pairs the validator for one schema generation with
either the initial marker or an upgrade function from the previous
generation's validated shape.
"""

from .definition import VersionDefinition, define_version, initial_version

__all__ = ["VersionDefinition", "define_version", "initial_version"]
