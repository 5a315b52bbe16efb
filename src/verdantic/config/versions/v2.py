"""Configuration version 2: nested logging section and output indentation."""

from verdantic.config.models import LoggingConfig, VerdanticConfig
from verdantic.config.versions.v1 import ConfigFileV1
from verdantic.versions import define_version


def upgrade_from_v1(old: ConfigFileV1) -> VerdanticConfig:
    """Move the flat logging fields into the ``logging`` section."""
    return VerdanticConfig(
        logging=LoggingConfig(level=old.log_level, json_logs=old.json_logs),
        output_format=old.output_format,
    )


VERSION = define_version(VerdanticConfig, up=upgrade_from_v1)
