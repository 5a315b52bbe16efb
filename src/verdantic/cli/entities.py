"""CLI for checking versioned entity definitions and migrating documents.

Entities are referenced as ``package.module:ATTRIBUTE``. Documents are read
as YAML (which also accepts JSON) and migrated documents are written as YAML
or JSON.
"""

import json
import sys
from pathlib import Path
from typing import Any

import click
import yaml
from pydantic import TypeAdapter

from verdantic.config import ConfigManager, OutputFormat, VerdanticConfig
from verdantic.entity import VersionedEntity
from verdantic.exceptions import ConfigError, EntityLoadError
from verdantic.loader import load_entity
from verdantic.results import Err, GivenVersionValidationFailed, ParseError
from verdantic.utils.structlog_configurator import configure_structlog, get_logger

logger = get_logger(__name__)

_ANY_ADAPTER = TypeAdapter(Any)


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to verdantic.yaml (defaults to $VERDANTIC_CONFIG, then ./verdantic.yaml).",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None) -> None:
    """Verdantic versioned entity tool.

    Check entity version maps and migrate documents to newer versions.
    """
    ctx.ensure_object(dict)
    try:
        config = ConfigManager(config_path).load()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    configure_structlog(config)
    ctx.obj["config"] = config


def _load(target: str) -> VersionedEntity:
    try:
        return load_entity(target)
    except EntityLoadError as e:
        raise click.ClickException(str(e)) from e


def _read_document(path: Path) -> Any:  # noqa: ANN401
    """Read a YAML or JSON document."""
    try:
        return yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise click.ClickException(f"Cannot parse {path}: {e}") from e


def _render(value: Any, output_format: OutputFormat, indent: int) -> str:  # noqa: ANN401
    """Serialize a migrated value, dumping pydantic models to plain data first."""
    plain = _ANY_ADAPTER.dump_python(value, mode="json")
    if output_format == OutputFormat.JSON:
        return json.dumps(plain, indent=indent or None) + "\n"
    return yaml.safe_dump(plain, default_flow_style=False, sort_keys=False, indent=indent or None)


def _echo_error(error: ParseError) -> None:
    """Display a parse error."""
    click.echo(click.style(f"✗ {error.type}: {error.describe()}", fg="red", bold=True), err=True)
    if isinstance(error, GivenVersionValidationFailed):
        click.echo(str(error.error), err=True)
    if error.type.is_bug:
        click.echo(
            click.style(
                "  This is a bug in the entity's version map, not in the document.", fg="yellow"
            ),
            err=True,
        )


@cli.command()
@click.argument("target")
def check(target: str) -> None:
    """Check the version map of TARGET (module:attribute) for defects."""
    entity = _load(target)
    problems = entity.check_definition()

    if not problems:
        click.echo(click.style(f"✓ {target} is well formed", fg="green"))
        return

    click.echo(click.style(f"✗ {target} has {len(problems)} problem(s):", fg="red", bold=True))
    for problem in problems:
        click.echo(f"  • {problem}")
    sys.exit(1)


@cli.command()
@click.argument("target")
def inspect(target: str) -> None:
    """Show the versions defined by TARGET."""
    entity = _load(target)

    click.echo(f"Latest version: {entity.latest_version}")
    click.echo(f"Known versions: {', '.join(str(v) for v in entity.known_versions)}")
    for ver in entity.known_versions:
        ver_def = entity.version_map[ver]
        marker = "initial" if ver_def.initial else "upgrade"
        click.echo(f"  • v{ver} ({marker}): {ver_def.schema!r}")


@cli.command()
@click.argument("target")
@click.argument("document", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--up-to", type=int, default=None, help="Reject documents newer than this version.")
def validate(target: str, document: Path, up_to: int | None) -> None:
    """Validate DOCUMENT against its detected version of TARGET, without migrating."""
    entity = _load(target)
    data = _read_document(document)

    detected = entity.version_of(data)
    if detected is None:
        _echo_error(entity.safe_parse(data).error)
        sys.exit(1)

    bound = detected if up_to is None else min(detected, up_to)
    result = entity.safe_parse_up_to_version(data, bound)
    if isinstance(result, Err):
        _echo_error(result.error)
        sys.exit(1)

    click.echo(click.style(f"✓ Valid entity at version {detected}", fg="green"))


@cli.command()
@click.argument("target")
@click.argument("document", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--up-to", type=int, default=None, help="Migrate only up to this version.")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the migrated document here instead of stdout.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat]),
    default=None,
    help="Output format (defaults to the configured output_format).",
)
@click.pass_context
def migrate(
    ctx: click.Context,
    target: str,
    document: Path,
    up_to: int | None,
    output: Path | None,
    output_format: str | None,
) -> None:
    """Validate DOCUMENT and migrate it to the latest version of TARGET."""
    config: VerdanticConfig = ctx.obj["config"]
    entity = _load(target)
    data = _read_document(document)

    from_version = entity.version_of(data)
    if up_to is None:
        result = entity.safe_parse(data)
        to_version = entity.latest_version
    else:
        result = entity.safe_parse_up_to_version(data, up_to)
        to_version = up_to

    if isinstance(result, Err):
        logger.warning(
            "Migration failed",
            target=target,
            document=str(document),
            error=str(result.error.type),
        )
        _echo_error(result.error)
        sys.exit(1)

    fmt = OutputFormat(output_format) if output_format else config.output_format
    rendered = _render(result.value, fmt, config.indent)

    if output is None:
        click.echo(rendered, nl=False)
    else:
        output.write_text(rendered)
        click.echo(f"Migrated document written to: {output}", err=True)

    logger.info(
        "Migrated document",
        target=target,
        document=str(document),
        from_version=from_version,
        to_version=to_version,
    )


def main() -> None:
    """Entry point for the verdantic CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
