"""CLI entry point for the Structures CLI."""

import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

import click

from .client import HTTPStructureService
from .config import Config, ServerConfig
from .converter import ConversionError
from .converter.elastic import build_index_mapping
from .converter.statement import generate_statements, generate_validations
from .models.structure import Structure, structure_id
from .schema_gen import EntityConversionResult, EntityConverterService
from .sync import EntitySynchronizer, SyncOutcome
from .utils import setup_logging


@click.group()
@click.option(
    "--config-file", "-c",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    help="Path to a JSON configuration file.",
    envvar="STRUCTURES_CONFIG_FILE"
)
@click.option(
    "--log-level", "-l",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None, # Config default applies unless set
    help="Override the logging level (e.g., DEBUG, INFO).",
    envvar="STRUCTURES_LOG_LEVEL"
)
@click.option(
    "--log-format",
    type=click.Choice(["console", "json"], case_sensitive=False),
    default=None,
    help="Override logging format.",
    envvar="STRUCTURES_LOG_FORMAT"
)
@click.pass_context
def cli(ctx: click.Context, config_file: Optional[str], log_level: Optional[str], log_format: Optional[str]) -> None:
    """Structures CLI - Converts entity declarations and keeps them in sync with a Structures server."""
    try:
        if config_file:
            cfg = Config.from_file(Path(config_file))
        else:
            # environment variables and .env
            cfg = Config()
    except Exception as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        sys.exit(1)

    if log_level:
        cfg.logging.level = log_level.upper()
    if log_format:
        cfg.logging.format = log_format.lower()

    setup_logging(cfg.logging)
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg


def _convert(config: Config, namespace: str, entities_path: str) -> EntityConversionResult:
    service = EntityConverterService(config)
    try:
        declarations = service.discover_entities(Path(entities_path))
    except Exception as e:
        click.echo(f"Error loading entity declarations from {entities_path}: {e}", err=True)
        sys.exit(1)

    result = service.convert_entities(declarations, namespace=namespace)
    for item_error in result.errors:
        click.echo(f"Entity {item_error.declaration_name} could not be converted: {item_error.message}", err=True)
    if not result.entities and not result.errors:
        click.echo(f"No entities found in {entities_path}", err=True)
    return result


@cli.command()
@click.argument("namespace")
@click.option("--entities", "-e", "entities_path", required=True, type=click.Path(exists=True, resolve_path=True),
              help="File or directory containing entity declarations.")
@click.option("--publish", is_flag=True, default=False, help="Publish the structures after creating or updating them.")
@click.option("--dry-run", is_flag=True, default=False, help="Print the structures instead of sending them to the server.")
@click.option("--server", "server_url", default=None, help="Override the Structures server URL.")
@click.pass_context
def synchronize(ctx: click.Context, namespace: str, entities_path: str, publish: bool, dry_run: bool, server_url: Optional[str]) -> None:
    """Synchronizes the entities declared under --entities with the server, in NAMESPACE."""
    config: Config = ctx.obj["config"]
    result = _convert(config, namespace, entities_path)
    if result.has_errors:
        click.echo("Conversion failed, nothing was synchronized.", err=True)
        sys.exit(1)

    if dry_run:
        structures = [Structure.from_entity(entity).to_wire() for entity in result.entities]
        click.echo(json.dumps(structures, indent=2))
        return

    if server_url:
        config.server = ServerConfig.model_validate({**config.server.model_dump(), "url": server_url})

    async def run_sync():
        async with HTTPStructureService(config.server) as service:
            synchronizer = EntitySynchronizer(service, confirm=lambda message: click.confirm(message, default=False))
            return await synchronizer.synchronize(namespace, result.entities, publish=publish)

    try:
        report = asyncio.run(run_sync())
    except KeyboardInterrupt:
        click.echo("\nSynchronization interrupted by user.", err=True)
        sys.exit(130)

    click.echo("\n--- Summary ---")
    for entity_result in report.results:
        line = f"  {entity_result.structure_id}: {entity_result.outcome}"
        if entity_result.error:
            line += f" ({entity_result.error})"
        click.echo(line)
    if any(r.outcome == SyncOutcome.FAILED for r in report.results):
        sys.exit(1)


@cli.command("generate-mapper")
@click.argument("namespace")
@click.option("--entities", "-e", "entities_path", required=True, type=click.Path(exists=True, resolve_path=True),
              help="File or directory containing entity declarations.")
@click.option("--source", "source_name", default="entity", show_default=True, help="Name of the source variable.")
@click.option("--target", "target_name", default="ret", show_default=True, help="Name of the target variable.")
@click.option("--kind", type=click.Choice(["assignment", "validation"], case_sensitive=False), default="assignment",
              show_default=True, help="Generate field assignments or validation checks.")
@click.pass_context
def generate_mapper(ctx: click.Context, namespace: str, entities_path: str, source_name: str, target_name: str, kind: str) -> None:
    """Prints generated data-mapping statements for every entity."""
    config: Config = ctx.obj["config"]
    result = _convert(config, namespace, entities_path)

    failed = result.has_errors
    for entity in result.entities:
        click.echo(f"# {structure_id(entity.namespace or namespace, entity.name)}")
        try:
            if kind.lower() == "validation":
                statements = generate_validations(entity, source_name)
            else:
                statements = generate_statements(entity, source_name, target_name)
        except ConversionError as e:
            click.echo(f"Statement generation failed for {entity.name}: {e.message}", err=True)
            failed = True
            continue
        for statement in statements:
            click.echo(statement.render())
    if failed:
        sys.exit(1)


@cli.command("es-mapping")
@click.argument("namespace")
@click.option("--entities", "-e", "entities_path", required=True, type=click.Path(exists=True, resolve_path=True),
              help="File or directory containing entity declarations.")
@click.pass_context
def es_mapping(ctx: click.Context, namespace: str, entities_path: str) -> None:
    """Prints the Elasticsearch index mapping of every entity."""
    config: Config = ctx.obj["config"]
    result = _convert(config, namespace, entities_path)

    failed = result.has_errors
    mappings = {}
    for entity in result.entities:
        entity_id = structure_id(entity.namespace or namespace, entity.name)
        try:
            mappings[entity_id] = build_index_mapping(
                entity, tenant_id_field_name=config.conversion.tenant_id_field_name).mapping
        except ConversionError as e:
            click.echo(f"Mapping generation failed for {entity.name}: {e.message}", err=True)
            failed = True
    click.echo(json.dumps(mappings, indent=2))
    if failed:
        sys.exit(1)


@cli.command()
@click.pass_context
def version(ctx: click.Context) -> None:
    """Show version information."""
    from . import __version__
    click.echo(f"Structures CLI v{__version__}")


@cli.command()
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show current configuration."""
    config = ctx.obj["config"]
    click.echo(json.dumps(config.model_dump(mode="json"), indent=2))


if __name__ == "__main__":
    cli()
