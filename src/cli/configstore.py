"""CLI for inspecting and pushing configuration against the authority."""

import asyncio
import json
import logging
import sys
import uuid
from pathlib import Path

import click
import structlog
import yaml

from src.features.configuration.errors import ParseError
from src.features.configuration.formatting import format_validation_detail
from src.features.configuration.models import Configuration
from src.features.configuration.results import SaveAccepted, SaveRejected, SaveResult
from src.features.configuration.sinks import LoggingNotificationSink, RecordingThemeSink
from src.features.configuration.store import ConfigurationStore
from src.features.observability.logging import bind_session_context, configure_logging
from src.features.transport.client import HttpTransport
from src.features.transport.config import TransportConfig
from src.settings import get_settings


logger = structlog.get_logger()


def create_transport(config: TransportConfig) -> HttpTransport:
    """Create the HTTP transport used by CLI commands."""
    return HttpTransport(config)


def _setup(base_url: str | None, json_logs: bool, verbose: bool) -> TransportConfig:
    """Configure logging and resolve the transport configuration.

    Args:
        base_url: Authority URL overriding the environment.
        json_logs: Whether to log JSON.
        verbose: Whether to log at DEBUG level.

    Returns:
        Transport configuration for the authority.
    """
    settings = get_settings()
    level = logging.DEBUG if verbose else settings.logging_level()
    configure_logging(level=level, json_format=json_logs)
    bind_session_context(str(uuid.uuid4()))

    if base_url:
        return TransportConfig(
            base_url=base_url, timeout_seconds=settings.timeout_seconds
        )
    return settings.transport_config()


def _load_document(path: Path) -> Configuration:
    """Read a YAML or JSON document as a configuration.

    Args:
        path: Document path.

    Returns:
        Validated configuration.

    Raises:
        ParseError: If the file is not YAML or not a configuration.
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        msg = f"{path} is not UTF-8 text: {e}"
        raise ParseError(msg, path=str(path)) from e
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in {path}: {e}"
        raise ParseError(msg, path=str(path)) from e
    return Configuration.from_payload(data or {}, path=str(path))


async def _show(config: TransportConfig, profile: str | None) -> Configuration | None:
    async with create_transport(config) as transport:
        store = ConfigurationStore(
            transport, LoggingNotificationSink(), RecordingThemeSink()
        )
        if profile is None:
            await store.init_store()
            loaded = store.is_loaded
        else:
            loaded = await store.get_config(profile)
        return store.configuration if loaded else None


async def _push(config: TransportConfig, configuration: Configuration) -> SaveResult:
    async with create_transport(config) as transport:
        store = ConfigurationStore(
            transport, LoggingNotificationSink(), RecordingThemeSink()
        )
        await store.init_store()
        store.state.replace(configuration)
        return await store.save_config()


@click.group()
@click.version_option(version="0.1.0")
def cli() -> None:
    """Configuration store client CLI."""


@cli.command()
@click.option(
    "--profile",
    type=str,
    default=None,
    help="Admin profile to load (default: bootstrap the active profile).",
)
@click.option(
    "--base-url",
    type=str,
    default=None,
    help="Authority base URL (default: $CONFIGSTORE_BASE_URL).",
)
@click.option(
    "--json-logs/--no-json-logs",
    default=True,
    help="Use JSON format for logs (default: true).",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging.",
)
def show(
    profile: str | None,
    base_url: str | None,
    json_logs: bool,
    verbose: bool,
) -> None:
    """Load the configuration and print it as JSON."""
    config = _setup(base_url, json_logs, verbose)

    configuration = asyncio.run(_show(config, profile))
    if configuration is None:
        logger.warning("cli_show_failed", profile=profile)
        click.echo("Error: configuration could not be loaded", err=True)
        sys.exit(1)

    click.echo(json.dumps(configuration.to_payload(), indent=2, ensure_ascii=False))


@cli.command()
@click.argument(
    "document",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--base-url",
    type=str,
    default=None,
    help="Authority base URL (default: $CONFIGSTORE_BASE_URL).",
)
@click.option(
    "--json-logs/--no-json-logs",
    default=True,
    help="Use JSON format for logs (default: true).",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging.",
)
def push(
    document: Path,
    base_url: str | None,
    json_logs: bool,
    verbose: bool,
) -> None:
    """Save the configuration in DOCUMENT (YAML or JSON) to the authority."""
    config = _setup(base_url, json_logs, verbose)

    try:
        configuration = _load_document(document)
    except ParseError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    result = asyncio.run(_push(config, configuration))

    if isinstance(result, SaveAccepted):
        click.echo("Configuration saved.")
        if not result.reloaded:
            click.echo("Warning: reload after save failed", err=True)
        return

    if isinstance(result, SaveRejected):
        click.echo("Configuration rejected:", err=True)
        for detail in result.details:
            click.echo(f"  - {format_validation_detail(detail)}", err=True)
        sys.exit(1)

    click.echo(f"Error: {result.description}", err=True)
    sys.exit(1)


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
