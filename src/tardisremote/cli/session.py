"""Running a single CLI invocation against the device."""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from pathlib import Path

import click
from pydantic import ValidationError

from tardisremote.core import TardisManager
from tardisremote.device import HttpDeviceAPI
from tardisremote.exceptions import (
    ConfigValidationError,
    RemoteError,
    TardisRemoteError,
    format_error_for_display,
)
from tardisremote.models import AppConfig
from tardisremote.protocols import CommandEvent

logger = logging.getLogger(__name__)

Action = Callable[[TardisManager], Awaitable[None] | None]


class CommandReporter:
    """Collects the outcome of every device command issued during a session."""

    def __init__(self) -> None:
        self.succeeded: list[tuple[str, str | None]] = []
        self.failures: list[tuple[str, str | None, RemoteError | None]] = []

    def on_command_event(
        self,
        event: CommandEvent,
        operation: str,
        target: str | None,
        error: RemoteError | None = None,
    ) -> None:
        if event is CommandEvent.FAILED:
            self.failures.append((operation, target, error))
        else:
            self.succeeded.append((operation, target))


def build_manager(config: AppConfig) -> TardisManager:
    """Create a TardisManager talking HTTP to the configured device."""
    api = HttpDeviceAPI(config.device_url, timeout=config.request_timeout)
    return TardisManager(api, config)


def load_config(ctx: click.Context) -> AppConfig:
    """
    Load the configuration for this invocation, applying --url.

    Raises:
        ConfigFileInvalidError: If the config file is not valid JSON
        ConfigValidationError: If a value (including --url) is invalid
    """
    obj = ctx.obj or {}
    path: Path | None = obj.get("config_path")
    config = AppConfig.load_or_default(path)

    url = obj.get("url")
    if url:
        try:
            config = AppConfig.model_validate({**config.model_dump(), "device_url": url})
        except ValidationError as e:
            first = e.errors()[0]
            raise ConfigValidationError("device_url", url, first.get("msg", "invalid URL")) from e
    return config


def echo_error(error: Exception) -> None:
    """Print an error the way every command does: message, then hint."""
    user_message, recovery_hint = format_error_for_display(error)
    click.echo(f"Error: {user_message}", err=True)
    if recovery_hint:
        click.echo(f"Hint: {recovery_hint}", err=True)


def run_session(ctx: click.Context, action: Action) -> CommandReporter:
    """
    Build a manager, run an action against it and wait for its commands.

    Exits with status 1 if the configuration is invalid or if any device
    command failed.
    """
    try:
        config = load_config(ctx)
    except TardisRemoteError as e:
        logger.error(f"Configuration error: {e.technical_message}")
        echo_error(e)
        ctx.exit(1)

    reporter = CommandReporter()

    async def session() -> bool:
        async with build_manager(config) as manager:
            manager.register_observer(reporter)
            result = action(manager)
            if inspect.isawaitable(result):
                await result
            return await manager.wait_idle(config.command_drain_timeout)

    try:
        drained = asyncio.run(session())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        click.echo("\nInterrupted", err=True)
        ctx.exit(130)

    if not drained:
        click.echo(
            f"Warning: some commands did not finish within {config.command_drain_timeout}s",
            err=True,
        )

    for operation, target, error in reporter.failures:
        if error is not None:
            echo_error(error)
        else:
            click.echo(f"Error: {operation} ({target}) failed", err=True)

    if reporter.failures or not drained:
        ctx.exit(1)
    return reporter
