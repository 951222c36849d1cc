"""Main CLI entry point."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import click

from tardisremote import __version__

from .commands import (
    color,
    config,
    play,
    scene,
    scenes,
    sections,
    sounds,
    stop,
    turn_off,
    turn_on,
)

logger = logging.getLogger(__name__)

LOG_DIR = Path.home() / ".tardisremote" / "logs"


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> Path:
    """
    Configure logging for the application.

    Everything goes to a rotating log file. With -v or --debug, records are
    also echoed to stderr so one-shot commands show what they sent.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, enable debug mode with file logging in the current directory
        log_file: Custom log file path (optional)
        log_level: Log level for file logging (DEBUG/INFO/WARNING/ERROR)

    Returns:
        Path of the log file in use
    """
    # Determine log level based on flags
    if debug:
        level = logging.DEBUG
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Override with explicit log level if provided
    if log_file:
        level = getattr(logging, log_level.upper())

    # Determine log file path
    if debug and not log_file:
        log_path = Path.cwd() / "tardisremote-debug.log"
    elif log_file:
        log_path = log_file
        log_path.parent.mkdir(parents=True, exist_ok=True)
    else:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        log_path = LOG_DIR / "tardisremote.log"

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Create rotating file handler (keeps last 5 files, max 10MB each)
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)

    if verbose or debug:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter('%(levelname)s %(name)s: %(message)s'))
        root_logger.addHandler(console_handler)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_path}")
    return log_path


@click.group()
@click.pass_context
@click.version_option(version=__version__, prog_name="tardis")
@click.option(
    '--url',
    '-u',
    type=str,
    default=None,
    help='Controller base URL (overrides device_url from the config file)'
)
@click.option(
    '--config-file',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Config file to use (default: ~/.tardisremote/config.json)'
)
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./tardisremote-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Custom log file path'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for file logging (default: INFO)'
)
def cli(
    ctx,
    url: Optional[str],
    config_file: Optional[Path],
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str
):
    """
    TARDIS Remote - control the lights, sounds and scenes of a TARDIS prop.

    Every command talks to the controller's REST API, waits for the device
    to answer and exits with status 1 if any command was rejected.

    \b
    Examples:
      # What can the prop do?
      tardis sections
      tardis sounds

      # Lights
      tardis color top_light '#0000FF'
      tardis off front_window
      tardis on

      # Audio and scenes
      tardis play takeoff.mp3
      tardis scene "Materialize"

      # Talk to a different controller once
      tardis --url http://192.168.1.42 sounds

      # Persist the controller address
      tardis config set device_url http://192.168.1.42
    """
    ctx.ensure_object(dict)
    ctx.obj["url"] = url
    ctx.obj["config_path"] = config_file
    ctx.obj["log_path"] = setup_logging(verbose, debug, log_file, log_level)


# Register commands
cli.add_command(sections)
cli.add_command(sounds)
cli.add_command(scenes)
cli.add_command(color)
cli.add_command(turn_on)
cli.add_command(turn_off)
cli.add_command(play)
cli.add_command(stop)
cli.add_command(scene)
cli.add_command(config)

if __name__ == "__main__":
    cli()
