"""Main CLI entry point for the confluence-tree command.

This module provides the Typer application that reads a Confluence page
tree and writes it to a directory or a tar archive.
"""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from src.cli.errors import ConfigNotFoundError
from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.confluence_client.errors import (
    APIUnreachableError,
    ForbiddenError,
    InvalidCredentialsError,
    PageNotFoundError,
    ReaderError,
    RemoteError,
)
from src.tree_reader.config_loader import ConfigLoader
from src.tree_reader.errors import ConfigError, FilesystemError, InvalidUrlError
from src.tree_reader.url_reader import ConfluenceUrlReader, select_reader

VERSION = "0.1.0"

app = typer.Typer(
    name="confluence-tree",
    help="""Read a Confluence page, its child pages and attachments as markdown files.

EXAMPLE:
  confluence-tree https://company.atlassian.net/wiki/spaces/TEAM/pages/123456/Home --output ./site""",
    add_completion=False,
    rich_markup_mode=None,
)

# Module logger
logger = logging.getLogger(__name__)


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"confluence-tree_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _exit_code_for(error: Exception) -> ExitCode:
    """Map a reader error to the CLI exit code."""
    if isinstance(error, (InvalidCredentialsError, ForbiddenError)):
        return ExitCode.AUTH_ERROR
    if isinstance(error, PageNotFoundError):
        return ExitCode.NOT_FOUND
    if isinstance(error, (APIUnreachableError, RemoteError)):
        return ExitCode.NETWORK_ERROR
    return ExitCode.GENERAL_ERROR


def _load_readers(config_path: str):
    """Load the config file and create one reader per integration.

    Raises:
        ConfigNotFoundError: If the config file does not exist
        ConfigError: If the config file is invalid
    """
    if not os.path.exists(config_path):
        raise ConfigNotFoundError(config_path)
    return ConfluenceUrlReader.factory(ConfigLoader.load(config_path))


@app.command()
def main_command(
    url: Optional[str] = typer.Argument(
        None,
        help="Confluence page URL (https://HOST/wiki/spaces/SPACE/pages/ID/slug)",
    ),
    config_path: str = typer.Option(
        ConfigLoader.DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        help="Path to the YAML configuration file",
        metavar="PATH",
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Directory to write the files into (default: current directory)",
        metavar="DIR",
    ),
    archive_path: Optional[str] = typer.Option(
        None,
        "--archive",
        help="Write a .tar.gz archive instead of a directory",
        metavar="FILE",
    ),
    list_only: bool = typer.Option(
        False,
        "--list",
        help="Only list the files that would be written",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    """Read a Confluence page tree and write it as markdown files.

    \b
    The page, every descendant page and every attachment are written as:
      /docs/<Page title>.md
      /docs/<parent-title>/<Child title>.md
      /docs/attachments/<File-name.ext>
      docs/index.md
    """
    if version:
        typer.echo(f"confluence-tree version {VERSION}")
        raise typer.Exit()

    if not url:
        typer.echo("Error: Missing argument 'URL'.", err=True)
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if output_dir and archive_path:
        typer.echo("Error: --output and --archive are mutually exclusive", err=True)
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    try:
        reader = select_reader(_load_readers(config_path), url)
        output.info(f"Reading page tree from {reader.host}")

        with output.spinner("Reading page tree..."):
            response = reader.read_tree(url)

        entries = response.entries
        if list_only or verbosity >= 1:
            output.print_file_table(entries)
        if list_only:
            raise typer.Exit(ExitCode.SUCCESS)

        if archive_path:
            with open(archive_path, 'wb') as f:
                f.write(response.archive())
            destination = archive_path
        else:
            destination = response.dir(output_dir or ".")

        output.print_tree_summary(entries, destination)
        output.debug(f"etag: {response.etag}")
        raise typer.Exit(ExitCode.SUCCESS)

    except typer.Exit:
        raise

    except (ConfigNotFoundError, ConfigError, InvalidUrlError, FilesystemError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    except ReaderError as e:
        logger.error(f"Reading page tree failed: {e}")
        output.error(f"Reading page tree failed: {e}")
        raise typer.Exit(_exit_code_for(e))

    except OSError as e:
        logger.error(f"Writing archive failed: {e}")
        output.error(f"Writing archive failed: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    except Exception as e:
        logger.exception("Unexpected error while reading page tree")
        output.error(f"Unexpected error: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)


def main() -> None:
    """Main entry point for the CLI application."""
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
