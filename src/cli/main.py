"""Main CLI entry point for drive-mirror command.

This module provides the Typer application that serves as the entry point
for the drive-mirror command-line tool. It uses options on the main command
rather than subcommands for a simpler user experience.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from src.cli.mirror_command import MirrorCommand
from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.tree_mirror.models import DocumentFormat

__version__ = "0.1.0"

app = typer.Typer(
    name="drive-mirror",
    help="""Mirror a Google Drive folder hierarchy into a local Markdown tree.

QUICK START:
  drive-mirror --folder-id <id> --output ./docs                  # Mirror everything
  drive-mirror --folder-id <id> --output ./docs --no-recursive   # Top level only
  drive-mirror --config drive-mirror.yaml                        # Use a config file

Set GOOGLE_DRIVE_ACCESS_TOKEN in the environment or in a .env file.""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=False,
)

logger = logging.getLogger(__name__)

GETTING_STARTED_MESSAGE = """drive-mirror --folder-id <id> --output <folder>      # Mirror a Drive folder

--query "<drive query>"                              # Only export matching files
--no-recursive                                       # Skip sub-folders
--config <file.yaml>                                 # Read options from YAML
--help                                               # Show all options

Required environment variables:
  GOOGLE_DRIVE_ACCESS_TOKEN   - OAuth access token with Drive read scope"""


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries, and holds the httpx request logger at WARNING.

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

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)

    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter("%(asctime)s [%(levelname)8s] %(message)s", datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"drive-mirror_{timestamp}.log"

        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt=date_format
        )
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


@app.command()
def main_command(
    folder_id: Optional[str] = typer.Option(
        None,
        "--folder-id",
        help="Google Drive folder ID to mirror",
        metavar="ID",
    ),
    output_path: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Local directory that receives the mirrored tree",
        metavar="FOLDER",
    ),
    query: Optional[str] = typer.Option(
        None,
        "--query",
        "-q",
        help="Drive query clause restricting which files are exported",
    ),
    recursive: Optional[bool] = typer.Option(
        None,
        "--recursive/--no-recursive",
        help="Descend into sub-folders (default: recursive)",
    ),
    document_format: Optional[DocumentFormat] = typer.Option(
        None,
        "--format",
        case_sensitive=False,
        help="Export Google Docs via Drive markdown or via HTML converted locally",
    ),
    concurrency: Optional[int] = typer.Option(
        None,
        "--concurrency",
        min=1,
        help="Maximum number of concurrent exports (default: 8)",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML configuration file (command-line options take precedence)",
        metavar="FILE",
    ),
    save_config_path: Optional[str] = typer.Option(
        None,
        "--save-config",
        help="Write the effective configuration to a YAML file before mirroring",
        metavar="FILE",
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
    """Mirror a Google Drive folder hierarchy into a local Markdown tree.

    \b
    Google Docs are exported as <name>.md, .json files are written
    pretty-printed under their own name, other files are skipped.
    Existing local files with the same name are overwritten; nothing
    is ever deleted.

    \b
    EXAMPLE:
      drive-mirror --folder-id 1AbCdEf --output ./docs \\
        --query "mimeType = 'application/vnd.google-apps.document'"
    """
    if version:
        typer.echo(f"drive-mirror version {__version__}")
        raise typer.Exit()

    if folder_id is None and output_path is None and config_path is None:
        typer.echo(GETTING_STARTED_MESSAGE)
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    _configure_logging(verbosity, logdir)

    output = OutputHandler(verbosity=verbosity, no_color=no_color)
    mirror_cmd = MirrorCommand(output_handler=output)

    exit_code = mirror_cmd.run(
        config_path=config_path,
        folder_id=folder_id,
        output_path=output_path,
        query=query,
        recursive=recursive,
        document_format=document_format.value if document_format else None,
        max_concurrency=concurrency,
        save_config_path=save_config_path,
    )

    raise typer.Exit(exit_code)


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


if __name__ == "__main__":
    main()
