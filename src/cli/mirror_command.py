"""Mirror command orchestration for CLI.

This module provides the MirrorCommand class that builds the run
configuration from an optional YAML file and command-line overrides, drives
one asynchronous TreeMirror run and translates exceptions to exit codes.
"""

import asyncio
import logging
import os
from typing import Any, Dict, Optional

import httpx

from src.cli.errors import CLIError, ConfigNotFoundError
from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.drive_client.api_wrapper import DriveAPIWrapper
from src.drive_client.auth import Authenticator
from src.drive_client.errors import (
    APIAccessError,
    APIUnreachableError,
    DriveError,
    InvalidCredentialsError,
    PermissionDeniedError,
)
from src.tree_mirror.config_loader import ConfigLoader
from src.tree_mirror.errors import ConfigError, FilesystemError, PathResolutionError
from src.tree_mirror.models import MirrorConfig, MirrorResult
from src.tree_mirror.tree_mirror import TreeMirror

logger = logging.getLogger(__name__)


class MirrorCommand:
    """Runs a complete mirror from the command line.

    The workflow:
        1. Read the YAML config file (if given) and apply CLI overrides
        2. Validate the resulting MirrorConfig (and save it when asked)
        3. Run TreeMirror inside an event loop
        4. Print a summary and return an exit code

    Example:
        >>> output = OutputHandler(verbosity=1)
        >>> cmd = MirrorCommand(output_handler=output)
        >>> exit_code = cmd.run(folder_id="1AbC", output_path="./docs")
        >>> sys.exit(exit_code)
    """

    def __init__(
        self,
        output_handler: Optional[OutputHandler] = None,
        authenticator: Optional[Authenticator] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize mirror command with dependencies.

        Args:
            output_handler: OutputHandler for terminal output (optional)
            authenticator: Authenticator for the Drive API (optional)
            http_client: Preconfigured AsyncClient passed to DriveAPIWrapper
                         (optional, used by tests)
        """
        self.output_handler = output_handler or OutputHandler()
        self.authenticator = authenticator
        self.http_client = http_client

    def build_config(
        self,
        config_path: Optional[str] = None,
        folder_id: Optional[str] = None,
        output_path: Optional[str] = None,
        query: Optional[str] = None,
        recursive: Optional[bool] = None,
        document_format: Optional[str] = None,
        max_concurrency: Optional[int] = None,
    ) -> MirrorConfig:
        """Merge config file values with command-line overrides.

        Options left as None keep the file value (or the default).

        Raises:
            ConfigNotFoundError: If config_path is given but does not exist
            ConfigError: If the merged configuration is invalid
            FilesystemError: If the config file cannot be read
        """
        config_dict: Dict[str, Any] = {}
        if config_path:
            if not os.path.exists(config_path):
                raise ConfigNotFoundError(config_path)
            logger.info(f"Loading configuration from {config_path}")
            config_dict.update(ConfigLoader.read(config_path))

        overrides = {
            'root_folder_id': folder_id,
            'output_path': output_path,
            'query': query,
            'recursive': recursive,
            'document_format': document_format,
            'max_concurrency': max_concurrency,
        }
        for key, value in overrides.items():
            if value is not None:
                config_dict[key] = value

        return ConfigLoader.from_dict(config_dict)

    def run(self, save_config_path: Optional[str] = None, **options: Any) -> ExitCode:
        """Execute a mirror run.

        Args:
            save_config_path: Write the merged configuration to this YAML
                              file before mirroring (optional)
            **options: Keyword arguments accepted by build_config()

        Returns:
            ExitCode indicating success or specific failure type
        """
        try:
            config = self.build_config(**options)

            if save_config_path:
                ConfigLoader.save(save_config_path, config)
                self.output_handler.success(f"Configuration saved to {save_config_path}")

            self.output_handler.info(f"Mirroring Drive folder {config.root_folder_id}")
            self.output_handler.info(f"  Output directory: {os.path.abspath(config.output_path)}")
            if config.query:
                self.output_handler.info(f"  Query: {config.query}")
            if not config.recursive:
                self.output_handler.info("  Sub-folders: not mirrored")

            with self.output_handler.spinner("Mirroring Drive folder..."):
                result = asyncio.run(self._run_async(config))

            self.output_handler.print_mirror_summary(result)
            return ExitCode.SUCCESS

        except (InvalidCredentialsError, PermissionDeniedError) as e:
            logger.error(f"Authentication failed: {e}")
            self.output_handler.error(f"Authentication failed: {e}")
            self.output_handler.info(
                "Check the GOOGLE_DRIVE_ACCESS_TOKEN environment variable"
            )
            return ExitCode.AUTH_ERROR

        except (APIUnreachableError, APIAccessError) as e:
            logger.error(f"API error: {e}")
            self.output_handler.error(f"API error: {e}")
            self.output_handler.info("Check your internet connection and try again")
            return ExitCode.NETWORK_ERROR

        except DriveError as e:
            logger.error(f"Drive error: {e}")
            self.output_handler.error(f"Drive error: {e}")
            return ExitCode.GENERAL_ERROR

        except (ConfigError, ConfigNotFoundError) as e:
            logger.error(f"Configuration error: {e}")
            self.output_handler.error(f"Configuration error: {e}")
            return ExitCode.GENERAL_ERROR

        except (FilesystemError, PathResolutionError) as e:
            logger.error(f"Mirror failed: {e}")
            self.output_handler.error(f"Mirror failed: {e}")
            return ExitCode.GENERAL_ERROR

        except CLIError as e:
            logger.error(f"CLI error: {e}")
            self.output_handler.error(f"Error: {e}")
            return ExitCode.GENERAL_ERROR

        except Exception as e:
            logger.exception("Unexpected error during mirror")
            self.output_handler.error(f"Unexpected error: {e}")
            return ExitCode.GENERAL_ERROR

    async def _run_async(self, config: MirrorConfig) -> MirrorResult:
        if not self.authenticator:
            self.authenticator = Authenticator()

        async with DriveAPIWrapper(self.authenticator, client=self.http_client) as api:
            return await TreeMirror(api).run(config)
