"""YAML configuration loading and validation.

This module handles reading and saving mirror configuration from YAML files.
The Drive folder ID serves as the anchor of the mirrored hierarchy and the
output path is the local directory that corresponds to it.
"""

import os
from typing import Any, Dict

import yaml

from .errors import ConfigError, FilesystemError
from .models import DocumentFormat, MirrorConfig


class ConfigLoader:
    """Handles configuration file reading, validation, and saving.

    Configuration file structure:
        root_folder_id: "1AbCdEfGhIjK"
        output_path: ./docs
        query: "mimeType = 'application/vnd.google-apps.document'"
        recursive: true
        document_format: markdown
        max_concurrency: 8
    """

    REQUIRED_FIELDS = {'root_folder_id', 'output_path'}

    DEFAULTS = {
        'query': None,
        'recursive': True,
        'document_format': DocumentFormat.MARKDOWN.value,
        'max_concurrency': 8,
    }

    @classmethod
    def read(cls, config_path: str) -> Dict[str, Any]:
        """Read a YAML configuration file into a raw dictionary.

        No field validation happens here, so the result can be merged with
        command-line overrides before being passed to from_dict().

        Raises:
            FilesystemError: If file cannot be read
            ConfigError: If the file is empty or not a YAML dictionary
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise FilesystemError(
                config_path,
                'read',
                'Configuration file not found'
            )
        except PermissionError:
            raise FilesystemError(
                config_path,
                'read',
                'Permission denied'
            )
        except OSError as e:
            raise FilesystemError(
                config_path,
                'read',
                str(e)
            )

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML syntax: {str(e)}"
            )

        if config_dict is None:
            raise ConfigError("Configuration file is empty")

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return config_dict

    @classmethod
    def save(cls, config_path: str, mirror_config: MirrorConfig) -> None:
        """Save configuration to a YAML file.

        Raises:
            FilesystemError: If file cannot be written
        """
        config_dict: Dict[str, Any] = {
            'root_folder_id': mirror_config.root_folder_id,
            'output_path': mirror_config.output_path,
            'recursive': mirror_config.recursive,
            'document_format': mirror_config.document_format.value,
            'max_concurrency': mirror_config.max_concurrency,
        }
        if mirror_config.query:
            config_dict['query'] = mirror_config.query

        yaml_str = yaml.safe_dump(
            config_dict,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        config_dir = os.path.dirname(config_path)
        if config_dir:
            try:
                os.makedirs(config_dir, exist_ok=True)
            except OSError as e:
                raise FilesystemError(
                    config_dir,
                    'create_directory',
                    str(e)
                )

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise FilesystemError(
                config_path,
                'write',
                'Permission denied'
            )
        except OSError as e:
            raise FilesystemError(
                config_path,
                'write',
                str(e)
            )

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> MirrorConfig:
        """Parse and validate a configuration dictionary.

        Args:
            config_dict: Raw configuration dictionary (from YAML or CLI options)

        Returns:
            Validated MirrorConfig object

        Raises:
            ConfigError: If configuration is invalid
        """
        missing_fields = {
            name for name in cls.REQUIRED_FIELDS
            if config_dict.get(name) is None
        }
        if missing_fields:
            raise ConfigError(
                f"Missing required fields: {', '.join(sorted(missing_fields))}"
            )

        root_folder_id = str(config_dict['root_folder_id']).strip()
        output_path = str(config_dict['output_path']).strip()

        query = config_dict.get('query', cls.DEFAULTS['query'])
        if query is not None:
            query = str(query).strip() or None

        recursive = config_dict.get('recursive', cls.DEFAULTS['recursive'])
        if not isinstance(recursive, bool):
            raise ConfigError(
                f"Field 'recursive' must be a boolean, got {recursive!r}",
                'recursive'
            )

        format_raw = config_dict.get('document_format', cls.DEFAULTS['document_format'])
        if isinstance(format_raw, DocumentFormat):
            document_format = format_raw
        else:
            try:
                document_format = DocumentFormat(str(format_raw).lower())
            except ValueError:
                allowed = ', '.join(f.value for f in DocumentFormat)
                raise ConfigError(
                    f"Unknown document format '{format_raw}' (expected one of: {allowed})",
                    'document_format'
                )

        try:
            max_concurrency = int(config_dict.get('max_concurrency', cls.DEFAULTS['max_concurrency']))
        except (ValueError, TypeError) as e:
            raise ConfigError(
                f"Invalid value: {str(e)}",
                'max_concurrency'
            )

        mirror_config = MirrorConfig(
            root_folder_id=root_folder_id,
            output_path=output_path,
            query=query,
            recursive=recursive,
            document_format=document_format,
            max_concurrency=max_concurrency,
        )
        cls.validate(mirror_config)
        return mirror_config

    @classmethod
    def validate(cls, mirror_config: MirrorConfig) -> None:
        """Validate a MirrorConfig before any traversal begins.

        Raises:
            ConfigError: If the root folder ID is missing, the output path is
                empty or points at an existing non-directory, or the
                concurrency limit is below 1
        """
        if not mirror_config.root_folder_id or not mirror_config.root_folder_id.strip():
            raise ConfigError(
                "Root folder ID cannot be empty",
                'root_folder_id'
            )

        if not mirror_config.output_path or not mirror_config.output_path.strip():
            raise ConfigError(
                "Output path cannot be empty",
                'output_path'
            )

        if os.path.exists(mirror_config.output_path) and not os.path.isdir(mirror_config.output_path):
            raise ConfigError(
                f"Output path {mirror_config.output_path} exists and is not a directory",
                'output_path'
            )

        if mirror_config.max_concurrency < 1:
            raise ConfigError(
                f"Field 'max_concurrency' must be at least 1, got {mirror_config.max_concurrency}",
                'max_concurrency'
            )
