"""Pytest configuration and fixtures for integration tests."""

import asyncio

import pytest

from src.drive_client.api_wrapper import DriveAPIWrapper
from src.tree_mirror.models import MirrorConfig
from src.tree_mirror.tree_mirror import TreeMirror


@pytest.fixture
def run_mirror(fake_drive, authenticator):
    """Run one mirror against fake_drive and return its MirrorResult.

    Example:
        >>> result = run_mirror(output_path=str(tmp_path), query="...")
    """
    def _run(**config_options):
        config_options.setdefault('root_folder_id', 'root')
        config = MirrorConfig(**config_options)

        async def _mirror():
            async with fake_drive.client() as client:
                api = DriveAPIWrapper(authenticator, client=client)
                return await TreeMirror(api).run(config)

        return asyncio.run(_mirror())

    return _run
