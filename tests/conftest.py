"""Root pytest configuration for all tests.

This conftest applies to all test types (unit, integration).
"""

import logging

import pytest

from tests.helpers.drive_fakes import FakeDrive, make_authenticator

# httpx logs every request at INFO
logging.getLogger("httpx").setLevel(logging.WARNING)


@pytest.fixture
def fake_drive():
    """Empty FakeDrive with a root folder 'root'."""
    drive = FakeDrive()
    drive.add_folder('root', 'Root')
    return drive


@pytest.fixture
def authenticator():
    """Mock Authenticator returning credentials for the fake Drive."""
    return make_authenticator()
