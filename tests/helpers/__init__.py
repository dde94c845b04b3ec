"""Test helper modules for Drive mirror testing.

This package provides utilities for unit and integration testing:
- drive_fakes: In-memory Drive backend served through httpx.MockTransport
"""

from .drive_fakes import API_URL, FakeDrive, make_authenticator

__all__ = [
    'API_URL',
    'FakeDrive',
    'make_authenticator',
]
