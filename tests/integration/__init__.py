"""Integration tests for the Drive mirror.

These tests run the real DriveAPIWrapper, TreeMirror and MirrorCommand
against an in-memory Drive (tests.helpers.drive_fakes) served through
httpx.MockTransport, and write to temporary directories.

Test Coverage:
- Full mirror runs: nested trees, queries, non-recursive runs
- Degradation: unreadable folders, failed exports, orphaned folders
- Repeat runs: idempotence and non-destructive directory handling
- CLI: exit codes and summary output for a complete run
"""
