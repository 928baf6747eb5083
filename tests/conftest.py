"""Shared test fixtures for batchsync tests."""

from __future__ import annotations

from uuid import UUID

import pytest

from batchsync.contracts.context import SyncContext


@pytest.fixture
def sync_context() -> SyncContext:
    """A deterministic session context."""
    return SyncContext(session_id=UUID("12345678-1234-5678-1234-567812345678"), scope_name="DefaultScope")
