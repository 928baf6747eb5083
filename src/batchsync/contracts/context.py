"""Sync session context contract."""

from __future__ import annotations

from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

PROTOCOL_VERSION = "1.0"


class SyncContext(BaseModel):
    """Session and correlation data threaded through every envelope and event.

    The transfer core forwards it untouched.
    """

    session_id: UUID = Field(default_factory=uuid4)
    scope_name: str = "DefaultScope"
    protocol_version: str = PROTOCOL_VERSION
    schema_name: str | None = None
    parameters: dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}
