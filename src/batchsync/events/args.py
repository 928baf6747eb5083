"""Progress event records.

Events are immutable snapshots built right before dispatch. Their ``message``
is derived by :func:`batchsync.events.messages.format_message`.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, Field

from batchsync.contracts.changes import ChangeContainer
from batchsync.contracts.context import SyncContext
from batchsync.contracts.messages import SendChangesRequest
from batchsync.contracts.stats import DatabaseChangesApplied, DatabaseChangesSelected
from batchsync.events.ids import EventId


class ProgressEvent(BaseModel):
    event_id: ClassVar[EventId]

    context: SyncContext
    host: str

    model_config = {"frozen": True}

    @property
    def source(self) -> str:
        return self.host

    @property
    def message(self) -> str:
        from batchsync.events.messages import format_message

        return format_message(self)


class DownloadRequestEvent(ProgressEvent):
    """About to ask the server for a batch."""

    event_id: ClassVar[EventId] = EventId.HTTP_GETTING_CHANGES_REQUEST

    batch_index_requested: int = Field(ge=0)
    last_batch_index_received: int = Field(ge=-1)
    batch_count: int = Field(default=0, ge=0)


class DownloadResponseEvent(ProgressEvent):
    """A batch was received and merged."""

    event_id: ClassVar[EventId] = EventId.HTTP_GETTING_CHANGES_RESPONSE

    batch_index: int = Field(ge=0)
    batch_count: int = Field(ge=0)
    is_last_batch: bool
    changes: ChangeContainer
    server_changes_selected: DatabaseChangesSelected
    client_changes_applied: DatabaseChangesApplied | None = None
    remote_client_timestamp: int = 0


class UploadRequestEvent(ProgressEvent):
    """About to send a batch to the server."""

    event_id: ClassVar[EventId] = EventId.HTTP_SENDING_CHANGES_REQUEST

    request: SendChangesRequest
    rows_count: int = Field(ge=0)
    total_rows_count: int = Field(ge=0)
