"""Wire messages exchanged with the sync server, and transfer results."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from batchsync.contracts.changes import ChangeContainer
from batchsync.contracts.context import SyncContext
from batchsync.contracts.stats import DatabaseChangesApplied, DatabaseChangesSelected


class BatchEnvelope(BaseModel):
    """One batch of a (possibly) split transfer.

    ``batch_count == 0`` marks a single, unbatched transfer; its only envelope
    has ``batch_index == 0``.
    """

    context: SyncContext
    batch_index: int = Field(default=0, ge=0)
    batch_count: int = Field(default=0, ge=0)
    is_last_batch: bool = True
    changes: ChangeContainer = Field(default_factory=ChangeContainer)

    @model_validator(mode="after")
    def validate_batch_position(self) -> BatchEnvelope:
        if self.batch_count > 0 and self.batch_index >= self.batch_count:
            raise ValueError(f"batch_index {self.batch_index} out of range for batch_count {self.batch_count}")
        if self.batch_count == 0 and self.batch_index != 0:
            raise ValueError("an unbatched envelope (batch_count=0) must have batch_index=0")
        return self

    @property
    def is_batched(self) -> bool:
        return self.batch_count > 0


class SendChangesRequest(BatchEnvelope):
    """Upload envelope: client changes for one batch."""


class SendChangesResponse(BatchEnvelope):
    """Download envelope: server changes for one batch."""

    remote_client_timestamp: int = 0
    client_changes_applied: DatabaseChangesApplied | None = None


class GetMoreChangesRequest(BaseModel):
    context: SyncContext
    batch_index_requested: int = Field(ge=0)


class SendChangesAck(BaseModel):
    """Server acknowledgement of one uploaded batch."""

    context: SyncContext
    batch_index: int = Field(default=0, ge=0)
    changes_applied: DatabaseChangesApplied = Field(default_factory=DatabaseChangesApplied)
    remote_client_timestamp: int | None = None


class DownloadResult(BaseModel):
    """Value returned by :meth:`BatchTransferOrchestrator.download_changes`."""

    changes: ChangeContainer
    server_changes_selected: DatabaseChangesSelected
    client_changes_applied: DatabaseChangesApplied = Field(default_factory=DatabaseChangesApplied)
    remote_client_timestamp: int = 0
    batches_received: int = 0


class UploadConfirmation(BaseModel):
    """Value returned by :meth:`BatchTransferOrchestrator.upload_changes`."""

    batches_sent: int = 0
    rows_sent: int = 0
    changes_applied: DatabaseChangesApplied = Field(default_factory=DatabaseChangesApplied)
    remote_client_timestamp: int | None = None
