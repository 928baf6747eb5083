"""Public contracts for batchsync."""

from batchsync.contracts.changes import ChangeContainer, ContainerTable, RowState, SyncRow
from batchsync.contracts.config import TransferConfig
from batchsync.contracts.context import PROTOCOL_VERSION, SyncContext
from batchsync.contracts.exceptions import (
    BatchFetchError,
    BatchSendError,
    BatchSyncError,
    ConfigError,
    ObserverError,
    ProtocolViolationError,
    TransportFailureError,
)
from batchsync.contracts.messages import (
    BatchEnvelope,
    DownloadResult,
    GetMoreChangesRequest,
    SendChangesAck,
    SendChangesRequest,
    SendChangesResponse,
    UploadConfirmation,
)
from batchsync.contracts.stats import (
    DatabaseChangesApplied,
    DatabaseChangesSelected,
    TableChangesApplied,
    TableChangesSelected,
)
from batchsync.contracts.transport import Transport

__all__ = [
    "PROTOCOL_VERSION",
    "BatchEnvelope",
    "BatchFetchError",
    "BatchSendError",
    "BatchSyncError",
    "ChangeContainer",
    "ConfigError",
    "ContainerTable",
    "DatabaseChangesApplied",
    "DatabaseChangesSelected",
    "DownloadResult",
    "GetMoreChangesRequest",
    "ObserverError",
    "ProtocolViolationError",
    "RowState",
    "SendChangesAck",
    "SendChangesRequest",
    "SendChangesResponse",
    "SyncContext",
    "SyncRow",
    "TableChangesApplied",
    "TableChangesSelected",
    "TransferConfig",
    "Transport",
    "TransportFailureError",
    "UploadConfirmation",
]
