"""Public API surface for batchsync."""

__version__ = "0.1.0"

from batchsync.config import load_config
from batchsync.contracts import (
    BatchFetchError,
    BatchSendError,
    BatchSyncError,
    ChangeContainer,
    ConfigError,
    ContainerTable,
    DatabaseChangesApplied,
    DatabaseChangesSelected,
    DownloadResult,
    ObserverError,
    ProtocolViolationError,
    RowState,
    SendChangesAck,
    SendChangesRequest,
    SendChangesResponse,
    SyncContext,
    SyncRow,
    TableChangesApplied,
    TableChangesSelected,
    TransferConfig,
    Transport,
    TransportFailureError,
    UploadConfirmation,
)
from batchsync.engine import BatchTransferOrchestrator, split_by_rows
from batchsync.events import (
    DownloadRequestEvent,
    DownloadResponseEvent,
    EventId,
    Interceptors,
    ProgressEvent,
    UploadRequestEvent,
    attach_logging,
    format_message,
)
from batchsync.transport import HttpTransport, InMemoryTransport, create_transport

__all__ = [
    "BatchFetchError",
    "BatchSendError",
    "BatchSyncError",
    "BatchTransferOrchestrator",
    "ChangeContainer",
    "ConfigError",
    "ContainerTable",
    "DatabaseChangesApplied",
    "DatabaseChangesSelected",
    "DownloadRequestEvent",
    "DownloadResponseEvent",
    "DownloadResult",
    "EventId",
    "HttpTransport",
    "InMemoryTransport",
    "Interceptors",
    "ObserverError",
    "ProgressEvent",
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
    "UploadRequestEvent",
    "__version__",
    "attach_logging",
    "create_transport",
    "format_message",
    "load_config",
    "split_by_rows",
]
