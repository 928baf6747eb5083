"""Exception hierarchy for batchsync.

All batchsync exceptions inherit from :class:`BatchSyncError`, so a caller can
catch any library error with a single ``except`` clause while still telling
"server unreachable" (:class:`TransportFailureError`) apart from "server
misbehaved" (:class:`ProtocolViolationError`).
"""

from __future__ import annotations


class BatchSyncError(Exception):
    """Base exception for all batchsync errors."""


class ConfigError(BatchSyncError):
    """Configuration loading or validation failure."""


class TransportFailureError(BatchSyncError):
    """Network or IO failure during one batch exchange.

    Attributes:
        batch_index: Index of the batch being exchanged, when known.
        status_code: HTTP status returned by the server, when there was one.
    """

    def __init__(self, message: str, *, batch_index: int | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.batch_index = batch_index
        self.status_code = status_code


class BatchFetchError(TransportFailureError):
    """A download batch could not be fetched; the whole download is aborted."""


class BatchSendError(TransportFailureError):
    """An upload batch could not be sent; the whole upload is aborted."""


class ProtocolViolationError(BatchSyncError):
    """Server reply inconsistent with the requested batch sequence.

    Attributes:
        expected: What the client expected (e.g. the requested batch index).
        received: What the server actually sent.
    """

    def __init__(self, message: str, *, expected: object = None, received: object = None) -> None:
        super().__init__(message)
        self.expected = expected
        self.received = received


class ObserverError(BatchSyncError):
    """A registered observer failed while the registry is in ``raise`` mode."""

    def __init__(self, message: str, *, event_id: int) -> None:
        super().__init__(message)
        self.event_id = event_id
