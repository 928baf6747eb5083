from batchsync.contracts.exceptions import (
    BatchFetchError,
    BatchSendError,
    BatchSyncError,
    ConfigError,
    ObserverError,
    ProtocolViolationError,
    TransportFailureError,
)


def test_exception_hierarchy() -> None:
    assert issubclass(ConfigError, BatchSyncError)
    assert issubclass(TransportFailureError, BatchSyncError)
    assert issubclass(BatchFetchError, TransportFailureError)
    assert issubclass(BatchSendError, TransportFailureError)
    assert issubclass(ProtocolViolationError, BatchSyncError)
    assert issubclass(ObserverError, BatchSyncError)


def test_protocol_violation_is_not_a_transport_failure() -> None:
    assert not issubclass(ProtocolViolationError, TransportFailureError)
    assert not issubclass(TransportFailureError, ProtocolViolationError)


def test_transport_failure_error_fields() -> None:
    err = BatchFetchError("boom", batch_index=2, status_code=503)

    assert err.batch_index == 2
    assert err.status_code == 503
    assert str(err) == "boom"


def test_transport_failure_error_defaults() -> None:
    err = TransportFailureError("boom")

    assert err.batch_index is None
    assert err.status_code is None


def test_protocol_violation_error_fields() -> None:
    err = ProtocolViolationError("bad index", expected=1, received=3)

    assert err.expected == 1
    assert err.received == 3


def test_observer_error_exposes_event_id() -> None:
    assert ObserverError("failed", event_id=20100).event_id == 20100
