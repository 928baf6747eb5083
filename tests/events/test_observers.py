from __future__ import annotations

import logging

import pytest

from batchsync.contracts.context import SyncContext
from batchsync.events.args import DownloadRequestEvent
from batchsync.events.ids import EventId
from batchsync.events.interceptors import Interceptors
from batchsync.events.observers import attach_logging


@pytest.mark.asyncio
async def test_attach_logging_logs_event_messages(sync_context: SyncContext, caplog: pytest.LogCaptureFixture) -> None:
    interceptors = Interceptors()
    attach_logging(interceptors)

    with caplog.at_level(logging.INFO, logger="batchsync.progress"):
        await interceptors.dispatch(
            DownloadRequestEvent(
                context=sync_context,
                host="https://sync.test/api",
                batch_index_requested=1,
                last_batch_index_received=0,
                batch_count=4,
            )
        )

    (record,) = caplog.records
    assert record.getMessage() == "https://sync.test/api Getting Batch Changes. (2/4)."
    assert record.event_id == 20100
    assert record.event_name == "HttpGettingChangesRequest"
    assert record.session_id == str(sync_context.session_id)


def test_attach_logging_subscribes_every_event_kind() -> None:
    interceptors = Interceptors()

    unsubscribers = attach_logging(interceptors, logger=logging.getLogger("custom"), level=logging.DEBUG)

    assert len(unsubscribers) == len(EventId)
    assert all(interceptors.handlers(event_id) for event_id in EventId)

    for unsubscribe in unsubscribers:
        unsubscribe()
    assert len(interceptors) == 0
