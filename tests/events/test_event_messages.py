from __future__ import annotations

import pytest

from batchsync.contracts.context import SyncContext
from batchsync.contracts.messages import SendChangesRequest
from batchsync.contracts.stats import DatabaseChangesSelected
from batchsync.events.args import DownloadRequestEvent, DownloadResponseEvent, UploadRequestEvent
from batchsync.events.ids import EventId
from batchsync.events.messages import batch_indicator, format_message
from tests.fakes.changes import make_container

HOST = "https://sync.test/api"


def _response_event(context: SyncContext, *, batch_index: int, batch_count: int, rows: int, total: int):
    selected = DatabaseChangesSelected.from_container(make_container(("Customer", total)))
    return DownloadResponseEvent(
        context=context,
        host=HOST,
        batch_index=batch_index,
        batch_count=batch_count,
        is_last_batch=batch_index == max(batch_count - 1, 0),
        changes=make_container(("Customer", rows)),
        server_changes_selected=selected,
    )


def test_batch_indicator_is_one_based() -> None:
    assert batch_indicator(0, 3) == "(1/3)"
    assert batch_indicator(2, 3) == "(3/3)"


@pytest.mark.parametrize("batch_count", [0, 1])
def test_download_request_single_transfer_message(sync_context: SyncContext, batch_count: int) -> None:
    event = DownloadRequestEvent(
        context=sync_context, host=HOST, batch_index_requested=0, last_batch_index_received=-1, batch_count=batch_count
    )

    assert event.message == "Getting All Changes."


def test_download_request_batched_message(sync_context: SyncContext) -> None:
    event = DownloadRequestEvent(
        context=sync_context, host=HOST, batch_index_requested=1, last_batch_index_received=0, batch_count=3
    )

    assert event.message == "Getting Batch Changes. (2/3)."


def test_download_response_all_changes_message(sync_context: SyncContext) -> None:
    event = _response_event(sync_context, batch_index=0, batch_count=0, rows=7, total=7)

    assert event.message == "Downloaded All Changes. Rows: 7. Total Rows: 7."
    assert "All Changes" in event.message
    assert "/" not in event.message


def test_download_response_batched_message(sync_context: SyncContext) -> None:
    event = _response_event(sync_context, batch_index=1, batch_count=3, rows=10, total=20)

    assert event.message == "Downloaded Batch Changes. (2/3). Rows: 10. Total Rows: 20."


def test_upload_request_all_changes_message(sync_context: SyncContext) -> None:
    request = SendChangesRequest(context=sync_context, changes=make_container(("Customer", 4)))
    event = UploadRequestEvent(context=sync_context, host=HOST, request=request, rows_count=4, total_rows_count=4)

    assert event.message == "Sending All Changes. Rows: 4. Waiting Server Response..."


def test_upload_request_batched_message(sync_context: SyncContext) -> None:
    request = SendChangesRequest(
        context=sync_context, batch_index=0, batch_count=2, is_last_batch=False, changes=make_container(("Customer", 5))
    )
    event = UploadRequestEvent(context=sync_context, host=HOST, request=request, rows_count=5, total_rows_count=9)

    assert event.message == "Sending Batch Changes. Batches: (1/2). Rows: (5/9). Waiting Server Response..."


def test_format_message_is_the_message_property(sync_context: SyncContext) -> None:
    event = DownloadRequestEvent(
        context=sync_context, host=HOST, batch_index_requested=0, last_batch_index_received=-1
    )

    assert format_message(event) == event.message


def test_events_expose_source_and_event_id(sync_context: SyncContext) -> None:
    event = DownloadRequestEvent(
        context=sync_context, host=HOST, batch_index_requested=0, last_batch_index_received=-1
    )

    assert event.source == HOST
    assert event.event_id is EventId.HTTP_GETTING_CHANGES_REQUEST
    assert UploadRequestEvent.event_id == 20000
    assert DownloadResponseEvent.event_id == 20150


def test_event_ids_have_stable_numbers_and_names() -> None:
    assert {member.value: member.label for member in EventId} == {
        20000: "HttpSendingChangesRequest",
        20100: "HttpGettingChangesRequest",
        20150: "HttpGettingChangesResponse",
    }


def test_events_are_immutable(sync_context: SyncContext) -> None:
    event = DownloadRequestEvent(
        context=sync_context, host=HOST, batch_index_requested=0, last_batch_index_received=-1
    )

    with pytest.raises(ValueError):
        event.batch_index_requested = 3  # type: ignore[misc]
