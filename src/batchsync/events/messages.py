"""Human-readable progress messages.

The text is observational only; nothing in the transfer logic reads it.
"""

from __future__ import annotations

from batchsync.events.args import DownloadRequestEvent, DownloadResponseEvent, ProgressEvent, UploadRequestEvent


def batch_indicator(batch_index: int, batch_count: int) -> str:
    """1-based ``(current/total)`` indicator."""
    return f"({batch_index + 1}/{batch_count})"


def format_message(event: ProgressEvent) -> str:
    match event:
        case DownloadRequestEvent():
            if event.batch_count <= 1:
                return "Getting All Changes."
            return f"Getting Batch Changes. {batch_indicator(event.batch_index_requested, event.batch_count)}."
        case DownloadResponseEvent():
            rows = event.changes.rows_count()
            total = event.server_changes_selected.total_changes_selected
            if event.batch_count == 0 and event.batch_index == 0:
                return f"Downloaded All Changes. Rows: {rows}. Total Rows: {total}."
            indicator = batch_indicator(event.batch_index, event.batch_count)
            return f"Downloaded Batch Changes. {indicator}. Rows: {rows}. Total Rows: {total}."
        case UploadRequestEvent():
            request = event.request
            if request.batch_count == 0 and request.batch_index == 0:
                return f"Sending All Changes. Rows: {event.rows_count}. Waiting Server Response..."
            indicator = batch_indicator(request.batch_index, request.batch_count)
            return (
                f"Sending Batch Changes. Batches: {indicator}. "
                f"Rows: ({event.rows_count}/{event.total_rows_count}). Waiting Server Response..."
            )
        case _:
            raise TypeError(f"unsupported progress event: {type(event).__name__}")
