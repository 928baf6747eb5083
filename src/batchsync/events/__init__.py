"""Progress notification mechanism."""

from batchsync.events.args import DownloadRequestEvent, DownloadResponseEvent, ProgressEvent, UploadRequestEvent
from batchsync.events.ids import EventId
from batchsync.events.interceptors import Handler, Interceptors, Unsubscribe
from batchsync.events.messages import batch_indicator, format_message
from batchsync.events.observers import attach_logging

__all__ = [
    "DownloadRequestEvent",
    "DownloadResponseEvent",
    "EventId",
    "Handler",
    "Interceptors",
    "ProgressEvent",
    "Unsubscribe",
    "UploadRequestEvent",
    "attach_logging",
    "batch_indicator",
    "format_message",
]
