"""Transport implementations and factory."""

from batchsync.transport.factory import create_transport, register
from batchsync.transport.http import HttpTransport
from batchsync.transport.memory import InMemoryTransport
from batchsync.transport.retrying import RetryingTransport

__all__ = ["HttpTransport", "InMemoryTransport", "RetryingTransport", "create_transport", "register"]
