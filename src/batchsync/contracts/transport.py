"""Transport adapter contract.

Every concrete transport (HTTP, in-memory, ...) implements this interface so
the :class:`~batchsync.engine.orchestrator.BatchTransferOrchestrator` can drive
batched transfers without knowing how bytes reach the server.

Implementations report network/IO failures as
:class:`~batchsync.contracts.exceptions.TransportFailureError` and unusable
replies as :class:`~batchsync.contracts.exceptions.ProtocolViolationError`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType

from batchsync.contracts.context import SyncContext
from batchsync.contracts.messages import SendChangesAck, SendChangesRequest, SendChangesResponse


class Transport(ABC):
    @abstractmethod
    async def __aenter__(self) -> Transport: ...  # pragma: no cover

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...  # pragma: no cover

    @property
    @abstractmethod
    def host(self) -> str:
        """Identifier of the remote end, used as the ``source`` of progress events."""

    @abstractmethod
    async def fetch_batch(
        self, context: SyncContext, batch_index_requested: int
    ) -> SendChangesResponse: ...  # pragma: no cover

    @abstractmethod
    async def send_batch(self, context: SyncContext, request: SendChangesRequest) -> SendChangesAck: ...  # pragma: no cover
