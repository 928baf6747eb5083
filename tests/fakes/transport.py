"""Scripted in-memory transport fake for orchestrator tests."""

from __future__ import annotations

from batchsync.contracts.context import SyncContext
from batchsync.contracts.messages import SendChangesAck, SendChangesRequest, SendChangesResponse
from batchsync.contracts.stats import DatabaseChangesApplied
from batchsync.contracts.transport import Transport


class FakeTransport(Transport):
    """Serves pre-built responses by position and records every call.

    ``responses[i]`` answers the i-th ``fetch_batch`` call; an exception
    instance in that slot is raised instead. ``send_failures`` maps an upload
    batch index to the exception raised when that batch is sent.
    """

    def __init__(
        self,
        responses: list[SendChangesResponse | Exception] | None = None,
        *,
        host: str = "https://sync.test/api",
        send_failures: dict[int, Exception] | None = None,
        ack_index_offset: int = 0,
        log: list[str] | None = None,
    ) -> None:
        self._responses = list(responses or [])
        self._host = host
        self._send_failures = dict(send_failures or {})
        self._ack_index_offset = ack_index_offset
        self.log = log if log is not None else []

        self.fetch_calls: list[int] = []
        self.send_calls: list[SendChangesRequest] = []

    async def __aenter__(self) -> FakeTransport:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore[override]
        return None

    @property
    def host(self) -> str:
        return self._host

    async def fetch_batch(self, context: SyncContext, batch_index_requested: int) -> SendChangesResponse:
        position = len(self.fetch_calls)
        self.fetch_calls.append(batch_index_requested)
        self.log.append(f"fetch:{batch_index_requested}")
        response = self._responses[position]
        if isinstance(response, Exception):
            raise response
        return response

    async def send_batch(self, context: SyncContext, request: SendChangesRequest) -> SendChangesAck:
        self.send_calls.append(request)
        self.log.append(f"send:{request.batch_index}")
        failure = self._send_failures.get(request.batch_index)
        if failure is not None:
            raise failure
        return SendChangesAck(
            context=context,
            batch_index=request.batch_index + self._ack_index_offset,
            changes_applied=DatabaseChangesApplied(),
            remote_client_timestamp=100 + request.batch_index,
        )
