"""In-memory loopback transport.

Plays the server side of the batch protocol without any network: download
batches are cut from a fixed change set and every uploaded batch is
acknowledged as fully applied. Useful for dry runs and for exercising
observers.
"""

from __future__ import annotations

from types import TracebackType

from batchsync.contracts.changes import ChangeContainer
from batchsync.contracts.context import SyncContext
from batchsync.contracts.exceptions import TransportFailureError
from batchsync.contracts.messages import SendChangesAck, SendChangesRequest, SendChangesResponse
from batchsync.contracts.stats import DatabaseChangesApplied, TableChangesApplied
from batchsync.contracts.transport import Transport
from batchsync.engine.batching import split_by_rows


class InMemoryTransport(Transport):
    def __init__(
        self,
        server_changes: ChangeContainer | None = None,
        *,
        max_rows_per_batch: int = 0,
        remote_client_timestamp: int = 0,
        host: str = "memory://",
    ) -> None:
        self._parts = split_by_rows(server_changes or ChangeContainer(), max_rows_per_batch)
        self._timestamp = remote_client_timestamp
        self._host = host
        self.received = ChangeContainer()
        self.sent_requests: list[SendChangesRequest] = []

    async def __aenter__(self) -> InMemoryTransport:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        return None

    @property
    def host(self) -> str:
        return self._host

    async def fetch_batch(self, context: SyncContext, batch_index_requested: int) -> SendChangesResponse:
        count = len(self._parts)
        if batch_index_requested >= count:
            raise TransportFailureError(
                f"no batch {batch_index_requested}; {count} available",
                batch_index=batch_index_requested,
                status_code=400,
            )
        batched = count > 1
        return SendChangesResponse(
            context=context,
            batch_index=batch_index_requested,
            batch_count=count if batched else 0,
            is_last_batch=batch_index_requested == count - 1,
            changes=self._parts[batch_index_requested].model_copy(deep=True),
            remote_client_timestamp=self._timestamp,
        )

    async def send_batch(self, context: SyncContext, request: SendChangesRequest) -> SendChangesAck:
        self.sent_requests.append(request)
        self.received.merge(request.changes)
        self._timestamp += 1
        return SendChangesAck(
            context=context,
            batch_index=request.batch_index,
            changes_applied=_applied_from(request.changes),
            remote_client_timestamp=self._timestamp,
        )


def _applied_from(changes: ChangeContainer) -> DatabaseChangesApplied:
    applied = DatabaseChangesApplied()
    for table in changes.tables:
        for row in table.rows:
            applied.merge(
                DatabaseChangesApplied(
                    tables=[
                        TableChangesApplied(
                            table_name=table.table_name,
                            schema_name=table.schema_name,
                            state=row.state,
                            applied=1,
                        )
                    ]
                )
            )
    return applied
