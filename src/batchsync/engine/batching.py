"""Upload batch sizing and envelope numbering."""

from __future__ import annotations

from collections.abc import Callable

from batchsync.contracts.changes import ChangeContainer, ContainerTable
from batchsync.contracts.context import SyncContext
from batchsync.contracts.messages import SendChangesRequest

BatchingPolicy = Callable[[ChangeContainer], list[ChangeContainer]]


def split_by_rows(container: ChangeContainer, max_rows_per_batch: int) -> list[ChangeContainer]:
    """Split *container* into parts holding at most *max_rows_per_batch* rows.

    Table and row order are preserved; a table may span several parts.
    ``max_rows_per_batch <= 0`` disables splitting. Always returns at least one
    part, possibly empty.
    """
    if max_rows_per_batch <= 0 or container.rows_count() <= max_rows_per_batch:
        return [container.model_copy(deep=True)]

    parts: list[ChangeContainer] = []
    current = ChangeContainer()
    room = max_rows_per_batch
    for table in container.tables:
        rows = table.rows
        start = 0
        while start < len(rows):
            if room == 0:
                parts.append(current)
                current = ChangeContainer()
                room = max_rows_per_batch
            chunk = rows[start : start + room]
            current.tables.append(
                ContainerTable(
                    table_name=table.table_name,
                    schema_name=table.schema_name,
                    rows=[row.model_copy(deep=True) for row in chunk],
                )
            )
            start += len(chunk)
            room -= len(chunk)
    if current.tables:
        parts.append(current)
    return parts


def build_envelopes(context: SyncContext, parts: list[ChangeContainer]) -> list[SendChangesRequest]:
    """Number *parts* as upload envelopes.

    A single part becomes the unbatched envelope (index 0, count 0); ``n`` parts
    get indices ``0..n-1`` with the last one flagged.
    """
    if len(parts) <= 1:
        changes = parts[0] if parts else ChangeContainer()
        return [SendChangesRequest(context=context, batch_index=0, batch_count=0, is_last_batch=True, changes=changes)]

    count = len(parts)
    return [
        SendChangesRequest(
            context=context,
            batch_index=index,
            batch_count=count,
            is_last_batch=index == count - 1,
            changes=part,
        )
        for index, part in enumerate(parts)
    ]
