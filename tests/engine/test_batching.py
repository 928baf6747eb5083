from __future__ import annotations

import pytest

from batchsync.contracts.changes import ChangeContainer
from batchsync.contracts.context import SyncContext
from batchsync.engine.batching import build_envelopes, split_by_rows
from tests.fakes.changes import make_container


def _layout(parts: list[ChangeContainer]) -> list[list[tuple[str, int]]]:
    return [[(table.table_name, len(table.rows)) for table in part.tables] for part in parts]


@pytest.mark.parametrize("max_rows", [0, -1, 25, 100])
def test_split_returns_single_part_when_not_needed(max_rows: int) -> None:
    container = make_container(("Customer", 20), ("Product", 5))

    parts = split_by_rows(container, max_rows)

    assert len(parts) == 1
    assert parts[0] == container
    assert parts[0] is not container


def test_split_cuts_tables_across_parts() -> None:
    container = make_container(("Customer", 7), ("Product", 5))

    parts = split_by_rows(container, 5)

    assert _layout(parts) == [[("Customer", 5)], [("Customer", 2), ("Product", 3)], [("Product", 2)]]
    assert sum(part.rows_count() for part in parts) == 12


def test_split_preserves_row_order() -> None:
    container = make_container(("Customer", 6))

    parts = split_by_rows(container, 4)

    ids = [row.values["id"] for part in parts for table in part.tables for row in table.rows]
    assert ids == list(range(6))


def test_split_of_empty_container_yields_one_empty_part() -> None:
    parts = split_by_rows(ChangeContainer(), 10)

    assert len(parts) == 1
    assert parts[0].rows_count() == 0


def test_single_part_becomes_unbatched_envelope(sync_context: SyncContext) -> None:
    (envelope,) = build_envelopes(sync_context, [make_container(("Customer", 3))])

    assert (envelope.batch_index, envelope.batch_count, envelope.is_last_batch) == (0, 0, True)
    assert envelope.changes.rows_count() == 3


def test_no_parts_still_produce_one_envelope(sync_context: SyncContext) -> None:
    (envelope,) = build_envelopes(sync_context, [])

    assert envelope.batch_count == 0
    assert envelope.changes.rows_count() == 0


def test_multiple_parts_are_numbered(sync_context: SyncContext) -> None:
    parts = split_by_rows(make_container(("Customer", 25)), 10)

    envelopes = build_envelopes(sync_context, parts)

    assert [(e.batch_index, e.batch_count, e.is_last_batch) for e in envelopes] == [
        (0, 3, False),
        (1, 3, False),
        (2, 3, True),
    ]
    assert all(e.context == sync_context for e in envelopes)
