"""Change container contracts.

A :class:`ChangeContainer` holds the row-level changes of one batch (or of a
whole transfer once batches are merged), grouped by table.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class RowState(StrEnum):
    MODIFIED = "modified"
    DELETED = "deleted"


class SyncRow(BaseModel):
    state: RowState = RowState.MODIFIED
    values: dict[str, Any] = Field(default_factory=dict)


class ContainerTable(BaseModel):
    table_name: str
    schema_name: str | None = None
    rows: list[SyncRow] = Field(default_factory=list)

    @property
    def key(self) -> tuple[str | None, str]:
        return (self.schema_name, self.table_name)

    @property
    def full_name(self) -> str:
        if self.schema_name:
            return f"{self.schema_name}.{self.table_name}"
        return self.table_name


class ChangeContainer(BaseModel):
    """Ordered collection of tables, each with an ordered list of rows."""

    tables: list[ContainerTable] = Field(default_factory=list)

    def rows_count(self) -> int:
        return sum(len(table.rows) for table in self.tables)

    @property
    def has_rows(self) -> bool:
        return any(table.rows for table in self.tables)

    def get_table(self, table_name: str, schema_name: str | None = None) -> ContainerTable | None:
        for table in self.tables:
            if table.table_name == table_name and table.schema_name == schema_name:
                return table
        return None

    def merge(self, other: ChangeContainer) -> None:
        """Append *other*'s rows, table by table, keeping row order.

        Tables are matched on schema and name; tables not yet present are
        appended in the order *other* lists them.
        """
        by_key = {table.key: table for table in self.tables}
        for incoming in other.tables:
            existing = by_key.get(incoming.key)
            if existing is None:
                existing = ContainerTable(table_name=incoming.table_name, schema_name=incoming.schema_name)
                self.tables.append(existing)
                by_key[existing.key] = existing
            existing.rows.extend(row.model_copy(deep=True) for row in incoming.rows)
