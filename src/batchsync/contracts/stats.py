"""Transfer statistics contracts.

Two accumulators are kept per transfer: what the server selected to send
(:class:`DatabaseChangesSelected`) and what a peer applied
(:class:`DatabaseChangesApplied`). Both grow by :meth:`merge` only, and merging
is plain summation keyed by table, so the final totals do not depend on the
order batches are merged in.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from batchsync.contracts.changes import ChangeContainer, RowState


class TableChangesSelected(BaseModel):
    table_name: str
    schema_name: str | None = None
    upserts: int = Field(default=0, ge=0)
    deletes: int = Field(default=0, ge=0)

    @property
    def key(self) -> tuple[str | None, str]:
        return (self.schema_name, self.table_name)

    @property
    def total_changes(self) -> int:
        return self.upserts + self.deletes


class DatabaseChangesSelected(BaseModel):
    tables: list[TableChangesSelected] = Field(default_factory=list)

    @property
    def total_changes_selected(self) -> int:
        return sum(table.total_changes for table in self.tables)

    @classmethod
    def from_container(cls, container: ChangeContainer) -> DatabaseChangesSelected:
        """Count the rows of *container* per table and row state."""
        stats = cls()
        for table in container.tables:
            if not table.rows:
                continue
            deletes = sum(1 for row in table.rows if row.state == RowState.DELETED)
            stats.tables.append(
                TableChangesSelected(
                    table_name=table.table_name,
                    schema_name=table.schema_name,
                    upserts=len(table.rows) - deletes,
                    deletes=deletes,
                )
            )
        return stats

    def merge(self, other: DatabaseChangesSelected) -> None:
        by_key = {table.key: table for table in self.tables}
        for incoming in other.tables:
            existing = by_key.get(incoming.key)
            if existing is None:
                existing = TableChangesSelected(table_name=incoming.table_name, schema_name=incoming.schema_name)
                self.tables.append(existing)
                by_key[existing.key] = existing
            existing.upserts += incoming.upserts
            existing.deletes += incoming.deletes

    def snapshot(self) -> DatabaseChangesSelected:
        return self.model_copy(deep=True)


class TableChangesApplied(BaseModel):
    table_name: str
    schema_name: str | None = None
    state: RowState = RowState.MODIFIED
    applied: int = Field(default=0, ge=0)
    resolved_conflicts: int = Field(default=0, ge=0)
    failed: int = Field(default=0, ge=0)

    @property
    def key(self) -> tuple[str | None, str, RowState]:
        return (self.schema_name, self.table_name, self.state)


class DatabaseChangesApplied(BaseModel):
    tables: list[TableChangesApplied] = Field(default_factory=list)

    @property
    def total_changes_applied(self) -> int:
        return sum(table.applied for table in self.tables)

    @property
    def total_resolved_conflicts(self) -> int:
        return sum(table.resolved_conflicts for table in self.tables)

    @property
    def total_changes_failed(self) -> int:
        return sum(table.failed for table in self.tables)

    def merge(self, other: DatabaseChangesApplied) -> None:
        by_key = {table.key: table for table in self.tables}
        for incoming in other.tables:
            existing = by_key.get(incoming.key)
            if existing is None:
                existing = TableChangesApplied(
                    table_name=incoming.table_name,
                    schema_name=incoming.schema_name,
                    state=incoming.state,
                )
                self.tables.append(existing)
                by_key[existing.key] = existing
            existing.applied += incoming.applied
            existing.resolved_conflicts += incoming.resolved_conflicts
            existing.failed += incoming.failed

    def snapshot(self) -> DatabaseChangesApplied:
        return self.model_copy(deep=True)
