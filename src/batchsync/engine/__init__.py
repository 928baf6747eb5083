"""Engine module exports."""

from batchsync.engine.batching import BatchingPolicy, build_envelopes, split_by_rows
from batchsync.engine.orchestrator import BatchTransferOrchestrator

__all__ = ["BatchTransferOrchestrator", "BatchingPolicy", "build_envelopes", "split_by_rows"]
