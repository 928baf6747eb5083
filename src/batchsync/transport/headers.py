"""HTTP header names and step values of the batch protocol."""

STEP_HEADER = "batchsync-step"
SESSION_HEADER = "batchsync-session-id"
SCOPE_HEADER = "batchsync-scope-name"
BATCH_INDEX_HEADER = "batchsync-batch-index"
IDEMPOTENT_HEADER = "batchsync-idempotent"

STEP_GET_MORE_CHANGES = "get-more-changes"
STEP_SEND_CHANGES = "send-changes"
