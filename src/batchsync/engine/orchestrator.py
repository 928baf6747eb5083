"""Batched change transfer between a sync client and its server."""

from __future__ import annotations

import logging

from batchsync.contracts.changes import ChangeContainer
from batchsync.contracts.config import TransferConfig
from batchsync.contracts.context import SyncContext
from batchsync.contracts.exceptions import (
    BatchFetchError,
    BatchSendError,
    ProtocolViolationError,
    TransportFailureError,
)
from batchsync.contracts.messages import (
    DownloadResult,
    SendChangesAck,
    SendChangesRequest,
    SendChangesResponse,
    UploadConfirmation,
)
from batchsync.contracts.stats import DatabaseChangesApplied, DatabaseChangesSelected
from batchsync.contracts.transport import Transport
from batchsync.engine.batching import BatchingPolicy, build_envelopes, split_by_rows
from batchsync.events.args import DownloadRequestEvent, DownloadResponseEvent, UploadRequestEvent
from batchsync.events.ids import EventId
from batchsync.events.interceptors import Handler, Interceptors, Unsubscribe

_LOG = logging.getLogger(__name__)


class BatchTransferOrchestrator:
    """Drives download and upload transfers as ordered sequences of batches.

    One batch is in flight at a time. Each call builds its own container and
    statistics, so one orchestrator can serve concurrent transfers of
    different sessions.
    """

    def __init__(
        self,
        transport: Transport,
        *,
        interceptors: Interceptors | None = None,
        config: TransferConfig | None = None,
        batching_policy: BatchingPolicy | None = None,
    ) -> None:
        self._transport = transport
        self._config = config
        self._batching_policy = batching_policy
        if interceptors is None:
            interceptors = Interceptors(
                observer_timeout=config.observer_timeout if config else None,
                observer_errors=config.observer_errors if config else "log",
            )
        self.interceptors = interceptors

    @classmethod
    def from_config(
        cls, config: TransferConfig, *, batching_policy: BatchingPolicy | None = None
    ) -> BatchTransferOrchestrator:
        """Build an orchestrator talking HTTP to ``config.host``.

        The returned orchestrator's transport must be entered before use::

            orchestrator = BatchTransferOrchestrator.from_config(config)
            async with orchestrator.transport:
                result = await orchestrator.download_changes(context)
        """
        from batchsync.transport.factory import create_transport

        transport = create_transport(
            "http",
            base_url=config.host,
            timeout=config.timeout,
            max_retries=config.max_retries,
            headers=config.headers,
            idempotent_uploads=config.idempotent_uploads,
        )
        return cls(transport, config=config, batching_policy=batching_policy)

    @property
    def transport(self) -> Transport:
        return self._transport

    # ------------------------------------------------------------------
    # Observer registration
    # ------------------------------------------------------------------

    def on_download_request(self, handler: Handler) -> Unsubscribe:
        return self.interceptors.register(EventId.HTTP_GETTING_CHANGES_REQUEST, handler)

    def on_download_response(self, handler: Handler) -> Unsubscribe:
        return self.interceptors.register(EventId.HTTP_GETTING_CHANGES_RESPONSE, handler)

    def on_upload_request(self, handler: Handler) -> Unsubscribe:
        return self.interceptors.register(EventId.HTTP_SENDING_CHANGES_REQUEST, handler)

    # ------------------------------------------------------------------
    # Download
    # ------------------------------------------------------------------

    async def download_changes(self, context: SyncContext, *, host: str | None = None) -> DownloadResult:
        host = host or self._transport.host
        changes = ChangeContainer()
        selected = DatabaseChangesSelected()
        applied = DatabaseChangesApplied()
        remote_timestamp = 0

        batch_index = 0
        last_received = -1
        batch_count = 0
        _LOG.info("Downloading changes from %s (session %s)", host, context.session_id)

        while True:
            await self.interceptors.dispatch(
                DownloadRequestEvent(
                    context=context,
                    host=host,
                    batch_index_requested=batch_index,
                    last_batch_index_received=last_received,
                    batch_count=batch_count,
                )
            )

            try:
                response = await self._transport.fetch_batch(context, batch_index)
            except TransportFailureError as exc:
                _LOG.debug("Fetching batch %d from %s failed: %s", batch_index, host, exc)
                raise BatchFetchError(
                    f"failed fetching batch {batch_index} from {host}: {exc}",
                    batch_index=batch_index,
                    status_code=exc.status_code,
                ) from exc

            self._check_response(response, batch_index, batch_count if last_received >= 0 else None)
            batch_count = response.batch_count

            changes.merge(response.changes)
            selected.merge(DatabaseChangesSelected.from_container(response.changes))
            if response.client_changes_applied is not None:
                applied.merge(response.client_changes_applied)
            remote_timestamp = response.remote_client_timestamp
            _LOG.debug(
                "Received batch %d/%d from %s with %d rows",
                response.batch_index + 1,
                max(batch_count, 1),
                host,
                response.changes.rows_count(),
            )

            await self.interceptors.dispatch(
                DownloadResponseEvent(
                    context=context,
                    host=host,
                    batch_index=response.batch_index,
                    batch_count=response.batch_count,
                    is_last_batch=response.is_last_batch,
                    changes=response.changes,
                    server_changes_selected=selected.snapshot(),
                    client_changes_applied=(
                        response.client_changes_applied.model_copy(deep=True)
                        if response.client_changes_applied is not None
                        else None
                    ),
                    remote_client_timestamp=response.remote_client_timestamp,
                )
            )

            last_received = response.batch_index
            if response.is_last_batch or batch_count <= 1:
                break
            batch_index += 1

        _LOG.info(
            "Downloaded %d rows in %d batch(es) from %s",
            selected.total_changes_selected,
            last_received + 1,
            host,
        )
        return DownloadResult(
            changes=changes,
            server_changes_selected=selected,
            client_changes_applied=applied,
            remote_client_timestamp=remote_timestamp,
            batches_received=last_received + 1,
        )

    @staticmethod
    def _check_response(response: SendChangesResponse, batch_index: int, known_count: int | None) -> None:
        if response.batch_index != batch_index:
            raise ProtocolViolationError(
                f"requested batch {batch_index} but received batch {response.batch_index}",
                expected=batch_index,
                received=response.batch_index,
            )
        if known_count is not None and response.batch_count != known_count:
            raise ProtocolViolationError(
                f"batch count changed from {known_count} to {response.batch_count} mid-transfer",
                expected=known_count,
                received=response.batch_count,
            )
        if response.batch_count > 0:
            is_final_index = response.batch_index == response.batch_count - 1
            if response.is_last_batch != is_final_index:
                raise ProtocolViolationError(
                    f"batch {response.batch_index} of {response.batch_count} has is_last_batch={response.is_last_batch}",
                    expected=is_final_index,
                    received=response.is_last_batch,
                )

    # ------------------------------------------------------------------
    # Upload
    # ------------------------------------------------------------------

    async def upload_changes(
        self,
        context: SyncContext,
        changes: ChangeContainer,
        *,
        host: str | None = None,
        max_rows_per_batch: int | None = None,
    ) -> UploadConfirmation:
        host = host or self._transport.host
        envelopes = build_envelopes(context, self._split(changes, max_rows_per_batch))
        total_rows = changes.rows_count()
        applied = DatabaseChangesApplied()
        remote_timestamp: int | None = None
        rows_sent = 0
        _LOG.info("Uploading %d rows in %d batch(es) to %s", total_rows, len(envelopes), host)

        for envelope in envelopes:
            rows_count = envelope.changes.rows_count()
            await self.interceptors.dispatch(
                UploadRequestEvent(
                    context=context,
                    host=host,
                    request=envelope.model_copy(deep=True),
                    rows_count=rows_count,
                    total_rows_count=total_rows,
                )
            )

            try:
                ack = await self._transport.send_batch(context, envelope)
            except TransportFailureError as exc:
                _LOG.debug("Sending batch %d to %s failed: %s", envelope.batch_index, host, exc)
                raise BatchSendError(
                    f"failed sending batch {envelope.batch_index} to {host}: {exc}",
                    batch_index=envelope.batch_index,
                    status_code=exc.status_code,
                ) from exc

            self._check_ack(ack, envelope)
            applied.merge(ack.changes_applied)
            if ack.remote_client_timestamp is not None:
                remote_timestamp = ack.remote_client_timestamp
            rows_sent += rows_count

        return UploadConfirmation(
            batches_sent=len(envelopes),
            rows_sent=rows_sent,
            changes_applied=applied,
            remote_client_timestamp=remote_timestamp,
        )

    def _split(self, changes: ChangeContainer, max_rows_per_batch: int | None) -> list[ChangeContainer]:
        if self._batching_policy is not None and max_rows_per_batch is None:
            return self._batching_policy(changes)
        if max_rows_per_batch is None:
            max_rows_per_batch = self._config.max_rows_per_batch if self._config else 0
        return split_by_rows(changes, max_rows_per_batch)

    @staticmethod
    def _check_ack(ack: SendChangesAck, envelope: SendChangesRequest) -> None:
        if ack.batch_index != envelope.batch_index:
            raise ProtocolViolationError(
                f"sent batch {envelope.batch_index} but server acknowledged batch {ack.batch_index}",
                expected=envelope.batch_index,
                received=ack.batch_index,
            )
