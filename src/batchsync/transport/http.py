"""HTTP transport for the batch protocol.

Every exchange is a JSON ``POST`` to the sync endpoint. The step is named in
the ``batchsync-step`` header:

``get-more-changes``
    body :class:`GetMoreChangesRequest`, reply :class:`SendChangesResponse`
``send-changes``
    body :class:`SendChangesRequest`, reply :class:`SendChangesAck`

Uploads are only replayed on ambiguous failures when the server applies
batches idempotently (``idempotent_uploads=True``).
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from batchsync.contracts.context import SyncContext
from batchsync.contracts.exceptions import ProtocolViolationError, TransportFailureError
from batchsync.contracts.messages import (
    GetMoreChangesRequest,
    SendChangesAck,
    SendChangesRequest,
    SendChangesResponse,
)
from batchsync.contracts.transport import Transport
from batchsync.transport.headers import (
    BATCH_INDEX_HEADER,
    IDEMPOTENT_HEADER,
    SCOPE_HEADER,
    SESSION_HEADER,
    STEP_GET_MORE_CHANGES,
    STEP_HEADER,
    STEP_SEND_CHANGES,
)
from batchsync.transport.retrying import RetryingTransport

_LOG = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class HttpTransport(Transport):
    def __init__(
        self,
        *,
        base_url: str,
        timeout: float = 30.0,
        max_retries: int = 3,
        headers: dict[str, str] | None = None,
        idempotent_uploads: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._max_retries = max_retries
        self._headers = dict(headers or {})
        self._idempotent_uploads = idempotent_uploads
        self._inner_transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> HttpTransport:
        # No base_url: httpx would append "/" to it.
        self._client = httpx.AsyncClient(
            headers=self._headers,
            transport=RetryingTransport(transport=self._inner_transport, max_retries=self._max_retries),
            timeout=httpx.Timeout(self._timeout),
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def host(self) -> str:
        return self._base_url

    async def fetch_batch(self, context: SyncContext, batch_index_requested: int) -> SendChangesResponse:
        body = GetMoreChangesRequest(context=context, batch_index_requested=batch_index_requested)
        payload = await self._post(STEP_GET_MORE_CHANGES, context, body, batch_index=batch_index_requested)
        return self._parse(SendChangesResponse, payload, STEP_GET_MORE_CHANGES)

    async def send_batch(self, context: SyncContext, request: SendChangesRequest) -> SendChangesAck:
        payload = await self._post(STEP_SEND_CHANGES, context, request, batch_index=request.batch_index)
        return self._parse(SendChangesAck, payload, STEP_SEND_CHANGES)

    async def _post(self, step: str, context: SyncContext, body: BaseModel, *, batch_index: int) -> Any:
        if self._client is None:
            raise TransportFailureError("Transport is not open. Use 'async with'.", batch_index=batch_index)

        headers = {
            STEP_HEADER: step,
            SESSION_HEADER: str(context.session_id),
            SCOPE_HEADER: context.scope_name,
            BATCH_INDEX_HEADER: str(batch_index),
        }
        if step == STEP_SEND_CHANGES and self._idempotent_uploads:
            headers[IDEMPOTENT_HEADER] = "true"
        _LOG.debug("POST %s step=%s batch=%d", self._base_url, step, batch_index)
        try:
            response = await self._client.post(self._base_url, json=body.model_dump(mode="json"), headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TransportFailureError(
                f"{step} failed with HTTP {exc.response.status_code}",
                batch_index=batch_index,
                status_code=exc.response.status_code,
            ) from exc
        except httpx.TransportError as exc:
            raise TransportFailureError(f"{step} failed: {exc!r}", batch_index=batch_index) from exc

        try:
            return response.json()
        except ValueError as exc:
            raise ProtocolViolationError(f"{step} reply is not valid JSON") from exc

    @staticmethod
    def _parse(model: type[M], payload: Any, step: str) -> M:
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise ProtocolViolationError(f"{step} reply is not a valid {model.__name__}: {exc}") from exc
