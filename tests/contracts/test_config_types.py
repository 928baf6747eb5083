from __future__ import annotations

import pytest
from pydantic import ValidationError

from batchsync.contracts.config import TransferConfig


def test_defaults() -> None:
    config = TransferConfig(host="https://sync.example.com/api/")

    assert config.host == "https://sync.example.com/api"
    assert config.max_rows_per_batch == 0
    assert config.timeout == 30.0
    assert config.max_retries == 3
    assert config.idempotent_uploads is False
    assert config.headers == {}
    assert config.observer_timeout is None
    assert config.observer_errors == "log"


@pytest.mark.parametrize("host", ["sync.example.com", "ftp://sync.example.com", ""])
def test_host_must_be_http_url(host: str) -> None:
    with pytest.raises(ValidationError):
        TransferConfig(host=host)


@pytest.mark.parametrize(
    "overrides",
    [
        {"max_rows_per_batch": -1},
        {"timeout": 0},
        {"max_retries": 11},
        {"observer_timeout": 0},
        {"observer_errors": "ignore"},
    ],
)
def test_rejects_invalid_values(overrides: dict[str, object]) -> None:
    with pytest.raises(ValidationError):
        TransferConfig(host="https://sync.example.com", **overrides)


def test_config_is_frozen() -> None:
    config = TransferConfig(host="https://sync.example.com")

    with pytest.raises(ValidationError):
        config.timeout = 5  # type: ignore[misc]
