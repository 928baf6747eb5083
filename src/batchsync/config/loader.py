"""Config loading and validation."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from batchsync.contracts.config import TransferConfig
from batchsync.contracts.exceptions import ConfigError


def load_config(path: str | Path) -> TransferConfig:
    config_path = Path(path).expanduser().resolve()

    try:
        raw_payload: Any = json.loads(config_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"failed reading config file: {config_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in config file: {config_path}") from exc

    if not isinstance(raw_payload, dict):
        raise ConfigError(f"config file must contain a JSON object: {config_path}")

    try:
        return TransferConfig.model_validate(raw_payload)
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc
