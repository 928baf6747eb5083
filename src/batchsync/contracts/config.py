"""Configuration contracts."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

ObserverErrorPolicy = Literal["log", "raise"]


class TransferConfig(BaseModel):
    host: str
    max_rows_per_batch: int = Field(default=0, ge=0)
    timeout: float = Field(default=30.0, gt=0)
    max_retries: int = Field(default=3, ge=0, le=10)
    headers: dict[str, str] = Field(default_factory=dict)
    idempotent_uploads: bool = False
    observer_timeout: float | None = Field(default=None, gt=0)
    observer_errors: ObserverErrorPolicy = "log"

    model_config = {"frozen": True}

    @field_validator("host")
    @classmethod
    def validate_host(cls, value: str) -> str:
        host = value.strip().rstrip("/")
        if not host.startswith(("http://", "https://")):
            raise ValueError("host must be an http:// or https:// URL")
        return host
