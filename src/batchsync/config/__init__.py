"""Configuration loading."""

from batchsync.config.loader import load_config

__all__ = ["load_config"]
