"""Factory for creating transport instances.

Decouples transport selection from transport implementation, so callers can
pick a transport by name without importing concrete classes.
"""

from __future__ import annotations

from typing import Any

from batchsync.contracts.transport import Transport
from batchsync.transport.http import HttpTransport
from batchsync.transport.memory import InMemoryTransport

# Registry mapping transport names to their classes
_REGISTRY: dict[str, type[Transport]] = {
    "http": HttpTransport,
    "memory": InMemoryTransport,
}


def register(name: str, transport_cls: type[Transport]) -> None:
    """Register a transport class by name.

    Args:
        name: Transport name (e.g. "http").
        transport_cls: Class implementing the Transport ABC.
    """
    _REGISTRY[name] = transport_cls


def create_transport(name: str, **kwargs: Any) -> Transport:
    """Create a transport instance by name.

    The returned transport is an async context manager::

        async with create_transport("http", base_url="https://sync.example.com/api") as transport:
            response = await transport.fetch_batch(context, 0)

    Raises:
        ValueError: If the transport name is not registered.
    """
    if name not in _REGISTRY:
        available = ", ".join(sorted(_REGISTRY.keys())) or "(none registered)"
        raise ValueError(f"Unknown transport: {name!r}. Available: {available}")
    return _REGISTRY[name](**kwargs)
