"""Event identifiers for the HTTP batch transfer protocol.

Ids live in the 20000 range, which is reserved for this protocol so they do not
collide with event ids of other sync subsystems.
"""

from __future__ import annotations

from enum import IntEnum


class EventId(IntEnum):
    HTTP_SENDING_CHANGES_REQUEST = 20000
    HTTP_GETTING_CHANGES_REQUEST = 20100
    HTTP_GETTING_CHANGES_RESPONSE = 20150

    @property
    def label(self) -> str:
        """CamelCase name, e.g. ``HttpGettingChangesRequest``."""
        return "".join(part.capitalize() for part in self.name.split("_"))
