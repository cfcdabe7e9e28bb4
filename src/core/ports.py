"""Ports (interfaces) used by the core pipeline.

Ports define the minimal contracts for persistence and chat delivery adapters
so that the core can be reused with different backends.
"""

from __future__ import annotations

from typing import Protocol

from core.models import UserOverride


class OverrideStorePort(Protocol):
    """Persistence operations required by the domain registry.

    `save` must either replace the stored override completely or raise
    `OSError` leaving the previous content in place.
    """

    def load(self) -> UserOverride:
        ...

    def save(self, override: UserOverride) -> None:
        ...


class ChatPort(Protocol):
    """Outbound chat operations required by the core pipeline."""

    async def send_direct(self, username: str, text: str) -> None:
        ...

    async def send_to_room(self, text: str, room_id: int) -> None:
        ...
