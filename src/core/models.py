"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any integration-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class InboundMessage:
    """Minimal inbound chat message used by the core processing pipeline."""

    message_id: Optional[str]
    text: str
    author: Optional[str]
    room_id: int


@dataclass
class UserOverride:
    """User changes layered on top of the built-in domain set.

    `added` holds domains introduced by users, `removed` holds built-in
    domains users opted out of. A domain never appears in both.
    """

    added: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)

    def copy(self) -> "UserOverride":
        return UserOverride(added=list(self.added), removed=list(self.removed))


@dataclass(frozen=True)
class RegistryResult:
    """Outcome of a registry mutation, with user-facing text."""

    success: bool
    message: str
