"""Paywall domain registry (core domain).

The registry merges the built-in domain list with persisted user overrides
into the effective set used for matching. Every mutation is persisted before
it becomes visible; a failed write restores the exact prior in-memory state.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable, List

from core.config import MATCH_MODES, MATCH_SUBSTRING, MATCH_SUFFIX
from core.domains import strip_www
from core.models import RegistryResult, UserOverride
from core.ports import OverrideStorePort

LOGGER = logging.getLogger(__name__)


class DomainRegistry:
    """Effective paywall domain set backed by an override store."""

    def __init__(
        self,
        builtin: Iterable[str],
        store: OverrideStorePort,
        match_mode: str = MATCH_SUBSTRING,
    ) -> None:
        if match_mode not in MATCH_MODES:
            raise ValueError(f"Unsupported match mode: {match_mode}")
        self._builtin = tuple(builtin)
        self._builtin_set = frozenset(self._builtin)
        self._store = store
        self._match_mode = match_mode
        # Mutations read, persist, then publish; the lock keeps that sequence
        # single-writer even if handlers ever run on worker threads.
        self._lock = threading.Lock()
        self._override = self._sanitize(store.load())
        self._effective: frozenset[str] = frozenset()
        self._rebuild()

        LOGGER.info(
            "Loaded %s paywall domains (%s built-in, %s user-added, %s user-removed)",
            len(self._effective),
            len(self._builtin_set),
            len(self._override.added),
            len(self._override.removed),
        )

    def _sanitize(self, override: UserOverride) -> UserOverride:
        # Hand-edited files (or built-ins dropped in a later release) can break
        # the added/removed invariants. `removed` only keeps built-ins, a domain
        # listed in both stays out, and built-ins never live in `added`.
        listed_removed = set(override.removed)
        removed = [domain for domain in dict.fromkeys(override.removed) if domain in self._builtin_set]
        added = [
            domain
            for domain in dict.fromkeys(override.added)
            if domain not in self._builtin_set and domain not in listed_removed
        ]
        return UserOverride(added=added, removed=removed)

    def _rebuild(self) -> None:
        combined = set(self._builtin_set)
        combined.update(self._override.added)
        combined.difference_update(self._override.removed)
        self._effective = frozenset(combined)

    def _commit(self, previous: UserOverride) -> bool:
        """Persist the current override or restore `previous` on failure."""

        try:
            self._store.save(self._override)
        except OSError:
            LOGGER.exception("Failed to persist user sites")
            self._override = previous
            return False
        self._rebuild()
        return True

    @property
    def override(self) -> UserOverride:
        return self._override.copy()

    def add(self, domain: str) -> RegistryResult:
        """Add a normalized domain, or re-enable a removed built-in one."""

        with self._lock:
            previous = self._override.copy()
            if domain in self._override.removed:
                self._override.removed.remove(domain)
                if not self._commit(previous):
                    return RegistryResult(False, f"Failed to save changes for {domain}.")
                LOGGER.info("Re-enabled built-in domain %s", domain)
                return RegistryResult(True, f"Re-enabled built-in domain {domain}.")

            if domain in self._effective:
                return RegistryResult(False, f"Domain {domain} is already in the paywall list.")

            self._override.added.append(domain)
            if not self._commit(previous):
                return RegistryResult(False, f"Failed to save {domain} to the paywall list.")
            LOGGER.info("Added domain %s", domain)
            return RegistryResult(True, f"Added {domain} to the paywall list.")

    def remove(self, domain: str) -> RegistryResult:
        """Remove a normalized domain from the effective set."""

        with self._lock:
            if domain not in self._effective:
                return RegistryResult(False, f"Domain {domain} is not in the paywall list.")

            previous = self._override.copy()
            if domain in self._override.added:
                self._override.added.remove(domain)
            # Built-ins are recorded as removed so they stay excluded after restart.
            if domain in self._builtin_set and domain not in self._override.removed:
                self._override.removed.append(domain)
            if not self._commit(previous):
                return RegistryResult(False, f"Failed to remove {domain} from the paywall list.")
            LOGGER.info("Removed domain %s", domain)
            return RegistryResult(True, f"Removed {domain} from the paywall list.")

    def list(self) -> List[str]:
        """Return a sorted snapshot of the effective set."""

        return sorted(self._effective)

    def __len__(self) -> int:
        return len(self._effective)

    def contains(self, hostname: str) -> bool:
        """Return True if the hostname matches any effective domain."""

        host = strip_www(hostname.lower())
        effective = self._effective
        if self._match_mode == MATCH_SUFFIX:
            return any(host == domain or host.endswith("." + domain) for domain in effective)
        return any(domain in host for domain in effective)
