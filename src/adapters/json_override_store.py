"""JSON file override store.

Implements the core OverrideStorePort with a small pretty-printed JSON file:

    {"added": ["example.com"], "removed": ["nytimes.com"]}

Writes go to a temp file in the same directory and are swapped in with
os.replace, so readers never see a half-written file.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from typing import Any, List

from core.domains import normalize_domain
from core.models import UserOverride

LOGGER = logging.getLogger(__name__)


def _domain_list(raw: Any) -> List[str]:
    if not isinstance(raw, list):
        return []
    domains = [normalize_domain(item) for item in raw if isinstance(item, str)]
    return [domain for domain in domains if domain]


class JsonOverrideStore:
    """File-backed store that satisfies the OverrideStorePort contract."""

    def __init__(self, path: str) -> None:
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    def _ensure_directory(self) -> str:
        directory = os.path.dirname(os.path.abspath(self._path))
        os.makedirs(directory, exist_ok=True)
        return directory

    def load(self) -> UserOverride:
        """Read the override file; missing or broken files mean no overrides."""

        try:
            self._ensure_directory()
        except OSError:
            LOGGER.exception("Could not create directory for %s", self._path)

        if not os.path.exists(self._path):
            return UserOverride()

        try:
            with open(self._path, "r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, ValueError) as exc:
            LOGGER.error("Error loading %s, using defaults: %s", self._path, exc)
            return UserOverride()

        if not isinstance(data, dict):
            LOGGER.error("Unexpected content in %s, using defaults", self._path)
            return UserOverride()

        return UserOverride(
            added=_domain_list(data.get("added")),
            removed=_domain_list(data.get("removed")),
        )

    def save(self, override: UserOverride) -> None:
        """Replace the override file; raises OSError and keeps the old file on failure."""

        directory = self._ensure_directory()
        payload = {"added": list(override.added), "removed": list(override.removed)}

        fd, tmp_path = tempfile.mkstemp(prefix=".user-sites-", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(payload, handle, indent=2)
                handle.write("\n")
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, self._path)
        except OSError:
            try:
                os.unlink(tmp_path)
            except FileNotFoundError:
                pass
            raise
