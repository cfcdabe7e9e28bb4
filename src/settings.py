"""Static configuration for paywallbot.

All user-editable settings (rooms, storage, matching, rewrite hosts, dedup,
logging) live in a single JSON file for quick edits without touching Python.
Secrets stay in the environment (.env).
"""

import json
import os

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

CONFIG_PATH = os.environ.get("PAYWALLBOT_CONFIG", os.path.join(PROJECT_ROOT, "config.json"))


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


def _resolve_path(path: str) -> str:
    if os.path.isabs(path):
        return path
    return os.path.join(PROJECT_ROOT, path)


def _normalize_rooms(raw_rooms: list) -> list:
    """Numeric ids become ints so Telethon resolves them as peers."""

    rooms = []
    for room in raw_rooms:
        text = str(room).strip()
        if not text:
            continue
        try:
            rooms.append(int(text))
        except ValueError:
            rooms.append(text)
    return rooms


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# Chats to watch. Empty means every chat the account receives messages from.
ROOMS = _normalize_rooms(_CONFIG.get("rooms", []))

# Persisted user additions/removals to the built-in paywall list.
_storage = _CONFIG.get("storage", {})
USER_SITES_PATH = _resolve_path(_storage.get("user_sites_path", "data/user-sites.json"))

# "substring" keeps the historical hostname-contains matching; "suffix" only
# matches the domain itself and its subdomains.
_matching = _CONFIG.get("matching", {})
MATCH_MODE = _matching.get("mode", "substring")

_rewrite = _CONFIG.get("rewrite", {})
SOCIAL_MIRROR_HOST = _rewrite.get("social_mirror_host", "xcancel.com")
ARCHIVE_PREFIX = _rewrite.get("archive_prefix", "https://archive.is/newest/")
SOCIAL_DOMAINS = tuple(_rewrite.get("social_domains", ["x.com", "twitter.com"]))

# Number of processed message ids remembered to drop duplicate deliveries.
_dedup = _CONFIG.get("dedup", {})
DEDUP_CAPACITY = int(_dedup.get("capacity", 1000))

# Connection settings passed to the Telethon client.
_connection = _CONFIG.get("connection", {})
CONNECTION_TIMEOUT = int(_connection.get("timeout", 40))
CONNECTION_RETRIES = int(_connection.get("retries", 5))

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
