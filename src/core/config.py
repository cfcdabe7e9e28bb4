"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

MATCH_SUBSTRING = "substring"
MATCH_SUFFIX = "suffix"
MATCH_MODES = (MATCH_SUBSTRING, MATCH_SUFFIX)


@dataclass(frozen=True)
class DedupConfig:
    """Deduplication settings for the core pipeline."""

    capacity: int = 1000


@dataclass(frozen=True)
class RewriteConfig:
    """Hosts used when rewriting social and paywalled links."""

    social_mirror_host: str = "xcancel.com"
    archive_prefix: str = "https://archive.is/newest/"
    social_domains: Tuple[str, ...] = ("x.com", "twitter.com")
