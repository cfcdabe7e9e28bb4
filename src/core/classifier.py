"""URL extraction and classification (core domain)."""

from __future__ import annotations

import enum
import re
from typing import Iterable, Iterator, List

from core.domains import hostname_of, strip_www
from core.registry import DomainRegistry

# http(s) only: scheme://non-whitespace, anything up to the next whitespace is
# taken as part of the URL.
URL_PATTERN = re.compile(r"https?://\S+")


class UrlKind(enum.Enum):
    SOCIAL_MIRROR = "social_mirror"
    PAYWALL = "paywall"
    PLAIN = "plain"


def iter_url_matches(text: str) -> Iterator[re.Match]:
    return URL_PATTERN.finditer(text or "")


def extract_urls(text: str) -> List[str]:
    """Return URL substrings in order of appearance, duplicates included."""

    return [match.group(0) for match in iter_url_matches(text)]


class UrlClassifier:
    """Decide how a single URL should be rewritten."""

    def __init__(self, registry: DomainRegistry, social_domains: Iterable[str]) -> None:
        self._registry = registry
        self._social_domains = frozenset(social_domains)

    def classify(self, url: str) -> UrlKind:
        hostname = hostname_of(url)
        if not hostname:
            return UrlKind.PLAIN

        host = strip_www(hostname)
        # Social hosts win even if the same host is registered as a paywall.
        if host in self._social_domains:
            return UrlKind.SOCIAL_MIRROR
        if self._registry.contains(host):
            return UrlKind.PAYWALL
        return UrlKind.PLAIN
