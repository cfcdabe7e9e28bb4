"""Message rewriting for social and paywalled links (core domain)."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List

from core.classifier import UrlClassifier, UrlKind, iter_url_matches
from core.config import RewriteConfig

LOGGER = logging.getLogger(__name__)

_SCHEME_AND_HOST = re.compile(r"^https?://(?:www\.)?[^/?#\s]+", re.IGNORECASE)


@dataclass(frozen=True)
class RewriteResult:
    text: str
    changed: bool


class MessageRewriter:
    """Apply URL classifications to a message body.

    Social links are swapped to the mirror host, paywalled links are wrapped
    in an archive link of the original URL, everything else is left alone.
    Replacements are made on the exact spans where each URL occurs, so a link
    repeated in the text is handled once per occurrence and an inserted
    archive link is never rewritten a second time.
    """

    def __init__(self, classifier: UrlClassifier, config: RewriteConfig) -> None:
        self._classifier = classifier
        self._config = config

    def mirror_url(self, url: str) -> str:
        """Return the social mirror form of a URL (same path and query)."""

        return _SCHEME_AND_HOST.sub(f"https://{self._config.social_mirror_host}", url, count=1)

    def archive_url(self, url: str) -> str:
        return f"{self._config.archive_prefix}{url}"

    def _replacement(self, url: str) -> str:
        kind = self._classifier.classify(url)
        if kind is UrlKind.SOCIAL_MIRROR:
            mirrored = self.mirror_url(url)
            LOGGER.info("Replaced social URL: %s with: %s", url, mirrored)
            return mirrored
        if kind is UrlKind.PAYWALL:
            archived = self.archive_url(url)
            LOGGER.info("Replaced paywall URL: %s with: %s", url, archived)
            return archived
        return url

    def rewrite(self, text: str) -> RewriteResult:
        parts: List[str] = []
        cursor = 0
        changed = False

        for match in iter_url_matches(text):
            url = match.group(0)
            replacement = self._replacement(url)
            parts.append(text[cursor:match.start()])
            parts.append(replacement)
            cursor = match.end()
            changed = changed or replacement != url

        if not changed:
            return RewriteResult(text, False)
        parts.append(text[cursor:])
        return RewriteResult("".join(parts), True)
