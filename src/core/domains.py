"""Domain normalization helpers and the built-in paywall list (core domain)."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlparse

LOGGER = logging.getLogger(__name__)

WWW_PREFIX = "www."

# Shipped default policy. Users layer additions/removals on top of this list;
# the list itself is never persisted or mutated at runtime.
BUILTIN_DOMAINS: tuple[str, ...] = (
    "nytimes.com",
    "wsj.com",
    "washingtonpost.com",
    "ft.com",
    "economist.com",
    "bloomberg.com",
    "theatlantic.com",
    "newyorker.com",
    "wired.com",
    "businessinsider.com",
    "latimes.com",
    "bostonglobe.com",
    "chicagotribune.com",
    "sfchronicle.com",
    "seattletimes.com",
    "theathletic.com",
    "barrons.com",
    "foreignpolicy.com",
    "foreignaffairs.com",
    "hbr.org",
    "nymag.com",
    "vanityfair.com",
    "technologyreview.com",
    "scientificamerican.com",
    "newscientist.com",
    "thetimes.co.uk",
    "telegraph.co.uk",
    "spectator.co.uk",
    "lemonde.fr",
    "spiegel.de",
    "zeit.de",
    "faz.net",
    "nzz.ch",
    "haaretz.com",
    "theglobeandmail.com",
    "smh.com.au",
    "theaustralian.com.au",
    "afr.com",
    "nikkei.com",
    "scmp.com",
)


def strip_www(hostname: str) -> str:
    """Remove any leading `www.` labels from a hostname."""

    while hostname.startswith(WWW_PREFIX):
        hostname = hostname[len(WWW_PREFIX):]
    return hostname


def hostname_of(url: str) -> Optional[str]:
    """Return the lowercase hostname of a URL, or None if it has none."""

    try:
        return urlparse(url).hostname
    except ValueError:
        LOGGER.debug("Unparsable URL: %s", url)
        return None


def normalize_domain(value: str) -> str:
    """Normalize a user supplied domain or URL into a registry key.

    URLs are reduced to their hostname; anything else is treated as a raw
    hostname fragment. Parse failures fall back to the input as given.
    The result is lowercase without a leading `www.`, and normalizing it
    again yields the same string.
    """

    candidate = value.strip()
    if "://" in candidate:
        candidate = hostname_of(candidate) or candidate
    return strip_www(candidate.lower())


def is_plausible_domain(domain: str) -> bool:
    """Return True for a normalized domain with at least two non-empty labels.

    Bare TLDs or stray dots would match almost every hostname under
    substring matching.
    """

    labels = domain.split(".")
    return len(labels) >= 2 and all(labels)
