from __future__ import annotations

from core.classifier import UrlClassifier, UrlKind, extract_urls
from core.config import RewriteConfig
from core.models import UserOverride
from core.registry import DomainRegistry
from core.rewriter import MessageRewriter


class MemoryStore:
    def __init__(self, override: "UserOverride | None" = None) -> None:
        self._override = override or UserOverride()

    def load(self) -> UserOverride:
        return self._override.copy()

    def save(self, override: UserOverride) -> None:
        self._override = override.copy()


def _rewriter(builtin=("nytimes.com", "wsj.com")) -> MessageRewriter:
    config = RewriteConfig()
    registry = DomainRegistry(builtin, MemoryStore())
    return MessageRewriter(UrlClassifier(registry, config.social_domains), config)


def test_extract_urls_preserves_order_and_duplicates() -> None:
    text = "a https://one.com/x b http://two.com c https://one.com/x"
    assert extract_urls(text) == ["https://one.com/x", "http://two.com", "https://one.com/x"]
    assert extract_urls("no links here") == []
    assert extract_urls("get ftp://files.example.com/x") == []


def test_classify_kinds() -> None:
    registry = DomainRegistry(("nytimes.com",), MemoryStore())
    classifier = UrlClassifier(registry, ("x.com", "twitter.com"))
    assert classifier.classify("https://www.x.com/a") is UrlKind.SOCIAL_MIRROR
    assert classifier.classify("https://twitter.com/a") is UrlKind.SOCIAL_MIRROR
    assert classifier.classify("https://www.nytimes.com/a") is UrlKind.PAYWALL
    assert classifier.classify("https://example.com/a") is UrlKind.PLAIN
    assert classifier.classify("http://[::1") is UrlKind.PLAIN


def test_social_wins_over_paywall() -> None:
    rewriter = _rewriter(builtin=("x.com", "nytimes.com"))
    result = rewriter.rewrite("look https://x.com/user/status/1")
    assert result.changed
    assert result.text == "look https://xcancel.com/user/status/1"
    assert "archive.is" not in result.text


def test_rewrites_social_and_paywall_links() -> None:
    result = _rewriter().rewrite("check https://x.com/user/status/1 and https://nytimes.com/a")
    assert result.changed
    assert result.text == (
        "check https://xcancel.com/user/status/1 and "
        "https://archive.is/newest/https://nytimes.com/a"
    )


def test_mirror_keeps_path_and_query() -> None:
    result = _rewriter().rewrite("https://www.twitter.com/u/status/9?s=20")
    assert result.text == "https://xcancel.com/u/status/9?s=20"


def test_repeated_paywall_link_is_wrapped_once_per_occurrence() -> None:
    url = "https://www.wsj.com/articles/x"
    result = _rewriter().rewrite(f"{url} again {url}")
    archived = f"https://archive.is/newest/{url}"
    assert result.text == f"{archived} again {archived}"


def test_plain_message_is_unchanged() -> None:
    text = "see https://example.com/page"
    result = _rewriter().rewrite(text)
    assert not result.changed
    assert result.text == text
