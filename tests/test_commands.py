from __future__ import annotations

from core.commands import CommandDispatcher
from core.models import UserOverride
from core.registry import DomainRegistry


class MemoryStore:
    def __init__(self) -> None:
        self.override = UserOverride()

    def load(self) -> UserOverride:
        return self.override.copy()

    def save(self, override: UserOverride) -> None:
        self.override = override.copy()


def _dispatcher() -> tuple[CommandDispatcher, DomainRegistry]:
    registry = DomainRegistry(("nytimes.com", "wsj.com"), MemoryStore())
    return CommandDispatcher(registry), registry


def test_addsite_normalizes_argument() -> None:
    dispatcher, registry = _dispatcher()

    outcome = dispatcher.dispatch("!addsite www.Example.COM", "alice")

    assert outcome is not None
    assert outcome.reply == "Added example.com to the paywall list."
    assert outcome.announcement == "Added example.com to the paywall list. (requested by @alice)"
    assert "example.com" in registry.list()


def test_listsites_is_sorted_and_private() -> None:
    dispatcher, _ = _dispatcher()
    dispatcher.dispatch("!addsite https://www.example.com/story", "alice")

    outcome = dispatcher.dispatch("  !listsites  ", "bob")

    assert outcome is not None
    assert outcome.announcement is None
    assert outcome.reply == "Current paywall sites:\n- example.com\n- nytimes.com\n- wsj.com"


def test_removesite_builtin() -> None:
    dispatcher, registry = _dispatcher()
    outcome = dispatcher.dispatch("!removesite nytimes.com", "alice")
    assert outcome is not None
    assert outcome.reply == "Removed nytimes.com from the paywall list."
    assert "nytimes.com" not in registry.list()


def test_missing_argument_returns_usage() -> None:
    dispatcher, registry = _dispatcher()
    before = registry.list()

    add = dispatcher.dispatch("!addsite", "alice")
    remove = dispatcher.dispatch("!removesite   ", "alice")

    assert add is not None and add.reply == "Usage: !addsite domain.com"
    assert add.announcement is None
    assert remove is not None and remove.reply == "Usage: !removesite domain.com"
    assert registry.list() == before


def test_non_commands_are_ignored() -> None:
    dispatcher, _ = _dispatcher()
    assert dispatcher.dispatch("hello https://nytimes.com/a", "alice") is None
    assert dispatcher.dispatch("!listsites please", "alice") is None
    assert dispatcher.dispatch("!ADDSITE example.com", "alice") is None
    assert dispatcher.dispatch("", "alice") is None


def test_addsite_rejects_bare_tld_and_stray_dots() -> None:
    dispatcher, registry = _dispatcher()
    before = registry.list()

    for argument in ("com", ".", ".com", "example."):
        outcome = dispatcher.dispatch(f"!addsite {argument}", "alice")
        assert outcome is not None
        assert outcome.reply.endswith("is not a valid domain. Usage: !addsite domain.com")
        assert outcome.announcement is None

    assert registry.list() == before
