"""Chat commands that edit the paywall domain registry (core domain)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from core.domains import is_plausible_domain, normalize_domain
from core.models import RegistryResult
from core.registry import DomainRegistry

ADD_COMMAND = "!addsite"
REMOVE_COMMAND = "!removesite"
LIST_COMMAND = "!listsites"


@dataclass(frozen=True)
class CommandOutcome:
    """What a command wants said back.

    `reply` goes privately to the requester; `announcement`, when set, is
    posted to the room so other members see list changes.
    """

    reply: str
    announcement: Optional[str] = None


class CommandDispatcher:
    def __init__(self, registry: DomainRegistry) -> None:
        self._registry = registry

    def dispatch(self, text: str, author: str) -> Optional[CommandOutcome]:
        """Run the command in `text`, or return None if it is not one."""

        stripped = text.strip()
        if stripped == LIST_COMMAND:
            return self._list()

        parts = stripped.split()
        if not parts:
            return None
        verb = parts[0]
        if verb == ADD_COMMAND:
            return self._mutate(verb, parts[1:], self._registry.add, author)
        if verb == REMOVE_COMMAND:
            return self._mutate(verb, parts[1:], self._registry.remove, author)
        return None

    def _list(self) -> CommandOutcome:
        domains = self._registry.list()
        lines = ["Current paywall sites:"]
        lines.extend(f"- {domain}" for domain in domains)
        return CommandOutcome(reply="\n".join(lines))

    def _mutate(
        self,
        verb: str,
        args: list[str],
        operation: Callable[[str], RegistryResult],
        author: str,
    ) -> CommandOutcome:
        domain = normalize_domain(args[0]) if args else ""
        if not domain:
            return CommandOutcome(reply=f"Usage: {verb} domain.com")
        # Removal stays lenient so a bad entry in a hand-edited file can still be dropped.
        if verb == ADD_COMMAND and not is_plausible_domain(domain):
            return CommandOutcome(reply=f"{domain} is not a valid domain. Usage: {verb} domain.com")

        result = operation(domain)
        return CommandOutcome(
            reply=result.message,
            announcement=f"{result.message} (requested by @{author})",
        )
