"""Core message processing pipeline.

This module is integration-agnostic. It only relies on the chat port for
delivery, enabling other chat backends without changes here.

Each inbound message goes through a strict order:
1) Drop messages without an author or written by the bot itself
2) Dedup by message id (before anything with side effects)
3) Commands short-circuit the pipeline
4) Rewrite social/paywalled links and re-post if anything changed
"""

from __future__ import annotations

import logging
from typing import Optional

from core.commands import CommandDispatcher
from core.dedup import DedupGuard
from core.models import InboundMessage
from core.ports import ChatPort
from core.rewriter import MessageRewriter

LOGGER = logging.getLogger(__name__)

DM_FALLBACK_TEXT = "@{username} I tried to DM you but couldn't. Please check your DM settings."


class MessageProcessor:
    """Orchestrates dedup, command dispatch, rewriting, and replies."""

    def __init__(
        self,
        chat: ChatPort,
        dispatcher: CommandDispatcher,
        rewriter: MessageRewriter,
        dedup: DedupGuard,
        bot_username: Optional[str] = None,
    ) -> None:
        self._chat = chat
        self._dispatcher = dispatcher
        self._rewriter = rewriter
        self._dedup = dedup
        self._bot_username = bot_username.lower() if bot_username else None

    async def handle(self, message: InboundMessage) -> None:
        """Process one inbound message through the core pipeline."""

        if not message.author:
            return
        # Ignore our own posts to avoid rewriting our rewrites.
        if self._bot_username and message.author.lower() == self._bot_username:
            return

        if not self._dedup.admit(message.message_id):
            LOGGER.debug("Dedup skip for message %s", message.message_id)
            return

        outcome = self._dispatcher.dispatch(message.text, message.author)
        if outcome is not None:
            await self._send_direct(message.author, outcome.reply, message.room_id)
            if outcome.announcement:
                await self._send_to_room(outcome.announcement, message.room_id)
            return

        result = self._rewriter.rewrite(message.text)
        if not result.changed:
            return
        await self._send_to_room(f"@{message.author} shared: {result.text}", message.room_id)

    async def _send_to_room(self, text: str, room_id: int) -> None:
        try:
            await self._chat.send_to_room(text, room_id)
        except Exception:
            LOGGER.exception("Failed to send message to room %s", room_id)
            return
        LOGGER.info("Sent message to room %s", room_id)

    async def _send_direct(self, username: str, text: str, room_id: int) -> None:
        try:
            await self._chat.send_direct(username, text)
        except Exception:
            LOGGER.exception("Failed to send DM to %s", username)
        else:
            LOGGER.info("Sent DM to %s", username)
            return

        # Single fallback attempt; its failure is only logged.
        try:
            await self._chat.send_to_room(DM_FALLBACK_TEXT.format(username=username), room_id)
        except Exception:
            LOGGER.exception("Failed to send fallback message to room %s", room_id)
