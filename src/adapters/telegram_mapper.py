"""Telegram-to-core message mapping adapter.

This keeps Telethon-specific details out of the core pipeline.
"""

from __future__ import annotations

from typing import Optional

from telethon.tl.custom import Message

from core.models import InboundMessage


def message_key(message: Message) -> Optional[str]:
    """Return a process-wide unique id for a message.

    Telegram message ids are only unique per chat, so the chat id is folded in.
    """

    chat_id = getattr(message, "chat_id", None)
    message_id = getattr(message, "id", None)
    if chat_id is None or message_id is None:
        return None
    return f"{chat_id}:{message_id}"


async def _sender_username(message: Message) -> Optional[str]:
    sender = getattr(message, "sender", None)
    if sender is None and hasattr(message, "get_sender"):
        # Sender is not always cached on the event; fetch it once.
        sender = await message.get_sender()
    username = getattr(sender, "username", None)
    if isinstance(username, str) and username:
        return username
    return None


async def build_inbound_message(message: Message) -> InboundMessage:
    """Build a core InboundMessage from a Telethon Message."""

    return InboundMessage(
        message_id=message_key(message),
        text=message.raw_text or "",
        author=await _sender_username(message),
        room_id=message.chat_id,
    )
