"""Telegram chat delivery adapter.

Implements the core ChatPort on top of a connected Telethon client.
"""

from __future__ import annotations

from telethon import TelegramClient


class TelegramChat:
    """Chat adapter that posts to rooms and users through Telethon."""

    def __init__(self, client: TelegramClient) -> None:
        self._client = client

    async def send_direct(self, username: str, text: str) -> None:
        """Send a private message; bots can only reach users who started them."""

        await self._client.send_message(username, text, link_preview=False)

    async def send_to_room(self, text: str, room_id: int) -> None:
        await self._client.send_message(room_id, text)
