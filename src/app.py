"""Application entry point for the paywallbot chat agent."""

from __future__ import annotations

import argparse
import logging
from typing import Optional

from art import tprint
from dotenv import load_dotenv
from telethon import TelegramClient, events
from telethon.tl.functions.channels import JoinChannelRequest

import settings
from adapters.json_override_store import JsonOverrideStore
from adapters.telegram_chat import TelegramChat
from adapters.telegram_mapper import build_inbound_message
from client import build_client
from core.classifier import UrlClassifier
from core.commands import CommandDispatcher
from core.config import DedupConfig, RewriteConfig
from core.dedup import DedupGuard
from core.domains import BUILTIN_DOMAINS
from core.processor import MessageProcessor
from core.registry import DomainRegistry
from core.rewriter import MessageRewriter
from get_session import authorize, bot_token, login
from log_setup import configure_logging

NAME = "PAYWALLBOT"
FONT = "tarty-1"

LOGGER = logging.getLogger(__name__)


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


def _configure_logging() -> None:
    # Secrets to redact come from .env, so load it before building handlers.
    load_dotenv()
    configure_logging(settings.LOGGING, settings.PROJECT_ROOT)


def _build_registry() -> DomainRegistry:
    store = JsonOverrideStore(settings.USER_SITES_PATH)
    return DomainRegistry(BUILTIN_DOMAINS, store, match_mode=settings.MATCH_MODE)


def _build_processor(
    chat: TelegramChat,
    registry: DomainRegistry,
    bot_username: Optional[str],
) -> MessageProcessor:
    rewrite_config = RewriteConfig(
        social_mirror_host=settings.SOCIAL_MIRROR_HOST,
        archive_prefix=settings.ARCHIVE_PREFIX,
        social_domains=settings.SOCIAL_DOMAINS,
    )
    dedup_config = DedupConfig(capacity=settings.DEDUP_CAPACITY)
    classifier = UrlClassifier(registry, rewrite_config.social_domains)
    return MessageProcessor(
        chat=chat,
        dispatcher=CommandDispatcher(registry),
        rewriter=MessageRewriter(classifier, rewrite_config),
        dedup=DedupGuard(dedup_config.capacity),
        bot_username=bot_username,
    )


async def _join_rooms(client: TelegramClient) -> None:
    """Join public rooms by username; bots must be invited instead."""

    if bot_token():
        return
    for room in settings.ROOMS:
        if not isinstance(room, str) or not room.startswith("@"):
            continue
        try:
            await client(JoinChannelRequest(room))
        except Exception:
            LOGGER.exception("Failed to join room %s", room)
            continue
        LOGGER.info("Joined room: %s", room)


def _run() -> None:
    _print_banner()
    _configure_logging()

    LOGGER.info("Starting paywallbot")
    LOGGER.info(
        "Connection configuration: rooms=%s, timeout=%ss, match_mode=%s",
        settings.ROOMS or "all",
        settings.CONNECTION_TIMEOUT,
        settings.MATCH_MODE,
    )

    registry = _build_registry()

    client = build_client()
    client.loop.run_until_complete(client.connect())
    client.loop.run_until_complete(authorize(client))
    me = client.loop.run_until_complete(client.get_me())
    bot_username = getattr(me, "username", None)
    LOGGER.info("Logged in as %s", bot_username or me.id)

    client.loop.run_until_complete(_join_rooms(client))

    processor = _build_processor(TelegramChat(client), registry, bot_username)

    # Single handler keeps Telethon integration minimal and defers all filtering
    # to our core processor for consistency and testability.
    @client.on(events.NewMessage(chats=settings.ROOMS or None, incoming=True))
    async def handler(event) -> None:
        try:
            message = await build_inbound_message(event.message)
            await processor.handle(message)
        except Exception:
            LOGGER.exception("Error while processing message")

    LOGGER.info("Bot is listening for messages with URLs")
    try:
        client.run_until_disconnected()
    finally:
        LOGGER.info("Disconnecting bot...")


def _login() -> None:
    _print_banner()
    _configure_logging()
    client = build_client()
    client.loop.run_until_complete(login(client))


def _sites() -> None:
    _configure_logging()
    registry = _build_registry()
    for domain in registry.list():
        print(domain)


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="paywallbot")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("run", help="Start the bot")
    subparsers.add_parser("login", help="Authorize the Telegram session and exit")
    subparsers.add_parser("sites", help="Print the effective paywall domain list")

    args = parser.parse_args(argv)
    if args.command == "login":
        _login()
        return
    if args.command == "sites":
        _sites()
        return
    _run()


if __name__ == "__main__":
    main()
