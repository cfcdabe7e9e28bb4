"""Core domain package for paywallbot.

Core contains the domain registry, URL classification, message rewriting,
command handling and deduplication logic without any Telegram or storage
specific code, keeping the business logic portable.
"""
