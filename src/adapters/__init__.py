"""Adapters that connect the core pipeline to Telegram and the filesystem."""
