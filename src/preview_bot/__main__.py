"""CLI entry point for preview-bot."""

from __future__ import annotations

import argparse
import asyncio
import signal
import sys

from preview_bot.app import PreviewBotApp
from preview_bot.config import AppConfig, is_unresolved, load_config
from preview_bot.log import setup_logging


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="preview-bot",
        description="Discord bot that previews linked messages",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    for name, help_text in (("start", "Start the bot"), ("config-check", "Validate configuration")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("-c", "--config", default="config.yaml", help="Path to config file")
        sub.add_argument("-e", "--env", default=".env", help="Path to .env file")

    args = parser.parse_args()

    if args.command is None:
        # Default to start
        args.command = "start"
        args.config = "config.yaml"
        args.env = ".env"

    if args.command == "config-check":
        _check_config(args.config, args.env)
    elif args.command == "start":
        _run(args.config, args.env)


def _load_or_exit(config_path: str, env_path: str) -> AppConfig:
    try:
        return load_config(config_path, env_path)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Copy config.example.yaml to config.yaml first", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)


def _check_config(config_path: str, env_path: str) -> None:
    """Validate configuration and print summary."""
    config = _load_or_exit(config_path, env_path)
    token_state = "missing" if is_unresolved(config.discord.token) or not config.discord.token else "set"
    print(f"Configuration valid: {config_path}")
    print(f"  Environment: {config.environment}")
    print(f"  Log level: {config.log_level}")
    print(f"  Discord token: {token_state}")
    print(f"  Members intent: {config.discord.members_intent}")
    print(f"  Preview length: {config.preview.max_description_length}")
    print(f"  Preview images: {config.preview.show_images}")
    if config.auth_check.enabled:
        print(f"  Auth check: {config.auth_check.channel_id}/{config.auth_check.message_id}")


def _run(config_path: str, env_path: str) -> None:
    """Load config and start the application."""
    config = _load_or_exit(config_path, env_path)
    setup_logging(config.log_level, config.log_format)

    async def _async_main() -> None:
        loop = asyncio.get_running_loop()
        stop_event = asyncio.Event()

        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, stop_event.set)
            except NotImplementedError:
                # Windows doesn't support add_signal_handler
                signal.signal(sig, lambda s, f: stop_event.set())

        app = PreviewBotApp(config)
        try:
            await app.start()
            await stop_event.wait()
        finally:
            await app.stop()

    try:
        asyncio.run(_async_main())
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
