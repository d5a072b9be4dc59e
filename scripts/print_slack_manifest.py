#!/usr/bin/env python3
"""
Print a Slack app manifest (YAML) that registers the bot's slash commands.

  python scripts/print_slack_manifest.py --base-url https://my-bot.example.com
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import yaml  # noqa: E402

from barcode_bot.chatbot.commands import slack_manifest_commands  # noqa: E402
from barcode_bot.utils.config_loader import load_bot_config  # noqa: E402


def build_manifest(base_url: str, commands_path: str, app_name: str) -> dict:
    return {
        "display_information": {"name": app_name},
        "features": {
            "bot_user": {"display_name": app_name, "always_online": True},
            "slash_commands": slack_manifest_commands(base_url, commands_path),
        },
        "oauth_config": {"scopes": {"bot": ["commands", "usergroups:read"]}},
        "settings": {"org_deploy_enabled": False, "socket_mode_enabled": False},
    }


def main() -> int:
    parser = argparse.ArgumentParser(description="Print the Slack app manifest for the barcode bot")
    parser.add_argument("--base-url", required=True, help="Public URL the bot is served from")
    parser.add_argument("--config", type=Path, default=None, help="Path to bot_config.yml")
    parser.add_argument("--name", default="Barcode Bot", help="App display name")
    args = parser.parse_args()

    cfg = load_bot_config(args.config)
    manifest = build_manifest(args.base_url, cfg.server.commands_path, args.name)
    print(yaml.safe_dump(manifest, sort_keys=False, allow_unicode=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())
