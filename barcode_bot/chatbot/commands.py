"""
Slash command definitions.

The bot's commands are declared once here and passed around explicitly;
there is no process-wide registry to mutate at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Literal, Optional, Tuple

from barcode_bot.barcodes.generator import MAX_PRICE, MIN_PRICE

BARCODE_COMMAND = "barcode"
HELP_COMMAND = "barcode-help"

USAGE_EXAMPLE = "/barcode item_name:Coca Cola product_code:1234567890123 price:100"


@dataclass(frozen=True)
class OptionDefinition:
    name: str
    description: str
    type: Literal["string", "integer"] = "string"
    required: bool = True
    min_value: Optional[int] = None
    max_value: Optional[int] = None


@dataclass(frozen=True)
class CommandDefinition:
    name: str
    description: str
    options: Tuple[OptionDefinition, ...] = ()
    requires_role: bool = True
    usage_hint: str = ""

    def option(self, name: str) -> Optional[OptionDefinition]:
        for opt in self.options:
            if opt.name == name:
                return opt
        return None

    @property
    def option_names(self) -> List[str]:
        return [opt.name for opt in self.options]


BARCODE = CommandDefinition(
    name=BARCODE_COMMAND,
    description="Generate a price-embedded barcode",
    options=(
        OptionDefinition("item_name", "Name of the item"),
        OptionDefinition("product_code", "Product barcode (8-13 digits)"),
        OptionDefinition(
            "price",
            "Price in pence (e.g., 100 for £1.00)",
            type="integer",
            min_value=MIN_PRICE,
            max_value=MAX_PRICE,
        ),
    ),
    usage_hint="item_name:<name> product_code:<digits> price:<pence>",
)

HELP = CommandDefinition(
    name=HELP_COMMAND,
    description="Show help information for the barcode bot",
    requires_role=False,
)

COMMANDS: Dict[str, CommandDefinition] = {c.name: c for c in (BARCODE, HELP)}


def get_command(name: str) -> Optional[CommandDefinition]:
    """Look up a command by name, with or without the leading slash."""
    return COMMANDS.get((name or "").strip().lstrip("/").lower())


def slack_manifest_commands(base_url: str, commands_path: str = "/slack/commands") -> List[Dict[str, object]]:
    """Render the commands as the `features.slash_commands` section of a Slack app manifest."""
    url = f"{base_url.rstrip('/')}{commands_path}"
    out = []
    for command in COMMANDS.values():
        entry: Dict[str, object] = {
            "command": f"/{command.name}",
            "url": url,
            "description": command.description,
            "should_escape": False,
        }
        if command.usage_hint:
            entry["usage_hint"] = command.usage_hint
        out.append(entry)
    return out
