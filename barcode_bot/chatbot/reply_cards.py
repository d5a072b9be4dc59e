"""
Build Slack Block Kit replies for the barcode bot
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional

from barcode_bot.barcodes.generator import GeneratedCode
from barcode_bot.chatbot.commands import BARCODE_COMMAND, HELP_COMMAND, USAGE_EXAMPLE
from barcode_bot.integrations.contracts.rendering import BarcodeImage
from barcode_bot.utils.config_loader import BrandingConfig


@dataclass
class CommandReply:
    """Reply to one command invocation.

    Ephemeral replies are only shown to the caller; the rest are posted in channel.
    """

    text: str
    blocks: List[Dict[str, Any]] = field(default_factory=list)
    color: Optional[str] = None
    ephemeral: bool = False

    def to_slack(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "response_type": "ephemeral" if self.ephemeral else "in_channel",
            "text": self.text,
        }
        if self.color:
            payload["attachments"] = [{"color": self.color, "blocks": self.blocks}]
        else:
            payload["blocks"] = self.blocks
        return payload


def format_price_gbp(price_in_pence: int) -> str:
    """100 -> '£1.00', 99999 -> '£999.99'"""
    pounds = Decimal(price_in_pence) / Decimal(100)
    return f"£{pounds:,.2f}"


def _header(text: str) -> Dict[str, Any]:
    return {"type": "header", "text": {"type": "plain_text", "text": text, "emoji": True}}


def _section(markdown: str) -> Dict[str, Any]:
    return {"type": "section", "text": {"type": "mrkdwn", "text": markdown}}


def _footer(text: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    now = now or datetime.now(timezone.utc)
    stamp = int(now.timestamp())
    fallback = now.strftime("%Y-%m-%d %H:%M UTC")
    return {
        "type": "context",
        "elements": [
            {"type": "mrkdwn", "text": f"{text} • <!date^{stamp}^{{date_short_pretty}} at {{time}}|{fallback}>"}
        ],
    }


class ReplyCards:
    def __init__(self, branding: Optional[BrandingConfig] = None, required_role: str = ""):
        self.branding = branding or BrandingConfig()
        self.required_role = required_role

    def barcode(
        self,
        item_name: str,
        product_code: str,
        code: GeneratedCode,
        image: BarcodeImage,
        now: Optional[datetime] = None,
    ) -> CommandReply:
        price = format_price_gbp(code.price_in_pence)
        blocks = [
            _header(f"🏷️ {self.branding.title}"),
            _section(f"*{self.branding.subtitle}*"),
            {
                "type": "section",
                "fields": [
                    {"type": "mrkdwn", "text": f"*Item Name*\n{item_name}"},
                    {"type": "mrkdwn", "text": f"*Product Code*\n`{product_code}`"},
                    {"type": "mrkdwn", "text": f"*Price*\n{price}"},
                    {"type": "mrkdwn", "text": f"*Barcode*\n`{code.digits}`"},
                ],
            },
            {"type": "image", "image_url": image.image_url, "alt_text": image.alt_text},
            _footer(self.branding.footer, now),
        ]
        return CommandReply(
            text=f"{item_name}: {code.digits} ({price})",
            blocks=blocks,
            color=self.branding.accent_color,
        )

    def access_denied(self, now: Optional[datetime] = None) -> CommandReply:
        blocks = [
            _header("🔒 Access Denied"),
            _section(
                f'*You need the "{self.required_role}" role to use this bot!*\n\n'
                "Contact a workspace administrator to get access."
            ),
            _footer(self.branding.footer, now),
        ]
        return CommandReply(
            text=f'You need the "{self.required_role}" role to use this bot.',
            blocks=blocks,
            color=self.branding.error_color,
            ephemeral=True,
        )

    def help(self, now: Optional[datetime] = None) -> CommandReply:
        notes = "\n".join(
            [
                "• Item name is required",
                "• Product code must be 8-13 digits (a 14-digit code drops its last digit)",
                "• Price in pence (100 = £1.00)",
                "• Max price: £999.99",
                f'• Only members of "{self.required_role}" can generate barcodes',
            ]
        )
        blocks = [
            _header(f"🤖 {self.branding.title} Help"),
            _section("Generate barcodes with custom pricing!"),
            _section(f'*🔒 Access Required*\nYou need the *"{self.required_role}"* role to use barcode generation commands.'),
            _section(
                f"*📋 Commands*\n`/{BARCODE_COMMAND}` - Generate custom barcode\n`/{HELP_COMMAND}` - Show this help message"
            ),
            _section(
                f"*🏷️ /{BARCODE_COMMAND}*\nGenerate a barcode with item name and custom price\n*Usage:* `{USAGE_EXAMPLE}`"
            ),
            _section(f"*📝 Notes*\n{notes}"),
            _footer(self.branding.footer, now),
        ]
        return CommandReply(text=f"{self.branding.title} help", blocks=blocks, color=self.branding.error_color)

    def error(self, message: str, now: Optional[datetime] = None) -> CommandReply:
        blocks = [
            _header("❌ Error"),
            _section(f"*Error:* {message}"),
            _footer(self.branding.footer, now),
        ]
        return CommandReply(text=f"Error: {message}", blocks=blocks, color=self.branding.error_color, ephemeral=True)
