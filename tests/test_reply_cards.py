from datetime import datetime, timezone

import pytest

from barcode_bot.barcodes import generate_code
from barcode_bot.chatbot.reply_cards import CommandReply, ReplyCards, format_price_gbp
from barcode_bot.integrations.contracts.rendering import BarcodeImage
from barcode_bot.utils.config_loader import BrandingConfig

NOW = datetime(2026, 1, 2, 3, 4, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "pence, expected",
    [(1, "£0.01"), (5, "£0.05"), (100, "£1.00"), (1999, "£19.99"), (99999, "£999.99")],
)
def test_format_price_gbp(pence, expected):
    assert format_price_gbp(pence) == expected


def test_barcode_card_uses_branding_and_fields():
    cards = ReplyCards(BrandingConfig(title="Label Maker", accent_color="#123456"), required_role="Staff")
    code = generate_code("1234567890123", 100)
    image = BarcodeImage(data=code.digits, image_url="https://img.example/x.png", alt_text="Barcode")

    reply = cards.barcode("Coca Cola", "1234567890123", code, image, now=NOW)

    assert reply.blocks[0]["text"]["text"] == "🏷️ Label Maker"
    fields = [f["text"] for f in reply.blocks[2]["fields"]]
    assert fields == [
        "*Item Name*\nCoca Cola",
        "*Product Code*\n`1234567890123`",
        "*Price*\n£1.00",
        "*Barcode*\n`9112345678901230001000`",
    ]
    assert reply.blocks[3] == {"type": "image", "image_url": "https://img.example/x.png", "alt_text": "Barcode"}
    footer = reply.blocks[-1]["elements"][0]["text"]
    assert f"<!date^{int(NOW.timestamp())}^" in footer
    assert "2026-01-02 03:04 UTC" in footer


def test_to_slack_wraps_coloured_blocks_in_an_attachment():
    reply = CommandReply(text="hi", blocks=[{"type": "divider"}], color="#ff0000", ephemeral=True)
    assert reply.to_slack() == {
        "response_type": "ephemeral",
        "text": "hi",
        "attachments": [{"color": "#ff0000", "blocks": [{"type": "divider"}]}],
    }


def test_to_slack_plain_blocks_in_channel():
    reply = CommandReply(text="hi", blocks=[{"type": "divider"}])
    assert reply.to_slack() == {"response_type": "in_channel", "text": "hi", "blocks": [{"type": "divider"}]}


def test_access_denied_names_the_role():
    reply = ReplyCards(required_role="Staff").access_denied(now=NOW)
    assert reply.ephemeral is True
    assert 'You need the "Staff" role' in reply.blocks[1]["text"]["text"]


def test_help_lists_commands_and_notes():
    reply = ReplyCards(required_role="Staff").help(now=NOW)
    text = "\n".join(b["text"]["text"] for b in reply.blocks if b["type"] in ("section", "header"))
    assert "`/barcode` - Generate custom barcode" in text
    assert "`/barcode-help` - Show this help message" in text
    assert "Max price: £999.99" in text
    assert 'Only members of "Staff"' in text


def test_error_card():
    reply = ReplyCards().error("Price must be between 1p and £999.99", now=NOW)
    assert reply.ephemeral is True
    assert reply.text == "Error: Price must be between 1p and £999.99"
    assert reply.blocks[1]["text"]["text"] == "*Error:* Price must be between 1p and £999.99"
