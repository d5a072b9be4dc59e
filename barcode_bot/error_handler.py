"""Translate command failures into user-facing replies."""
from typing import Any, Dict, Optional
import logging

from barcode_bot.chatbot.reply_cards import CommandReply, ReplyCards
from barcode_bot.chatbot.validation import ValidationError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal error occurred while processing your command. Please try again later."


class ErrorHandler:
    def __init__(self, cards: Optional[ReplyCards] = None):
        self.cards = cards or ReplyCards()

    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> CommandReply:
        if isinstance(exc, ValidationError):
            logger.info("Command rejected: %s context=%s", exc.message, context or {})
            return self.cards.error(exc.message)
        logger.error("Unhandled exception in command handler: %s context=%s", exc, context or {}, exc_info=True)
        return self.cards.error(INTERNAL_ERROR_MESSAGE)
