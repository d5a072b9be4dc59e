"""
Command router - gates, dispatches and renders slash commands
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from barcode_bot.barcodes.generator import generate_code
from barcode_bot.chatbot.command_parser import parse_options, validate_options
from barcode_bot.chatbot.commands import BARCODE, BARCODE_COMMAND, HELP_COMMAND, get_command
from barcode_bot.chatbot.permissions import RoleChecker
from barcode_bot.chatbot.reply_cards import CommandReply, ReplyCards
from barcode_bot.error_handler import ErrorHandler
from barcode_bot.integrations.contracts.rendering import BarcodeImageRenderer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallerIdentity:
    user_id: str
    user_name: str = ""
    team_id: str = ""


@dataclass
class CommandRequest:
    command: str
    text: str
    caller: CallerIdentity
    channel_id: str = ""
    response_url: str = ""
    options: Dict[str, Any] = field(default_factory=dict)


class CommandRouter:
    def __init__(
        self,
        role_checker: RoleChecker,
        renderer: BarcodeImageRenderer,
        cards: Optional[ReplyCards] = None,
        error_handler: Optional[ErrorHandler] = None,
    ):
        self.role_checker = role_checker
        self.renderer = renderer
        self.cards = cards or ReplyCards(required_role=role_checker.required_role)
        self.error_handler = error_handler or ErrorHandler(self.cards)
        self._handlers: Dict[str, Callable[[CommandRequest], CommandReply]] = {
            BARCODE_COMMAND: self._handle_barcode,
            HELP_COMMAND: self._handle_help,
        }

    def dispatch(self, request: CommandRequest) -> CommandReply:
        """Map one command invocation to its reply. Never raises."""
        name = (request.command or "").strip().lstrip("/").lower()
        # `/barcode help` is an alias of the help command.
        if name == BARCODE_COMMAND and (request.text or "").strip().lower() == "help":
            name = HELP_COMMAND

        definition = get_command(name)
        handler = self._handlers.get(name)
        if definition is None or handler is None:
            logger.warning("Unknown command: %s", request.command)
            return self.cards.error(f"Unknown command: {request.command}")

        context = {"command": name, "user_id": request.caller.user_id, "channel_id": request.channel_id}
        logger.info("[Router] command=%s user=%s channel=%s", name, request.caller.user_id, request.channel_id)

        if definition.requires_role and not self.role_checker.has_required_role(request.caller.user_id):
            return self.cards.access_denied()

        try:
            return handler(request)
        except Exception as e:
            return self.error_handler.handle_exception(e, context=context)

    def _handle_barcode(self, request: CommandRequest) -> CommandReply:
        if request.options:
            options = validate_options(BARCODE, request.options)
        else:
            options = parse_options(BARCODE, request.text)
        item_name = options["item_name"]
        product_code = options["product_code"]
        code = generate_code(product_code, options["price"])
        image = self.renderer.render(code.digits)
        logger.info("[Router] barcode generated for user=%s item=%s", request.caller.user_id, item_name)
        return self.cards.barcode(item_name=item_name, product_code=product_code, code=code, image=image)

    def _handle_help(self, request: CommandRequest) -> CommandReply:
        return self.cards.help()
