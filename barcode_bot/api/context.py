"""
Application context.

Everything a request handler needs is built once at startup, hung off
``app.state.context`` and closed on shutdown. Nothing is read from module
globals.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from barcode_bot.chatbot.permissions import RoleChecker
from barcode_bot.chatbot.reply_cards import ReplyCards
from barcode_bot.chatbot.router import CommandRouter
from barcode_bot.error_handler import ErrorHandler
from barcode_bot.integrations.clients.mocks.barcode_images import StaticBarcodeRenderer
from barcode_bot.integrations.clients.real_http.tec_it_barcodes import TecItBarcodeRenderer
from barcode_bot.integrations.contracts.rendering import BarcodeImageRenderer
from barcode_bot.integrations.slack.slack_chat_service import SlackChatService
from barcode_bot.utils.config_loader import BotConfig, RenderingConfig

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    config: BotConfig
    slack_service: SlackChatService
    role_checker: RoleChecker
    renderer: BarcodeImageRenderer
    router: CommandRouter
    closed: bool = False

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        logger.info("Barcode bot context closed")


def build_renderer(config: RenderingConfig) -> BarcodeImageRenderer:
    if config.provider == "static":
        return StaticBarcodeRenderer()
    return TecItBarcodeRenderer(config)


def build_app_context(
    config: BotConfig,
    slack_client: Optional[Any] = None,
    webhook_factory: Optional[Any] = None,
    renderer: Optional[BarcodeImageRenderer] = None,
) -> AppContext:
    perms = config.permissions
    if perms.enabled and not config.slack.bot_token and slack_client is None:
        logger.warning("%s is not set; role lookups will fail and deny access", config.slack.bot_token_env)

    slack_service = SlackChatService(
        token=config.slack.bot_token,
        client=slack_client,
        webhook_factory=webhook_factory,
        cache_ttl_seconds=perms.cache_ttl_seconds,
    )
    role_checker = RoleChecker(
        required_role=perms.required_role,
        membership_lookup=slack_service.user_in_group,
        enabled=perms.enabled,
    )
    renderer = renderer or build_renderer(config.rendering)
    cards = ReplyCards(branding=config.branding, required_role=perms.required_role)
    router = CommandRouter(
        role_checker=role_checker,
        renderer=renderer,
        cards=cards,
        error_handler=ErrorHandler(cards),
    )
    logger.info(
        "Barcode bot context ready: role=%s checks=%s renderer=%s",
        perms.required_role,
        perms.enabled,
        type(renderer).__name__,
    )
    return AppContext(
        config=config,
        slack_service=slack_service,
        role_checker=role_checker,
        renderer=renderer,
        router=router,
    )
