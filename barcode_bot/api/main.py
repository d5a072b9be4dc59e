"""
FastAPI application - Slack slash command endpoint and keep-alive routes

Run with:
  uvicorn barcode_bot.api.main:create_app --factory --host 0.0.0.0 --port 3000
"""

import logging
from contextlib import asynccontextmanager
from typing import Callable, Dict, Optional
from urllib.parse import parse_qs

from fastapi import APIRouter, BackgroundTasks, FastAPI, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, PlainTextResponse

from barcode_bot.api.context import AppContext, build_app_context
from barcode_bot.api.dependencies import get_app_context, verify_slack_signature
from barcode_bot.chatbot.commands import COMMANDS
from barcode_bot.chatbot.router import CallerIdentity, CommandRequest
from barcode_bot.utils.config_loader import BotConfig, load_bot_config

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _parse_form(body: bytes) -> Dict[str, str]:
    parsed = parse_qs(body.decode("utf-8"), keep_blank_values=True)
    return {k: v[0] for k, v in parsed.items() if v}


def _command_request(form: Dict[str, str]) -> CommandRequest:
    return CommandRequest(
        command=form.get("command", ""),
        text=form.get("text", ""),
        caller=CallerIdentity(
            user_id=form.get("user_id", ""),
            user_name=form.get("user_name", ""),
            team_id=form.get("team_id", ""),
        ),
        channel_id=form.get("channel_id", ""),
        response_url=form.get("response_url", ""),
    )


def deliver_deferred_reply(ctx: AppContext, command: CommandRequest) -> None:
    """Background half of a deferred reply: dispatch, then post to response_url."""
    reply = ctx.router.dispatch(command)
    try:
        ctx.slack_service.send_response(command.response_url, reply.to_slack())
    except Exception as e:
        logger.error("Failed to deliver deferred reply for %s: %s", command.command, e, exc_info=True)


def build_router(commands_path: str) -> APIRouter:
    router = APIRouter()

    @router.get("/", response_class=PlainTextResponse)
    async def keep_alive():
        return "Barcode bot is running!"

    @router.get("/health")
    async def health(request: Request):
        ctx = get_app_context(request)
        return {
            "status": "ok",
            "commands": sorted(f"/{name}" for name in COMMANDS),
            "permissions_enabled": ctx.config.permissions.enabled,
        }

    @router.post(commands_path, tags=["Slack"])
    async def slack_commands(request: Request, background_tasks: BackgroundTasks):
        """
        Slack slash command receiver.
        - Verifies the request signature.
        - Replies inline, or acknowledges and replies later through response_url.
        """
        ctx = get_app_context(request)
        body = await request.body()
        verify_slack_signature(ctx, body, request.headers)

        command = _command_request(_parse_form(body))
        logger.info("Slash command %s from user=%s", command.command, command.caller.user_id)

        if ctx.config.slack.defer_replies and command.response_url:
            background_tasks.add_task(deliver_deferred_reply, ctx, command)
            return Response(status_code=200)

        # Role lookups call the Slack Web API, keep them off the event loop.
        reply = await run_in_threadpool(ctx.router.dispatch, command)
        return JSONResponse(reply.to_slack())

    return router


def create_app(
    config: Optional[BotConfig] = None,
    context_factory: Callable[[BotConfig], AppContext] = build_app_context,
) -> FastAPI:
    """Application factory. Configuration is loaded here; the context is built on startup."""
    cfg = config or load_bot_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.context = context_factory(cfg)
        logger.info("Barcode bot started, commands at %s", cfg.server.commands_path)
        try:
            yield
        finally:
            app.state.context.close()
            app.state.context = None
            logger.info("Barcode bot stopped")

    app = FastAPI(
        title="Barcode Bot",
        description="Slack slash commands for price-embedded barcodes",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.include_router(build_router(cfg.server.commands_path))
    return app
