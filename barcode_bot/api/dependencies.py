import logging
from typing import Mapping

from fastapi import HTTPException, Request, status
from slack_sdk.signature import SignatureVerifier

from barcode_bot.api.context import AppContext

logger = logging.getLogger(__name__)


def get_app_context(request: Request) -> AppContext:
    ctx = getattr(request.app.state, "context", None)
    if ctx is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Bot is not ready")
    return ctx


def verify_slack_signature(ctx: AppContext, body: bytes, headers: Mapping[str, str]) -> None:
    """Reject requests that were not signed with the app's signing secret."""
    slack_cfg = ctx.config.slack
    if not slack_cfg.verify_signatures:
        return

    secret = slack_cfg.signing_secret
    if not secret:
        logger.error("Slack signature check enabled but %s is not set", slack_cfg.signing_secret_env)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Signing secret not configured")

    verifier = SignatureVerifier(signing_secret=secret)
    try:
        ok = verifier.is_valid(
            body=body,
            timestamp=headers.get("x-slack-request-timestamp"),
            signature=headers.get("x-slack-signature"),
        )
    except ValueError:
        # non-numeric timestamp header
        ok = False
    if not ok:
        logger.warning("Rejected Slack request with invalid signature")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing Slack signature",
        )
