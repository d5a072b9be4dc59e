"""HTTP-level tests for the Slack slash command endpoint."""

import hashlib
import hmac
import time
from urllib.parse import urlencode

import pytest
from fastapi.testclient import TestClient

from barcode_bot.api.context import build_app_context
from barcode_bot.api.main import create_app

from conftest import ALLOWED_USER, DENIED_USER

SIGNING_SECRET = "test-signing-secret"


def _form(text, user=ALLOWED_USER, command="/barcode", response_url="https://hooks.slack.test/commands/42"):
    return {
        "command": command,
        "text": text,
        "user_id": user,
        "user_name": "tester",
        "team_id": "T1",
        "channel_id": "C1",
        "response_url": response_url,
    }


def _post(client, form, headers=None):
    body = urlencode(form)
    all_headers = {"Content-Type": "application/x-www-form-urlencoded"}
    all_headers.update(headers or {})
    return client.post("/slack/commands", content=body, headers=all_headers)


def _signed_headers(body, secret=SIGNING_SECRET, timestamp=None):
    ts = str(timestamp or int(time.time()))
    base = f"v0:{ts}:{body}".encode("utf-8")
    sig = "v0=" + hmac.new(secret.encode("utf-8"), base, hashlib.sha256).hexdigest()
    return {"X-Slack-Request-Timestamp": ts, "X-Slack-Signature": sig}


@pytest.fixture
def make_client(bot_config, fake_slack, fake_webhooks, renderer):
    def _make(config=None):
        cfg = config or bot_config
        app = create_app(
            cfg,
            context_factory=lambda c: build_app_context(
                c, slack_client=fake_slack, webhook_factory=fake_webhooks, renderer=renderer
            ),
        )
        return TestClient(app)

    return _make


def test_keep_alive_and_health(make_client):
    with make_client() as client:
        root = client.get("/")
        assert root.status_code == 200
        assert root.text == "Barcode bot is running!"

        health = client.get("/health").json()
        assert health["status"] == "ok"
        assert health["commands"] == ["/barcode", "/barcode-help"]


def test_barcode_command_inline_reply(make_client):
    with make_client() as client:
        resp = _post(client, _form("item_name:Coca Cola product_code:1234567890123 price:100"))

    assert resp.status_code == 200
    data = resp.json()
    assert data["response_type"] == "in_channel"
    assert "9112345678901230001000" in data["text"]
    blocks = data["attachments"][0]["blocks"]
    assert any(b["type"] == "image" for b in blocks)


def test_denied_user_gets_ephemeral_reply(make_client):
    with make_client() as client:
        data = _post(client, _form("item_name:X product_code:12345678 price:1", user=DENIED_USER)).json()
    assert data["response_type"] == "ephemeral"
    assert "role" in data["text"]


def test_invalid_input_gets_error_reply(make_client):
    with make_client() as client:
        data = _post(client, _form("item_name:X product_code:12345678 price:100000")).json()
    assert data["response_type"] == "ephemeral"
    assert data["text"] == "Error: price must be at most 99999"


def test_deferred_reply_goes_to_response_url(make_client, bot_config, fake_webhooks):
    bot_config.slack.defer_replies = True
    with make_client(bot_config) as client:
        resp = _post(client, _form("item_name:Tea product_code:12345678 price:350"))

    assert resp.status_code == 200
    assert resp.content == b""
    assert len(fake_webhooks.sent) == 1
    sent = fake_webhooks.sent[0]
    assert sent["url"] == "https://hooks.slack.test/commands/42"
    assert sent["body"]["response_type"] == "in_channel"
    assert "£3.50" in sent["body"]["text"]


def test_signed_request_accepted(make_client, bot_config, monkeypatch):
    monkeypatch.setenv("SLACK_SIGNING_SECRET", SIGNING_SECRET)
    bot_config.slack.verify_signatures = True
    body = urlencode(_form("help"))
    with make_client(bot_config) as client:
        resp = client.post(
            "/slack/commands",
            content=body,
            headers={"Content-Type": "application/x-www-form-urlencoded", **_signed_headers(body)},
        )
    assert resp.status_code == 200
    assert "help" in resp.json()["text"].lower()


def test_bad_signature_rejected(make_client, bot_config, monkeypatch):
    monkeypatch.setenv("SLACK_SIGNING_SECRET", SIGNING_SECRET)
    bot_config.slack.verify_signatures = True
    body = urlencode(_form("help"))
    with make_client(bot_config) as client:
        resp = client.post(
            "/slack/commands",
            content=body,
            headers={"Content-Type": "application/x-www-form-urlencoded", **_signed_headers(body, secret="wrong")},
        )
    assert resp.status_code == 401


def test_missing_signing_secret_is_a_server_error(make_client, bot_config, monkeypatch):
    monkeypatch.delenv("SLACK_SIGNING_SECRET", raising=False)
    bot_config.slack.verify_signatures = True
    with make_client(bot_config) as client:
        resp = _post(client, _form("help"))
    assert resp.status_code == 500


def test_context_is_closed_on_shutdown(make_client):
    client = make_client()
    with client:
        ctx = client.app.state.context
        assert ctx.closed is False
    assert ctx.closed is True
    assert client.app.state.context is None


@pytest.mark.parametrize("headers", [{}, {"X-Slack-Request-Timestamp": "soon", "X-Slack-Signature": "v0=abc"}])
def test_missing_or_garbled_signature_headers_rejected(make_client, bot_config, monkeypatch, headers):
    monkeypatch.setenv("SLACK_SIGNING_SECRET", SIGNING_SECRET)
    bot_config.slack.verify_signatures = True
    with make_client(bot_config) as client:
        resp = _post(client, _form("help"), headers=headers)
    assert resp.status_code == 401


def test_stale_timestamp_rejected(make_client, bot_config, monkeypatch):
    monkeypatch.setenv("SLACK_SIGNING_SECRET", SIGNING_SECRET)
    bot_config.slack.verify_signatures = True
    body = urlencode(_form("help"))
    with make_client(bot_config) as client:
        resp = _post(client, _form("help"), headers=_signed_headers(body, timestamp=int(time.time()) - 3600))
    assert resp.status_code == 401
