"""Pytest fixtures shared by the command, Slack and API tests."""

import pytest

from barcode_bot.integrations.clients.mocks.barcode_images import StaticBarcodeRenderer
from barcode_bot.utils.config_loader import BotConfig, PermissionsConfig, RenderingConfig, SlackConfig

ALLOWED_USER = "UALLOWED"
DENIED_USER = "UDENIED"
REQUIRED_ROLE = "Barcode Generators"


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeSlackClient:
    def __init__(self, groups=None):
        # group id -> (name, handle, members)
        self.groups = groups if groups is not None else {
            "S1": (REQUIRED_ROLE, "barcode-generators", [ALLOWED_USER]),
            "S2": ("Everyone Else", "everyone", [DENIED_USER]),
        }
        self.calls = []

    def usergroups_list(self, include_disabled: bool = False):
        self.calls.append("usergroups_list")
        return FakeResponse(
            {
                "usergroups": [
                    {"id": gid, "name": name, "handle": handle}
                    for gid, (name, handle, _members) in self.groups.items()
                ]
            }
        )

    def usergroups_users_list(self, usergroup: str):
        self.calls.append(f"usergroups_users_list:{usergroup}")
        _name, _handle, members = self.groups[usergroup]
        return FakeResponse({"users": list(members)})


class FakeWebhookResponse:
    def __init__(self, status_code=200, body="ok"):
        self.status_code = status_code
        self.body = body


class FakeWebhooks:
    """Stands in for slack_sdk.webhook.WebhookClient; records every delivery."""

    def __init__(self, status_code=200):
        self.status_code = status_code
        self.sent = []

    def __call__(self, url):
        outer = self

        class _Client:
            def send_dict(self, body):
                outer.sent.append({"url": url, "body": body})
                return FakeWebhookResponse(status_code=outer.status_code)

        return _Client()


@pytest.fixture
def fake_slack():
    return FakeSlackClient()


@pytest.fixture
def fake_webhooks():
    return FakeWebhooks()


@pytest.fixture
def renderer():
    return StaticBarcodeRenderer()


@pytest.fixture
def bot_config():
    """Config with signature checks off and the static renderer."""
    return BotConfig(
        slack=SlackConfig(verify_signatures=False),
        permissions=PermissionsConfig(required_role=REQUIRED_ROLE),
        rendering=RenderingConfig(provider="static"),
    )
