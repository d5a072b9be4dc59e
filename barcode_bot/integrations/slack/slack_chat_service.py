import logging
import threading
import time
from typing import Any, Callable, Dict, FrozenSet, Optional, Tuple

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError
from slack_sdk.webhook import WebhookClient

logger = logging.getLogger(__name__)


class SlackChatService:
    def __init__(
        self,
        token: str,
        client: WebClient = None,
        webhook_factory: Callable[[str], Any] = None,
        cache_ttl_seconds: float = 300.0,
    ):
        self.client = client or WebClient(token=token)
        self.webhook_factory = webhook_factory or WebhookClient
        self.cache_ttl_seconds = cache_ttl_seconds
        self._group_cache: Dict[str, Tuple[float, FrozenSet[str]]] = {}
        # Slash commands are handled on threadpool workers.
        self._cache_lock = threading.Lock()

    def _cached(self, key: str) -> Optional[FrozenSet[str]]:
        with self._cache_lock:
            entry = self._group_cache.get(key)
            if not entry:
                return None
            stored_at, members = entry
            if time.monotonic() - stored_at > self.cache_ttl_seconds:
                self._group_cache.pop(key, None)
                return None
            return members

    def _find_usergroup_id(self, group: str) -> Optional[str]:
        wanted = group.strip().lstrip("@").lower()
        response = self.client.usergroups_list(include_disabled=False)
        for usergroup in response.data.get("usergroups", []):
            name = (usergroup.get("name") or "").lower()
            handle = (usergroup.get("handle") or "").lower()
            if wanted in (name, handle):
                return usergroup.get("id")
        return None

    def group_members(self, group: str) -> FrozenSet[str]:
        """
        Return the user IDs in a Slack user group, matched by name or handle.
        Unknown groups have no members.
        """
        key = group.strip().lower()
        cached = self._cached(key)
        if cached is not None:
            return cached
        try:
            group_id = self._find_usergroup_id(group)
            if not group_id:
                logger.warning("Slack user group not found: %s", group)
                members: FrozenSet[str] = frozenset()
            else:
                response = self.client.usergroups_users_list(usergroup=group_id)
                members = frozenset(str(u) for u in response.data.get("users", []))
        except SlackApiError as e:
            raise Exception(f"Slack API error: {self._extract_slack_error(e)}")
        with self._cache_lock:
            self._group_cache[key] = (time.monotonic(), members)
        return members

    def user_in_group(self, user_id: str, group: str) -> bool:
        if not user_id:
            return False
        return user_id in self.group_members(group)

    def send_response(self, response_url: str, reply: Dict[str, Any]) -> Dict[str, Any]:
        """
        Deliver a slash-command reply through its response_url.
        Used for deferred replies, after the command has been acknowledged.
        """
        if not response_url:
            raise ValueError("response_url is required for deferred replies")
        webhook = self.webhook_factory(response_url)
        response = webhook.send_dict(reply)
        status_code = getattr(response, "status_code", None)
        if status_code != 200:
            body = getattr(response, "body", "")
            raise Exception(f"Slack response_url error: status={status_code} body={body}")
        return {"ok": True, "status_code": status_code}

    @staticmethod
    def _extract_slack_error(exc: Exception) -> str:
        response = getattr(exc, "response", None)
        if isinstance(response, dict):
            return str(response.get("error", "unknown_error"))
        try:
            return str(response["error"])  # type: ignore[index]
        except Exception:
            return str(exc)
