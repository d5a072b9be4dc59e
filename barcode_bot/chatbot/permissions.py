"""
Role gate for bot commands.
"""

import logging
from typing import Callable

logger = logging.getLogger(__name__)


class RoleChecker:
    """Allow or deny a caller based on membership of one group/role.

    ``membership_lookup(user_id, role)`` answers the membership question; on
    Slack that is ``SlackChatService.user_in_group``. Lookup failures deny.
    """

    def __init__(self, required_role: str, membership_lookup: Callable[[str, str], bool], enabled: bool = True):
        self.required_role = required_role
        self.membership_lookup = membership_lookup
        self.enabled = enabled

    def has_required_role(self, user_id: str) -> bool:
        if not self.enabled:
            return True
        if not user_id:
            return False
        try:
            allowed = bool(self.membership_lookup(user_id, self.required_role))
        except Exception as e:
            logger.error("Role lookup failed for user=%s role=%s: %s", user_id, self.required_role, e)
            return False
        if not allowed:
            logger.info("Denied user=%s: missing role %s", user_id, self.required_role)
        return allowed
