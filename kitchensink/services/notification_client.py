# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""HTTP client that announces new members to an external webhook."""
from typing import Optional

import httpx

from kitchensink.core.config import settings
from kitchensink.core.logging import get_logger
from kitchensink.models.domain import Member

logger = get_logger(__name__)


class MemberNotificationClient:
    def __init__(self, webhook_url: Optional[str] = None, timeout: Optional[float] = None):
        self._url = settings.NOTIFICATION_WEBHOOK_URL if webhook_url is None else webhook_url
        self._timeout = settings.NOTIFICATION_TIMEOUT if timeout is None else timeout

    @property
    def enabled(self) -> bool:
        return bool(self._url)

    def on_member_registered(self, member: Member) -> None:
        if not self._url:
            logger.debug("No webhook configured, skipping notification for member id=%s", member.id)
            return
        try:
            with httpx.Client(timeout=self._timeout) as client:
                resp = client.post(
                    self._url,
                    json={
                        "event": "member.registered",
                        "member": member.model_dump(by_alias=True),
                    },
                )
            if resp.status_code >= 300:
                logger.warning("Webhook returned %s for member id=%s",
                               resp.status_code, member.id)
        except httpx.HTTPError as exc:
            logger.warning("Notification webhook unreachable: %s", exc)
