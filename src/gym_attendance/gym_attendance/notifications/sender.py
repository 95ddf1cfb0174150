from __future__ import annotations

import logging
from typing import Protocol

from .model import PushMessage

logger = logging.getLogger(__name__)


class PushSender(Protocol):
    """Delivery seam. Web-push delivery lives outside this package."""

    def send(self, message: PushMessage) -> None:
        raise NotImplementedError


class LoggingPushSender(PushSender):
    def send(self, message: PushMessage) -> None:
        logger.info("Push to member %s: %s - %s", message.member_id, message.title, message.body)
