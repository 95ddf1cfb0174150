from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime

from ..common.datetime_utils import now_local
from ..compliance.period import period_for
from ..compliance.service import ComplianceService
from ..core.enums import ComplianceStatus
from ..members.repository import MemberRepository
from .sender import PushSender
from .templates import TIER_TEMPLATES, workout_created

logger = logging.getLogger(__name__)


@dataclass
class NotificationSummary:
    notified: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "notified": len(self.notified),
            "members": list(self.notified),
            "failed": list(self.failed),
        }


class NotificationDispatcher:
    def __init__(self, members: MemberRepository, compliance: ComplianceService, sender: PushSender):
        self._members = members
        self._compliance = compliance
        self._sender = sender

    def notify_low_attendance(self, *, now: datetime | None = None) -> NotificationSummary:
        """Mid-period warnings for active members in the warning or blocked tier.

        The tier is recomputed from scratch on every call. Members without a
        single visit this period are not messaged.
        """
        now = now or now_local()
        period = period_for(now)
        summary = NotificationSummary()

        for member in self._members.list_all(status=ComplianceStatus.ACTIVE):
            try:
                result = self._compliance.evaluate_member(member, period)
                template = TIER_TEMPLATES.get(result.tier)
                if template is None or result.actual_visits == 0:
                    continue

                self._sender.send(template(member.member_id, result))
                logger.info("Sent %s notification to %s", result.tier.value, member.full_name)
                summary.notified.append(member.full_name)
            except Exception:
                logger.exception("Error notifying member %s", member.member_id)
                summary.failed.append(member.full_name)

        logger.info("Notifications sent to %d members", len(summary.notified))
        return summary

    def notify_workout_created(self, member_id: int, workout_title: str) -> None:
        try:
            self._sender.send(workout_created(int(member_id), workout_title))
        except Exception:
            # workout is already persisted
            logger.exception("Error sending workout notification to member %s", member_id)
