from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import add_months
from ..core.constants import BLOCK_DURATION_MONTHS
from ..core.enums import ComplianceStatus, ComplianceTier


@dataclass(frozen=True)
class BlockDecision:
    """State a member should be persisted with after a period is evaluated."""

    status: ComplianceStatus
    blocked_until: Optional[datetime] = None

    @property
    def is_block(self) -> bool:
        return self.status == ComplianceStatus.BLOCKED


def decide_transition(tier: ComplianceTier, *, now: datetime) -> BlockDecision:
    """Block for one calendar month on a blocked tier, otherwise (re)activate.

    The previous status is not an input: a member who is not in
    the blocked tier ends up active whether or not they were blocked before.
    """
    if tier == ComplianceTier.BLOCKED:
        return BlockDecision(
            status=ComplianceStatus.BLOCKED,
            blocked_until=add_months(now, BLOCK_DURATION_MONTHS),
        )
    return BlockDecision(status=ComplianceStatus.ACTIVE, blocked_until=None)


def manual_unblock() -> BlockDecision:
    return BlockDecision(status=ComplianceStatus.ACTIVE, blocked_until=None)
