from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_program_time
from ..core.constants import DEFAULT_TIMEZONE
from ..core.enums import MarkedBy
from ..core.exceptions import AlreadyCheckedIn
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord


def evaluate_check_in(
    existing: Optional[AttendanceRecord],
    now: datetime,
    *,
    comment: Optional[str] = None,
    tz_name: str = DEFAULT_TIMEZONE,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> AttendanceRecord:
    """Decide the record a self check-in at ``now`` produces.

    ``existing`` is whatever is already stored for the caller's today. This
    function never reads the clock and never writes; appending the returned
    record exactly once is the caller's job.
    """

    if existing is not None:
        raise AlreadyCheckedIn(existing)

    local_now = to_program_time(now, tz_name)
    strategy = (factory or AttendanceStrategyFactory()).for_checkin(local_now=local_now)
    decision = strategy.decide_checkin(local_now=local_now)

    return AttendanceRecord(
        session_date=local_now.date(),
        status=decision.status,
        timestamp=now,
        comment=comment or None,
        marked_by=MarkedBy.SELF,
    )
