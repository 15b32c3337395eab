from __future__ import annotations

from typing import Optional

from ..core.enums import AttendanceStatus

# Click-to-cycle order on the admin grid; None means "no record".
STATUS_CYCLE: tuple[Optional[AttendanceStatus], ...] = (
    None,
    AttendanceStatus.PRESENT,
    AttendanceStatus.EXCUSED,
    AttendanceStatus.ABSENT,
)


def next_status(current: Optional[AttendanceStatus]) -> Optional[AttendanceStatus]:
    """Next status in the admin cycle.

    ``None`` means the click changes nothing: either the cycle wrapped past
    absent, or the current status (late, not-required, pending) is not part of it.
    """
    if current not in STATUS_CYCLE:
        return None
    idx = STATUS_CYCLE.index(current)
    return STATUS_CYCLE[(idx + 1) % len(STATUS_CYCLE)]
