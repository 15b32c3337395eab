from datetime import date, datetime

from cohort_tracker.attendance.model import AttendanceRecord, RosterEntry
from cohort_tracker.core.enums import AttendanceStatus
from cohort_tracker.reporting.aggregator import compute_cohort_stats, compute_stats, round_half_up

WEEK_ONE = [date(2026, 1, 20), date(2026, 1, 21), date(2026, 1, 22)]


def _rec(day: date, status: AttendanceStatus) -> AttendanceRecord:
    return AttendanceRecord(session_date=day, status=status, timestamp=datetime(2026, 1, 1))


def test_unmarked_day_counts_against_rate_only():
    records = [_rec(date(2026, 1, 20), AttendanceStatus.PRESENT), _rec(date(2026, 1, 21), AttendanceStatus.PRESENT_LATE)]

    stats = compute_stats(records, WEEK_ONE)

    assert (stats.total, stats.present, stats.late, stats.excused, stats.absent) == (3, 1, 1, 0, 0)
    assert stats.rate == 67


def test_excused_and_absent_are_tallied_but_not_attended():
    records = [_rec(date(2026, 1, 20), AttendanceStatus.EXCUSED), _rec(date(2026, 1, 21), AttendanceStatus.ABSENT)]

    stats = compute_stats(records, WEEK_ONE)

    assert stats.excused == 1
    assert stats.absent == 1
    assert stats.rate == 0


def test_records_on_unscheduled_days_are_ignored():
    records = [
        _rec(date(2026, 1, 19), AttendanceStatus.PRESENT),
        _rec(date(2026, 1, 23), AttendanceStatus.PRESENT),
        _rec(date(2026, 1, 20), AttendanceStatus.PRESENT),
    ]

    stats = compute_stats(records, WEEK_ONE)

    assert stats.present == 1
    assert stats.rate == 33


def test_no_scheduled_days_gives_zero_rate():
    stats = compute_stats([_rec(date(2026, 1, 20), AttendanceStatus.PRESENT)], [])

    assert stats.total == 0
    assert stats.rate == 0


def test_record_order_does_not_matter():
    records = [
        _rec(date(2026, 1, 22), AttendanceStatus.ABSENT),
        _rec(date(2026, 1, 20), AttendanceStatus.PRESENT),
        _rec(date(2026, 1, 21), AttendanceStatus.PRESENT_LATE),
    ]

    assert compute_stats(records, WEEK_ONE) == compute_stats(list(reversed(records)), WEEK_ONE)


def test_rate_rounds_half_up():
    days = [date(2026, 1, 20 + i) for i in range(8)]

    stats = compute_stats([_rec(days[0], AttendanceStatus.PRESENT)], days)

    assert stats.rate == 13
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3


def test_cohort_totals_and_mean_rate():
    roster = [
        RosterEntry(
            name="Jane Smith",
            email="jane@example.com",
            attendance=(_rec(date(2026, 1, 20), AttendanceStatus.PRESENT), _rec(date(2026, 1, 21), AttendanceStatus.PRESENT_LATE)),
        ),
        RosterEntry(name="Erik Larsson", email="erik@example.com", attendance=(_rec(date(2026, 1, 20), AttendanceStatus.ABSENT),)),
    ]

    cohort = compute_cohort_stats(roster, WEEK_ONE)

    assert [s.stats.rate for s in cohort.students] == [67, 0]
    assert (cohort.present, cohort.late, cohort.excused, cohort.absent) == (1, 1, 0, 1)
    assert cohort.rate == 34  # mean of 67 and 0 is 33.5


def test_empty_roster_gives_zero_totals():
    cohort = compute_cohort_stats([], WEEK_ONE)

    assert cohort.students == []
    assert (cohort.present, cohort.late, cohort.excused, cohort.absent, cohort.rate) == (0, 0, 0, 0, 0)
