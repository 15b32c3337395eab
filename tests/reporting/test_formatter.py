from datetime import date, datetime

import pytest

from cohort_tracker.attendance.model import AttendanceRecord, RosterEntry
from cohort_tracker.core.enums import AttendanceStatus
from cohort_tracker.core.exceptions import InvalidDateRange
from cohort_tracker.reporting.formatter import column_label, format_report
from tests.fakes import COURSE

LEGEND = ["Legend:", "✓ = Present", "L = Late", "E = Excused", "X = Absent", "(blank) = Not marked"]


def _rec(day: date, status: AttendanceStatus) -> AttendanceRecord:
    return AttendanceRecord(session_date=day, status=status, timestamp=datetime(2026, 1, 1))


def _jane(name: str = "Smith, Jane", team=1) -> RosterEntry:
    return RosterEntry(
        name=name,
        email="jane@example.com",
        team=team,
        attendance=(
            _rec(date(2026, 1, 20), AttendanceStatus.PRESENT),
            _rec(date(2026, 1, 21), AttendanceStatus.PRESENT_LATE),
            _rec(date(2026, 1, 22), AttendanceStatus.ABSENT),
        ),
    )


def test_week_one_report_layout():
    text = format_report([_jane()], date(2026, 1, 19), date(2026, 1, 25), COURSE)

    assert text == "\n".join(
        [
            "Student Name,Email,Team,mån 2026-01-19,tis 2026-01-20,ons 2026-01-21,tors 2026-01-22,fre 2026-01-23,"
            "Present,Late,Excused,Absent,Rate %",
            '"Smith, Jane",jane@example.com,1,,✓,L,X,,1,1,0,1,67%',
            "",
            "TOTALS,,,,,,,,1,1,0,1,67%",
            "",
        ]
        + LEGEND
    )


def test_embedded_quotes_are_doubled():
    text = format_report([_jane('Jane "JJ" Smith')], date(2026, 1, 20), date(2026, 1, 20), COURSE)

    assert '"Jane ""JJ"" Smith",jane@example.com,1,✓,1,0,0,0,100%' in text.splitlines()


def test_missing_team_is_rendered_as_dash():
    roster = [RosterEntry(name="Erik Larsson", email="erik@example.com")]

    text = format_report(roster, date(2026, 1, 20), date(2026, 1, 20), COURSE)

    assert "Erik Larsson,erik@example.com,-,,0,0,0,0,0%" in text.splitlines()


def test_weekend_dates_never_become_columns():
    header = format_report([], date(2026, 1, 23), date(2026, 1, 27), COURSE).splitlines()[0]

    assert "lör" not in header and "sön" not in header
    assert column_label(date(2026, 1, 26)) in header
    assert column_label(date(2026, 1, 27)) in header


def test_empty_roster_still_has_totals_and_legend():
    lines = format_report([], date(2026, 1, 27), date(2026, 1, 29), COURSE).splitlines()

    assert lines[1] == ""
    assert lines[2] == "TOTALS,,,,,,0,0,0,0,0%"
    assert lines[-len(LEGEND):] == LEGEND


def test_output_is_deterministic():
    roster = [_jane(), RosterEntry(name="Erik Larsson", email="erik@example.com", team=2)]

    first = format_report(roster, date(2026, 1, 19), date(2026, 2, 6), COURSE)
    second = format_report(roster, date(2026, 1, 19), date(2026, 2, 6), COURSE)

    assert first == second


def test_end_before_start_is_rejected():
    with pytest.raises(InvalidDateRange):
        format_report([_jane()], date(2026, 2, 1), date(2026, 1, 31), COURSE)
