"""
AttendanceAggregator: raw attendance events -> per-status counts and attendance rate.

The rate denominator is the number of recorded meetings in range, not calendar days.
"""

import calendar
import logging
from collections import Counter
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from schemas.analysis import AttendanceCounts, AttendanceSummary, ClassAttendanceSummary, StatusShare
from schemas.gradebook import AttendanceEventRecord, AttendanceStatus, StudentRecord

logger = logging.getLogger(__name__)

# ✅ status -> AttendanceCounts field
STATUS_FIELDS = {
    AttendanceStatus.PRESENT: "present",
    AttendanceStatus.SICK: "sick",
    AttendanceStatus.EXCUSED_ABSENCE: "excused_absence",
    AttendanceStatus.UNEXCUSED_ABSENCE: "unexcused_absence",
}


def month_range(year: int, month: int) -> Tuple[date, date]:
    """Inclusive first and last day of a calendar month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def _events_in_range(events: Iterable[AttendanceEventRecord], start: date, end: date) -> Dict[Tuple[int, date], AttendanceStatus]:
    # one event per (student, date); the last row wins
    latest = {}
    for e in events:
        if start <= e.meeting_date <= end:
            latest[(e.student_id, e.meeting_date)] = e.status
    return latest


def count_statuses(statuses: Iterable[AttendanceStatus]) -> AttendanceCounts:
    status_counter = Counter(AttendanceStatus(s) for s in statuses)
    return AttendanceCounts(**{field: status_counter.get(status, 0) for status, field in STATUS_FIELDS.items()})


def attendance_rate(counts: AttendanceCounts) -> Optional[float]:
    """100 * present / recorded meetings; None when nothing was recorded."""
    if counts.total == 0:
        return None
    return 100 * counts.present / counts.total


def _student_row(student: StudentRecord, statuses: Iterable[AttendanceStatus]) -> AttendanceSummary:
    counts = count_statuses(statuses)
    return AttendanceSummary(
        student_id=student.id,
        student_name=student.student_name,
        external_id=student.external_id,
        counts=counts,
        total_meetings=counts.total,
        attendance_rate=attendance_rate(counts),
    )


def summarize_student(
    student: StudentRecord,
    events: Iterable[AttendanceEventRecord],
    start: date,
    end: date,
) -> AttendanceSummary:
    in_range = _events_in_range((e for e in events if e.student_id == student.id), start, end)
    return _student_row(student, in_range.values())


def summarize_class(
    class_id: int,
    students: Iterable[StudentRecord],
    events: Iterable[AttendanceEventRecord],
    start: date,
    end: date,
) -> ClassAttendanceSummary:
    """
    Class-wide status shares plus one row per rostered student.

    Each status share is a percentage of the class-wide event total. Events of
    students who are not on the roster are ignored.
    """
    students = list(students)
    roster = {s.id for s in students}

    by_student: Dict[int, List[AttendanceStatus]] = {}
    for (student_id, _day), status in _events_in_range(events, start, end).items():
        if student_id in roster:
            by_student.setdefault(student_id, []).append(status)

    counts = count_statuses(status for statuses in by_student.values() for status in statuses)
    total = counts.total
    shares: List[StatusShare] = []
    for status, field in STATUS_FIELDS.items():
        count = getattr(counts, field)
        shares.append(StatusShare(
            status=status.value,
            count=count,
            percentage=(100 * count / total) if total else None,
        ))

    rows = [_student_row(s, by_student.get(s.id, [])) for s in students]
    logger.debug(f"summarize_class: class={class_id}, {total} events, {len(rows)} students")
    return ClassAttendanceSummary(
        class_id=class_id, start=start, end=end, total_events=total, statuses=shares, students=rows
    )
