from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database.db import get_db
from schemas.analysis import AttendanceSummary
from services import gradebook_service
from services.gradebook.attendance_aggregator import month_range
from utils.formatting import label, pct

router = APIRouter(prefix="/attendance/report", tags=["attendance"])


def _student_row(summary: AttendanceSummary) -> dict:
    return {
        "student_id": summary.student_id,
        "name": summary.student_name,
        "external_id": summary.external_id,
        "present": summary.counts.present,
        "sick": summary.counts.sick,
        "excused_absence": summary.counts.excused_absence,
        "unexcused_absence": summary.counts.unexcused_absence,
        "total_meetings": summary.total_meetings,
        "attendance_rate": pct(summary.attendance_rate),
        "display": label(summary.attendance_rate),
    }

# ==========================================================
# [STUDENT] counts and rate in a date range
# ==========================================================
@router.get("/student/{student_id}")
def get_student_attendance(
    student_id: int,
    start: date = Query(..., description="First day (e.g. 2025-03-01)"),
    end: date = Query(..., description="Last day, inclusive (e.g. 2025-03-31)"),
    db: Session = Depends(get_db),
):
    summary = gradebook_service.student_attendance_summary(db, student_id, start, end)
    return {
        "success": True,
        "data": {"period": f"{start} ~ {end}", **_student_row(summary)},
    }

# ==========================================================
# [CLASS] monthly recap: status shares + one row per student
# ==========================================================
@router.get("/class/{class_id}")
def get_class_attendance(
    class_id: int,
    year: int = Query(..., ge=1900, le=9999),
    month: int = Query(..., ge=1, le=12),
    db: Session = Depends(get_db),
):
    start, end = month_range(year, month)
    report = gradebook_service.class_attendance_summary(db, class_id, start, end)
    return {
        "success": True,
        "data": {
            "class_id": class_id,
            "period": f"{start} ~ {end}",
            "overview": {
                "total_events": report.total_events,
                "statuses": [
                    {"status": s.status, "count": s.count, "percentage": pct(s.percentage), "display": label(s.percentage)}
                    for s in report.statuses
                ],
            },
            "students": [_student_row(s) for s in report.students],
        },
        "message": f"Attendance report for class {class_id} ({year}-{month:02d})",
    }
