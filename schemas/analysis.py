"""
schemas/analysis.py

- Results produced by the gradebook engine.
- `None` in any percentage field means the aggregate is undefined (zero denominator);
  it is never folded into 0 here. Routers decide how to render it.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


# =========================================================
# Weighted final grade
# =========================================================

class FinalGradeResult(BaseModel):
    student_id: int
    class_id: int
    final_grade: float                                        # 0..100
    category_averages: Dict[int, float] = {}                  # weight_category_id -> mean percentage
    warnings: List[str] = []                                  # unredeemed / unweighted categories
    uncategorized_assessment_ids: List[int] = []              # excluded from the final grade


# =========================================================
# Class statistics
# =========================================================

class StudentAverage(BaseModel):
    student_id: int
    student_name: str = ""
    average: float
    assessment_count: int = Field(..., ge=1)
    rank: Optional[int] = None

class ClassStatistics(BaseModel):
    average: Optional[float] = None
    highest: Optional[float] = None
    lowest: Optional[float] = None
    ranked_students: List[StudentAverage] = []
    unscored_student_ids: List[int] = []                      # excluded from every figure above
    distribution: Dict[str, int] = {}                         # "0-59" ... "90-100" -> student count
    below_threshold: List[StudentAverage] = []


# =========================================================
# Attendance
# =========================================================

class AttendanceCounts(BaseModel):
    present: int = 0
    sick: int = 0
    excused_absence: int = 0
    unexcused_absence: int = 0

    @property
    def total(self) -> int:
        return self.present + self.sick + self.excused_absence + self.unexcused_absence

class AttendanceSummary(BaseModel):
    student_id: int
    student_name: str = ""
    external_id: Optional[str] = None
    counts: AttendanceCounts
    total_meetings: int
    attendance_rate: Optional[float] = None

class StatusShare(BaseModel):
    status: str
    count: int
    percentage: Optional[float] = None

class ClassAttendanceSummary(BaseModel):
    class_id: int
    start: date
    end: date
    total_events: int
    statuses: List[StatusShare]
    students: List[AttendanceSummary] = []


# =========================================================
# Trend / comparative / relational
# =========================================================

class TrendPoint(BaseModel):
    assessment_id: int
    assessment_name: str
    assessment_date: date
    percentage: float

class ClassAverageEntry(BaseModel):
    class_id: int
    class_name: str
    average: Optional[float] = None
    scored_students: int = 0

class ComparativeResult(BaseModel):
    class_a: ClassAverageEntry
    class_b: ClassAverageEntry

    def as_pair(self):
        return self.class_a.average, self.class_b.average

class ScorePair(BaseModel):
    student_id: int
    x: float
    y: float


# =========================================================
# Score export table
# =========================================================

class ScoreExportRow(BaseModel):
    student_id: int
    student_name: str
    external_id: Optional[str] = None
    criterion_scores: List[Optional[float]]                   # one cell per criterion, None = not graded
    total_score: float
    scaled_score: Optional[float] = None                      # ScoreAggregator percentage

class ScoreExportTable(BaseModel):
    assessment_id: int
    header: List[str]
    max_total_score: float
    rows: List[ScoreExportRow]
