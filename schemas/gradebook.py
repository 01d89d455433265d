"""
schemas/gradebook.py

- In-memory input records consumed by the gradebook engine (services/gradebook).
- Field names follow the ORM columns so the store adapter can build records with
  `Record.model_validate(orm_row)` (from_attributes=True).
- GradebookSnapshot bundles every record of one class; engine tests build one by hand
  instead of querying a database.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class AttendanceStatus(str, Enum):
    PRESENT = "Present"
    SICK = "Sick"
    EXCUSED_ABSENCE = "ExcusedAbsence"
    UNEXCUSED_ABSENCE = "UnexcusedAbsence"


class _Record(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)


# ✅ roster
class ClassRecord(_Record):
    id: int
    class_name: str
    term: str = ""
    teacher_id: Optional[int] = None

class StudentRecord(_Record):
    id: int
    student_name: str
    external_id: Optional[str] = None
    class_id: int


# ✅ assessments and rubric lines
class AssessmentRecord(_Record):
    id: int
    class_id: int
    assessment_name: str
    assessment_date: date
    kind: Literal["formative", "summative"] = "formative"
    weight_category_id: Optional[int] = None

class CriterionRecord(_Record):
    id: int
    assessment_id: int
    description: str = ""
    max_score: float = Field(..., gt=0)
    order: int = 0

class CriterionScoreRecord(_Record):
    student_id: int
    criterion_id: int
    score: float = Field(..., ge=0)


# ✅ weights
class WeightCategoryRecord(_Record):
    id: int
    category_name: str

class WeightSettingRecord(_Record):
    # bounds are checked by validate_weights so a bad stored row surfaces as
    # InvalidWeightConfiguration instead of a ValidationError
    weight_category_id: int
    weight_percent: float


# ✅ attendance
class AttendanceEventRecord(_Record):
    student_id: int
    meeting_date: date
    status: AttendanceStatus


class GradebookSnapshot(BaseModel):
    """Every raw record the engine needs for one class, fetched up front."""

    class_info: ClassRecord
    students: List[StudentRecord] = []
    assessments: List[AssessmentRecord] = []
    criteria: List[CriterionRecord] = []
    scores: List[CriterionScoreRecord] = []
    weight_settings: List[WeightSettingRecord] = []
    attendance: List[AttendanceEventRecord] = []

    model_config = ConfigDict(frozen=True)

    def criteria_for(self, assessment_id: int) -> List[CriterionRecord]:
        return [c for c in self.criteria if c.assessment_id == assessment_id]

    def scores_for(self, assessment_id: int) -> List[CriterionScoreRecord]:
        criterion_ids = {c.id for c in self.criteria_for(assessment_id)}
        return [s for s in self.scores if s.criterion_id in criterion_ids]
