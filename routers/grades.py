from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from config.settings import settings
from database.db import get_db
from services import gradebook_service
from utils.formatting import label, pct

router = APIRouter(prefix="/grades", tags=["grades"])

# ==========================================================
# [1] Assessment percentage of one student
# ==========================================================

# ✅ [PERCENTAGE] 100 * sum(score) / sum(max_score) over scored criteria
@router.get("/percentage")
def get_assessment_percentage(
    student_id: int = Query(..., description="Student ID"),
    assessment_id: int = Query(..., description="Assessment ID"),
    db: Session = Depends(get_db),
):
    value = gradebook_service.assessment_percentage(db, student_id, assessment_id)
    return {
        "success": True,
        "data": {
            "student_id": student_id,
            "assessment_id": assessment_id,
            "percentage": pct(value),
            "display": label(value),
            "graded": value is not None,
        },
    }

# ==========================================================
# [2] Weighted final grade
# ==========================================================

# ✅ [FINAL] category averages weighted by the class weight settings
# - 422 INVALID_WEIGHT_CONFIGURATION when the weights do not sum to 100
@router.get("/final/{class_id}/{student_id}")
def get_final_grade(class_id: int, student_id: int, db: Session = Depends(get_db)):
    result = gradebook_service.final_grade(db, student_id, class_id, epsilon=settings.WEIGHT_SUM_EPSILON)
    return {
        "success": True,
        "data": {
            "class_id": class_id,
            "student_id": student_id,
            "final_grade": pct(result.final_grade),
            "display": label(result.final_grade),
            "category_averages": {str(k): pct(v) for k, v in result.category_averages.items()},
            "uncategorized_assessment_ids": result.uncategorized_assessment_ids,
            "warnings": result.warnings,
        },
        "message": "Final grade computed with warnings" if result.warnings else "Final grade computed",
    }
