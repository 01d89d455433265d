from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from services import gradebook_service
from utils.formatting import label

router = APIRouter(prefix="/exports", tags=["exports"])

# ==========================================================
# [SCORES] one row per student, one column per criterion
# - the last two columns are the raw total and the ScoreAggregator percentage
# ==========================================================
@router.get("/scores/{assessment_id}")
def export_scores(assessment_id: int, db: Session = Depends(get_db)):
    table = gradebook_service.score_export(db, assessment_id)
    rows = [
        [r.student_name, r.external_id or ""]
        + ["" if cell is None else cell for cell in r.criterion_scores]
        + [r.total_score, label(r.scaled_score)]
        for r in table.rows
    ]
    return {
        "success": True,
        "data": {
            "assessment_id": assessment_id,
            "header": table.header,
            "max_total_score": table.max_total_score,
            "rows": rows,
        },
    }
