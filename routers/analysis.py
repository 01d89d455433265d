from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from config.settings import settings
from database.db import get_db
from services import gradebook_service
from utils.formatting import label, pct

router = APIRouter(prefix="/analysis", tags=["statistical analysis"])

# ==========================================================
# [DESCRIPTIVE] class average / highest / lowest / ranking
# ==========================================================
@router.get("/descriptive/{class_id}")
def get_descriptive_analysis(
    class_id: int,
    assessment_ids: Optional[List[int]] = Query(None, description="Restrict to these assessments (default: all)"),
    db: Session = Depends(get_db),
):
    stats = gradebook_service.class_statistics(
        db, class_id, assessment_ids, passing_threshold=settings.PASSING_THRESHOLD
    )
    ranked = [
        {
            "rank": s.rank,
            "student_id": s.student_id,
            "name": s.student_name,
            "average": pct(s.average),
            "assessment_count": s.assessment_count,
        }
        for s in stats.ranked_students
    ]
    return {
        "success": True,
        "data": {
            "class_id": class_id,
            "overview": {
                "class_avg": pct(stats.average),
                "highest": pct(stats.highest),
                "lowest": pct(stats.lowest),
                "display": {
                    "class_avg": label(stats.average),
                    "highest": label(stats.highest),
                    "lowest": label(stats.lowest),
                },
                "need_guidance": len(stats.below_threshold),
            },
            "distribution": stats.distribution,
            "alerts": {
                "threshold": settings.PASSING_THRESHOLD,
                "below_threshold": [s.student_id for s in stats.below_threshold],
            },
            "students": ranked,
            "unscored_student_ids": stats.unscored_student_ids,
        },
    }

# ==========================================================
# [TREND] one student's percentages in date order
# ==========================================================
@router.get("/trend/{student_id}")
def get_student_trend(
    student_id: int,
    assessment_ids: Optional[List[int]] = Query(None),
    db: Session = Depends(get_db),
):
    series = gradebook_service.trend(db, student_id, assessment_ids)
    return {
        "success": True,
        "data": {
            "student_id": student_id,
            "points": [
                {
                    "assessment_id": p.assessment_id,
                    "name": p.assessment_name,
                    "date": p.assessment_date.isoformat(),
                    "percentage": pct(p.percentage),
                }
                for p in series.points
            ],
        },
    }

# ==========================================================
# [COMPARATIVE] two class averages side by side
# ==========================================================
@router.get("/comparative")
def get_comparative_analysis(
    class_id_a: int = Query(...),
    class_id_b: int = Query(...),
    db: Session = Depends(get_db),
):
    result = gradebook_service.comparative_averages(db, class_id_a, class_id_b)
    return {
        "success": True,
        "data": [
            {
                "class_id": entry.class_id,
                "name": entry.class_name,
                "average_score": pct(entry.average),
                "display": label(entry.average),
                "scored_students": entry.scored_students,
            }
            for entry in (result.class_a, result.class_b)
        ],
    }

# ==========================================================
# [RELATIONAL] paired raw scores of two criteria
# ==========================================================
@router.get("/relational/{assessment_id}")
def get_relational_analysis(
    assessment_id: int,
    criterion_id_a: int = Query(..., description="Criterion plotted on the X axis"),
    criterion_id_b: int = Query(..., description="Criterion plotted on the Y axis"),
    db: Session = Depends(get_db),
):
    pairs = gradebook_service.relational_pairs(db, assessment_id, criterion_id_a, criterion_id_b)
    return {
        "success": True,
        "data": {
            "assessment_id": assessment_id,
            "criterion_id_a": criterion_id_a,
            "criterion_id_b": criterion_id_b,
            "points": [{"student_id": p.student_id, "x": p.x, "y": p.y} for p in pairs],
        },
    }
