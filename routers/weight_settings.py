from math import fsum

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from config.settings import settings
from database.db import get_db
from schemas.gradebook import WeightSettingRecord
from schemas.weight_settings import WeightSettingsUpdate
from services import gradebook_service
from services import gradebook_store as store
from services.gradebook.errors import InvalidWeightConfiguration
from services.gradebook.weighted_grade import validate_weights

router = APIRouter(prefix="/weights", tags=["weight settings"])


def _rows(db: Session, records) -> list:
    names = {c.id: c.category_name for c in store.weight_categories(db)}
    return [
        {
            "weight_category_id": r.weight_category_id,
            "category_name": names.get(r.weight_category_id),
            "weight_percent": r.weight_percent,
        }
        for r in records
    ]

# ==========================================================
# [READ] current weights and whether a final grade can be computed
# ==========================================================
@router.get("/{class_id}")
def read_weight_settings(class_id: int, db: Session = Depends(get_db)):
    store.get_class(db, class_id)
    records = store.weight_settings(db, class_id)
    try:
        validate_weights(records, class_id=class_id, epsilon=settings.WEIGHT_SUM_EPSILON)
        valid, problem = True, None
    except InvalidWeightConfiguration as e:
        valid, problem = False, str(e)
    return {
        "success": True,
        "data": {
            "class_id": class_id,
            "settings": _rows(db, records),
            "total": fsum(r.weight_percent for r in records),
            "valid": valid,
            "problem": problem,
        },
    }

# ==========================================================
# [UPDATE] replace the full set; rejected unless it sums to 100
# ==========================================================
@router.put("/{class_id}")
def update_weight_settings(class_id: int, body: WeightSettingsUpdate, db: Session = Depends(get_db)):
    rows = [WeightSettingRecord(**row.model_dump()) for row in body.settings]
    saved = gradebook_service.save_weight_settings(db, class_id, rows, epsilon=settings.WEIGHT_SUM_EPSILON)
    return {
        "success": True,
        "data": {"class_id": class_id, "settings": _rows(db, saved)},
        "message": "Weight settings saved",
    }
