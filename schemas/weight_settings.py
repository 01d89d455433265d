from pydantic import BaseModel, Field
from typing import List

# ✅ one row of the weight settings form (PUT request)
class WeightSettingIn(BaseModel):
    weight_category_id: int                                  # weight category ID
    weight_percent: float = Field(..., ge=0, le=100)         # share of the final grade (%)

# ✅ PUT /weights/{class_id} body: the full set for the class, replaced at once
class WeightSettingsUpdate(BaseModel):
    settings: List[WeightSettingIn]

