from typing import Optional

from config.settings import settings
from services.gradebook.errors import format_percentage, round_percentage


# ✅ JSON value: rounded, None stays None (undefined aggregate)
def pct(value: Optional[float]) -> Optional[float]:
    return round_percentage(value, settings.PERCENT_DECIMALS)


# ✅ display label: "78.00" or "—", never "0.00" for an undefined aggregate
def label(value: Optional[float]) -> str:
    return format_percentage(value, settings.PERCENT_DECIMALS, settings.UNDEFINED_DISPLAY)
