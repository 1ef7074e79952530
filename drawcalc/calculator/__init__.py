"""Prize settlement: digit matching, tier pricing, settings and orchestration."""

from .digits import count_matches, get_value_at_index
from .engine import DrawCalculator
from .pricing import calculate_prize_for_matches, prize_fraction
from .settings import DrawSettings, validate_draw_settings
from .store import DrawSettingsStore
from .types import Draw, DrawCalculation, DrawPayout, PickResult
from .user_number import derive_user_random_number, normalize_address

__all__ = [
    "Draw",
    "DrawCalculation",
    "DrawCalculator",
    "DrawPayout",
    "DrawSettings",
    "DrawSettingsStore",
    "PickResult",
    "calculate_prize_for_matches",
    "count_matches",
    "derive_user_random_number",
    "get_value_at_index",
    "normalize_address",
    "prize_fraction",
    "validate_draw_settings",
]
