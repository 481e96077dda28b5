import math

from core.errors import InvalidInputError
from models.measurements import DailyTargets
from tools.metrics_engine import bmi_category, round_half_up
from tools.nutrition_data import CALORIE_ADJUSTMENTS, COACHING_TIPS

# Share of daily calories and kcal per gram
PROTEIN_SHARE, PROTEIN_KCAL_PER_G = 0.3, 4
CARB_SHARE, CARB_KCAL_PER_G = 0.4, 4
FAT_SHARE, FAT_KCAL_PER_G = 0.3, 9


def compute_daily_targets(bmi: float, bmr: float) -> DailyTargets:
    """
    Daily calorie and macro targets from BMR, adjusted by BMI category.

    Calories = BMR x category factor (1.2 underweight, 1.1 normal,
    0.9 overweight, 0.8 obese). Macros split 30/40/30 protein/carbs/fats.
    """
    if bmi is None or math.isnan(bmi) or bmi < 0:
        raise InvalidInputError(f"BMI cannot be negative, got {bmi}", field="bmi")
    if bmr is None or bmr <= 0:
        raise InvalidInputError(f"BMR must be positive, got {bmr}", field="bmr")

    category = bmi_category(bmi)
    calories = int(round_half_up(bmr * CALORIE_ADJUSTMENTS[category]))

    return DailyTargets(
        calories=calories,
        protein_g=int(round_half_up(calories * PROTEIN_SHARE / PROTEIN_KCAL_PER_G)),
        carbs_g=int(round_half_up(calories * CARB_SHARE / CARB_KCAL_PER_G)),
        fats_g=int(round_half_up(calories * FAT_SHARE / FAT_KCAL_PER_G)),
        tips=COACHING_TIPS[category],
    )
