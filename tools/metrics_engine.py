import math
from typing import Union

from core.errors import InvalidInputError, UnsupportedSexError
from models.measurements import (
    HeightUnit,
    WeightUnit,
    BiologicalSex,
    BMICategory,
    BMIResult,
    BMRResult,
    NutritionBucket,
)
from tools.nutrition_data import NUTRITION_BUCKETS

CM_PER_INCH = 2.54
KG_PER_LB = 0.453592

# Lower-inclusive category boundaries: [0, 18.5), [18.5, 25), [25, 30), [30, inf)
UNDERWEIGHT_LIMIT = 18.5
NORMAL_LIMIT = 25.0
OVERWEIGHT_LIMIT = 30.0


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like a calculator does: .5 always goes up."""
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def _positive(value, field: str) -> float:
    # Type coercion, then range validation
    try:
        value = float(value)
    except (ValueError, TypeError):
        raise InvalidInputError(f"{field} must be a number, got {value!r}", field=field)
    if not math.isfinite(value) or value <= 0:
        raise InvalidInputError(f"{field} must be a positive finite number, got {value}", field=field)
    return value


def normalize_height(value: float, unit: Union[HeightUnit, str] = HeightUnit.CM) -> float:
    """
    Convert a height to centimeters.

    unit: 'cm' or 'inch'. Inches are multiplied by 2.54.
    """
    value = _positive(value, "height")
    try:
        unit = HeightUnit(unit)
    except ValueError:
        raise InvalidInputError(f"Unknown height unit {unit!r}", field="height_unit")

    if unit is HeightUnit.INCH:
        return value * CM_PER_INCH
    return value


def normalize_weight(value: float, unit: Union[WeightUnit, str] = WeightUnit.KG) -> float:
    """
    Convert a weight to kilograms.

    unit: 'kg' or 'lb'. Pounds are multiplied by 0.453592.
    """
    value = _positive(value, "weight")
    try:
        unit = WeightUnit(unit)
    except ValueError:
        raise InvalidInputError(f"Unknown weight unit {unit!r}", field="weight_unit")

    if unit is WeightUnit.LB:
        return value * KG_PER_LB
    return value


def bmi_category(bmi: float) -> BMICategory:
    """
    Classify BMI using standard WHO categories for adults.
    """
    if bmi < UNDERWEIGHT_LIMIT:
        return BMICategory.UNDERWEIGHT
    if bmi < NORMAL_LIMIT:
        return BMICategory.NORMAL
    if bmi < OVERWEIGHT_LIMIT:
        return BMICategory.OVERWEIGHT
    return BMICategory.OBESE


def compute_bmi(height_cm: float, weight_kg: float) -> BMIResult:
    """
    Calculate Body Mass Index (BMI).

    Returns:
        BMIResult with the value rounded half-up to one decimal and the
        category of that rounded value.

    Raises:
        InvalidInputError: height or weight is not a positive finite number,
            or the ratio is too extreme to represent.
    """
    height_cm = _positive(height_cm, "height")
    weight_kg = _positive(weight_kg, "weight")

    height_m = height_cm / 100.0
    area = height_m * height_m
    if area == 0:
        raise InvalidInputError(f"height is too small to compute BMI, got {height_cm}", field="height")
    raw = weight_kg / area
    # Scaled by 10 for the one-decimal rounding
    if not math.isfinite(raw * 10):
        raise InvalidInputError(f"BMI is out of range for {height_cm}cm and {weight_kg}kg", field="weight")
    value = round_half_up(raw, 1)
    return BMIResult(value=value, category=bmi_category(value))


def parse_sex(sex: Union[BiologicalSex, str, None]) -> BiologicalSex:
    """Accept 'male'/'female' in any case; anything else is unsupported."""
    if isinstance(sex, BiologicalSex):
        return sex
    try:
        return BiologicalSex((sex or "").strip().lower())
    except (ValueError, AttributeError):
        raise UnsupportedSexError(sex)


def compute_bmr(
    height_cm: float,
    weight_kg: float,
    age_years: float,
    sex: Union[BiologicalSex, str],
) -> BMRResult:
    """
    Harris-Benedict BMR formula (revised).

    male:   88.362 + 13.397*kg + 4.799*cm - 5.677*age
    female: 447.593 + 9.247*kg + 3.098*cm - 4.330*age

    There is deliberately no third branch; callers must supply male or
    female for this estimate.
    """
    height_cm = _positive(height_cm, "height")
    weight_kg = _positive(weight_kg, "weight")
    age_years = _positive(age_years, "age")
    sex = parse_sex(sex)

    if sex is BiologicalSex.MALE:
        bmr = 88.362 + 13.397 * weight_kg + 4.799 * height_cm - 5.677 * age_years
    else:
        bmr = 447.593 + 9.247 * weight_kg + 3.098 * height_cm - 4.330 * age_years

    if not math.isfinite(bmr):
        raise InvalidInputError(f"BMR is out of range, got {bmr}", field="bmr")
    return BMRResult(value=int(round_half_up(bmr)))


def recommend_nutrition(bmi: float) -> NutritionBucket:
    """
    Look up the static nutrition bucket for a BMI value.

    Same boundaries as compute_bmi. Returns the shared immutable bucket.
    """
    try:
        bmi = float(bmi)
    except (ValueError, TypeError):
        raise InvalidInputError(f"BMI must be a number, got {bmi!r}", field="bmi")
    if math.isnan(bmi) or bmi < 0:
        raise InvalidInputError(f"BMI cannot be negative, got {bmi}", field="bmi")

    return NUTRITION_BUCKETS[bmi_category(bmi)]
