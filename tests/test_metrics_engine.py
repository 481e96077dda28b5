"""Unit tests for the deterministic metrics engine.

Run with: pytest tests/ -v
"""
import pytest

from core.errors import InvalidInputError, UnsupportedSexError
from models.measurements import BMICategory, BiologicalSex
from tools.metrics_engine import (
    normalize_height,
    normalize_weight,
    compute_bmi,
    compute_bmr,
    recommend_nutrition,
    round_half_up,
)
from tools.calorie_targets import compute_daily_targets
from tools.nutrition_data import NUTRITION_BUCKETS


class TestUnitNormalization:
    """Height/weight conversion happens before any formula."""

    def test_centimeters_unchanged(self):
        assert normalize_height(170, "cm") == 170

    def test_inches_to_centimeters(self):
        assert normalize_height(70, "inch") == pytest.approx(177.8)

    @pytest.mark.parametrize("inches", [1, 5.5, 63, 70.25, 100])
    def test_inch_matches_converted_cm(self, inches):
        assert normalize_height(inches, "inch") == pytest.approx(
            normalize_height(inches * 2.54, "cm"), abs=1e-9
        )

    def test_pounds_to_kilograms(self):
        assert normalize_weight(154, "lb") == pytest.approx(69.853168)
        assert normalize_weight(70, "kg") == 70

    def test_non_positive_values_rejected(self):
        with pytest.raises(InvalidInputError):
            normalize_height(0, "cm")
        with pytest.raises(InvalidInputError):
            normalize_weight(-5, "lb")

    def test_unknown_unit_rejected(self):
        with pytest.raises(InvalidInputError) as exc:
            normalize_height(6, "ft")
        assert exc.value.field == "height_unit"


class TestBMI:
    """BMI value, rounding and category boundaries."""

    def test_reference_adult(self):
        result = compute_bmi(170, 70)
        assert result.value == 24.2
        assert result.category == BMICategory.NORMAL

    def test_matches_formula(self):
        for height_cm, weight_kg in [(150, 45), (182, 95), (199.5, 130.2), (120, 20)]:
            expected = round_half_up(weight_kg / (height_cm / 100) ** 2, 1)
            assert compute_bmi(height_cm, weight_kg).value == expected

    def test_boundaries_are_lower_inclusive(self):
        # 200 cm -> 4.0 m^2, so weight / 4 is the exact raw BMI
        assert compute_bmi(200, 73).category == BMICategory.UNDERWEIGHT
        assert compute_bmi(200, 74).category == BMICategory.NORMAL
        assert compute_bmi(200, 100).category == BMICategory.OVERWEIGHT
        assert compute_bmi(200, 120).category == BMICategory.OBESE

    def test_half_up_rounding(self):
        # 73 / 4 = 18.25 exactly
        assert compute_bmi(200, 73).value == 18.3

    def test_invalid_inputs(self):
        with pytest.raises(InvalidInputError):
            compute_bmi(0, 70)
        with pytest.raises(InvalidInputError):
            compute_bmi(170, 0)
        with pytest.raises(InvalidInputError):
            compute_bmi("tall", 70)
        with pytest.raises(InvalidInputError):
            compute_bmi(None, 70)

    def test_non_finite_inputs(self):
        for height_cm, weight_kg in [(170, float("inf")), (float("inf"), 70),
                                     (170, float("nan")), ("inf", 70)]:
            with pytest.raises(InvalidInputError):
                compute_bmi(height_cm, weight_kg)

    def test_vanishing_height(self):
        # (1e-162 m)^2 underflows to zero
        with pytest.raises(InvalidInputError) as exc:
            compute_bmi(1e-160, 70)
        assert exc.value.field == "height"

    def test_ratio_too_large(self):
        with pytest.raises(InvalidInputError):
            compute_bmi(1e-150, 1e10)

    def test_huge_height_gives_zero(self):
        result = compute_bmi(1e200, 70)
        assert result.value == 0.0
        assert result.category == BMICategory.UNDERWEIGHT


class TestBMR:
    """Harris-Benedict BMR, male and female branches only."""

    def test_male(self):
        # 88.362 + 937.79 + 815.83 - 141.925 = 1700.057
        assert compute_bmr(170, 70, 25, "male").value == 1700

    def test_female(self):
        # 447.593 + 554.82 + 511.17 - 129.9 = 1383.683
        assert compute_bmr(165, 60, 30, "female").value == 1384

    def test_accepts_enum_and_any_case(self):
        assert compute_bmr(170, 70, 25, BiologicalSex.MALE).value == 1700
        assert compute_bmr(170, 70, 25, " Male ").value == 1700

    def test_male_higher_than_female(self):
        assert compute_bmr(175, 70, 30, "male").value > compute_bmr(175, 70, 30, "female").value

    def test_unsupported_sex(self):
        for sex in ("other", "", None):
            with pytest.raises(UnsupportedSexError):
                compute_bmr(170, 70, 25, sex)

    def test_non_positive_age(self):
        with pytest.raises(InvalidInputError) as exc:
            compute_bmr(170, 70, 0, "male")
        assert exc.value.field == "age"

    def test_non_finite_inputs(self):
        with pytest.raises(InvalidInputError) as exc:
            compute_bmr(170, float("inf"), 30, "male")
        assert exc.value.field == "weight"
        with pytest.raises(InvalidInputError):
            compute_bmr(170, 70, float("nan"), "female")

    def test_formula_overflow(self):
        with pytest.raises(InvalidInputError) as exc:
            compute_bmr(1e308, 1e308, 30, "male")
        assert exc.value.field == "bmr"


class TestNutritionBuckets:
    """Static lookup keyed by BMI category."""

    def test_bucket_per_category(self):
        assert recommend_nutrition(17.0).category == BMICategory.UNDERWEIGHT
        assert recommend_nutrition(18.5).category == BMICategory.NORMAL
        assert recommend_nutrition(25.0).calorie_range == "1,500-2,000"
        assert recommend_nutrition(45.0).calorie_range == "1,200-1,800"

    def test_zero_is_underweight(self):
        assert recommend_nutrition(0) is NUTRITION_BUCKETS[BMICategory.UNDERWEIGHT]

    def test_negative_rejected(self):
        with pytest.raises(InvalidInputError):
            recommend_nutrition(-0.1)
        with pytest.raises(InvalidInputError):
            recommend_nutrition(float("nan"))

    def test_repeated_lookup_is_identical(self):
        first = recommend_nutrition(26.1)
        for _ in range(1000):
            assert recommend_nutrition(26.1) is first
        assert first.sample_meals == NUTRITION_BUCKETS[BMICategory.OVERWEIGHT].sample_meals

    def test_buckets_are_read_only(self):
        bucket = recommend_nutrition(22)
        with pytest.raises(AttributeError):
            bucket.advice = "changed"
        with pytest.raises(TypeError):
            NUTRITION_BUCKETS[BMICategory.NORMAL] = bucket

    def test_every_bucket_has_five_meals(self):
        for bucket in NUTRITION_BUCKETS.values():
            assert len(bucket.sample_meals) == 5
            assert all(meal.image_ref.startswith("https://") for meal in bucket.sample_meals)


class TestDailyTargets:
    """Calorie/macro targets derived from BMR and BMI category."""

    def test_overweight_deficit(self):
        targets = compute_daily_targets(26.1, 1830)
        assert targets.calories == 1647
        assert (targets.protein_g, targets.carbs_g, targets.fats_g) == (124, 165, 55)
        assert len(targets.tips) == 4

    def test_underweight_surplus(self):
        assert compute_daily_targets(17.0, 1500).calories == 1800

    def test_invalid(self):
        with pytest.raises(InvalidInputError):
            compute_daily_targets(22, 0)
        with pytest.raises(InvalidInputError):
            compute_daily_targets(-1, 1500)


class TestEndToEnd:
    """175 cm / 80 kg / 30 y / male."""

    def test_reference_member(self):
        bmi = compute_bmi(normalize_height(175, "cm"), normalize_weight(80, "kg"))
        assert bmi.value == 26.1
        assert bmi.category == BMICategory.OVERWEIGHT

        # 88.362 + 1071.76 + 839.825 - 170.31 = 1829.637
        assert compute_bmr(175, 80, 30, "male").value == 1830

        bucket = recommend_nutrition(bmi.value)
        assert bucket.calorie_range == "1,500-2,000"
        assert bucket.advice.startswith("Create a moderate calorie deficit")
