"""Coaching Tools Module.

This module contains the deterministic body-metrics calculations.

Tools:
    normalize_height: Convert cm/inch to centimeters.
    normalize_weight: Convert kg/lb to kilograms.
    compute_bmi: Calculate Body Mass Index with its category.
    compute_bmr: Calculate Basal Metabolic Rate (Harris-Benedict).
    recommend_nutrition: Look up the nutrition bucket for a BMI.
    compute_daily_targets: Calorie and macro targets from BMI + BMR.
"""
from tools.metrics_engine import (
    normalize_height,
    normalize_weight,
    bmi_category,
    compute_bmi,
    compute_bmr,
    recommend_nutrition,
)
from tools.calorie_targets import compute_daily_targets

__all__ = [
    "normalize_height",
    "normalize_weight",
    "bmi_category",
    "compute_bmi",
    "compute_bmr",
    "recommend_nutrition",
    "compute_daily_targets",
]
