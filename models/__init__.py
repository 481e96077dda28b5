"""Coaching Data Models.

This module contains the dataclasses and enums shared across the system.

Models:
    AnthropometricSample: Raw height/weight/age/sex form input.
    BMIResult, BMRResult: Derived metrics.
    NutritionBucket: Static guidance for one BMI category.
    DailyTargets: Calorie and macro targets.
    UserProfile: Member profile holding normalized measurements.
    ProgressEntry: One progress check in the member's own units.
"""
from models.measurements import (
    HeightUnit,
    WeightUnit,
    BiologicalSex,
    BMICategory,
    AnthropometricSample,
    BMIResult,
    BMRResult,
    Meal,
    NutritionBucket,
    DailyTargets,
)
from models.profile import UserProfile, ProgressEntry

__all__ = [
    "HeightUnit",
    "WeightUnit",
    "BiologicalSex",
    "BMICategory",
    "AnthropometricSample",
    "BMIResult",
    "BMRResult",
    "Meal",
    "NutritionBucket",
    "DailyTargets",
    "UserProfile",
    "ProgressEntry",
]
