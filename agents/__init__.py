"""Coaching Agent Module.

Agents:
    MetricsAgent: Deterministic BMI/BMR/nutrition-bucket calculations.
    NutritionAgent: AI nutrition recommendations with a default fallback.
"""
from agents.metrics_agent import MetricsAgent
from agents.nutrition_agent import NutritionAgent

__all__ = [
    "MetricsAgent",
    "NutritionAgent",
]
