"""MetricsAgent - Body Metrics Calculation

Deterministic computation (no LLM). Turns the raw form sample into
normalized measurements, BMI, BMR, the nutrition bucket and daily targets.

Validation failures from the engine are never allowed to escape into the
caller's flow: they are logged, turned into a user-facing message under
context["errors"], and every value that depends on the failed one is left
as None. In particular the nutrition lookup never runs without a BMI.
"""
from typing import Dict, Any, Optional
import logging

from core.errors import MetricsError
from core.observability import trace_agent, log_context
from models.measurements import AnthropometricSample
from tools.metrics_engine import (
    normalize_height,
    normalize_weight,
    compute_bmi,
    compute_bmr,
    recommend_nutrition,
)
from tools.calorie_targets import compute_daily_targets

logger = logging.getLogger(__name__)


class MetricsAgent:
    """
    MetricsAgent - Deterministic Body Metrics

    Reads context["sample"] (an AnthropometricSample) and writes
    context["metrics"]. BMR is only estimated when both age and a
    biological sex are present.
    """

    @trace_agent
    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        sample: Optional[AnthropometricSample] = context.get("sample")
        errors = context.setdefault("errors", [])
        snapshot = self._empty_snapshot()
        context["metrics"] = snapshot

        if sample is None:
            errors.append({"field": "sample", "message": "Enter your height and weight."})
            return context

        # Normalization must precede every formula
        try:
            height_cm = normalize_height(sample.height_value, sample.height_unit)
            weight_kg = normalize_weight(sample.weight_value, sample.weight_unit)
            bmi = compute_bmi(height_cm, weight_kg)
        except MetricsError as e:
            self._record(errors, e)
            return context

        bucket = recommend_nutrition(bmi.value)
        snapshot.update({
            "height_cm": round(height_cm, 1),
            "weight_kg": round(weight_kg, 1),
            "bmi": bmi.value,
            "bmi_category": bmi.category.value,
            "nutrition": bucket.to_dict(),
        })

        if sample.age_years is None or sample.biological_sex is None:
            snapshot["bmr_missing"] = [
                name for name, value in (("age", sample.age_years), ("sex", sample.biological_sex))
                if value is None
            ]
        else:
            try:
                bmr = compute_bmr(height_cm, weight_kg, sample.age_years, sample.biological_sex)
                # Extreme ages can push the linear formula to zero or below
                targets = compute_daily_targets(bmi.value, bmr.value)
            except MetricsError as e:
                self._record(errors, e)
            else:
                snapshot["bmr"] = bmr.value
                snapshot["daily_targets"] = {
                    "calories": targets.calories,
                    "protein_g": targets.protein_g,
                    "carbs_g": targets.carbs_g,
                    "fats_g": targets.fats_g,
                    "tips": list(targets.tips),
                }

        log_context(context, "MetricsAgent:done")
        return context

    @staticmethod
    def _record(errors, error: MetricsError):
        logger.warning(f"MetricsAgent rejected input: {error}")
        errors.append({
            "field": error.field,
            "message": error.user_message,
        })

    @staticmethod
    def _empty_snapshot() -> Dict[str, Any]:
        return {
            "height_cm": None,
            "weight_kg": None,
            "bmi": None,
            "bmi_category": None,
            "bmr": None,
            "nutrition": None,
            "daily_targets": None,
        }
