"""Coaching Metrics Companion

Pipeline: MetricsAgent -> (optional) NutritionAgent, with tracing, an
injected profile store for saving the first measurements and an optional
progress log for follow-up check-ins.
"""
import logging
from typing import Optional, Dict, Any, List

from agents.metrics_agent import MetricsAgent
from agents.nutrition_agent import NutritionAgent
from core.errors import MetricsError
from core.observability import Tracer, error_fields, get_metrics_summary
from models.measurements import AnthropometricSample
from models.profile import ProgressEntry
from services.profile_service import InMemoryProfileService, check_user_id, get_profile_service
from services.progress_service import ProgressService, get_progress_service

logger = logging.getLogger(__name__)


class CoachSystem:
    """
    Orchestrates a body-metrics assessment for one member.

    Attributes:
        profiles: Profile store used to persist normalized measurements.
            None disables persistence entirely.
        progress: Progress log for check-ins. None disables record_progress.
        metrics: Deterministic metrics agent.
        nutrition: AI nutrition agent, created lazily on first use.
    """

    def __init__(self, profiles: Optional[InMemoryProfileService] = None,
                 nutrition: Optional[NutritionAgent] = None,
                 progress: Optional[ProgressService] = None):
        self.profiles = profiles
        self.progress = progress
        self.metrics = MetricsAgent()
        self._nutrition = nutrition

    @property
    def nutrition(self) -> NutritionAgent:
        if self._nutrition is None:
            self._nutrition = NutritionAgent()
        return self._nutrition

    def assess(self, sample: AnthropometricSample, user_id: str = None,
               with_ai: bool = False) -> Dict[str, Any]:
        """Run the assessment and return the enriched context.

        Args:
            sample: Raw form input.
            user_id: Member to save measurements for (first calculation only).
            with_ai: Also ask the AI gateway for a nutrition narrative.

        Returns:
            Context dict with "metrics", "errors" and, when requested,
            "ai_nutrition" / "ai_nutrition_source".
        """
        context = self._build_context(sample, user_id)

        with Tracer("Assessment") as trace:
            context = self._run_steps(context, user_id, with_ai)
            trace.rejected_fields = error_fields(context)

        logger.info(f"Assessment complete. Metrics: {get_metrics_summary()}")
        return context

    def _run_steps(self, context: Dict[str, Any], user_id: Optional[str],
                   with_ai: bool) -> Dict[str, Any]:
        context = self.metrics.run(context)

        metrics = context["metrics"]
        if metrics["bmi"] is None:
            # Nothing downstream may run on an undefined BMI
            return context

        if user_id and self.profiles is not None:
            context["profile_updated"] = self.profiles.save_measurements_if_absent(
                user_id, metrics["height_cm"], metrics["weight_kg"]
            )

        if with_ai:
            context = self.nutrition.run(context)
        return context

    def record_progress(self, user_id: str, sample: AnthropometricSample,
                        notes: str = None, photo_url: str = None) -> ProgressEntry:
        """
        Log a sample as a progress check-in, in the units the member typed.

        Raises:
            RuntimeError: no progress store was configured.
            InvalidInputError: bad user id, unit or measurement.
        """
        if self.progress is None:
            raise RuntimeError("CoachSystem has no progress store")

        with Tracer("ProgressCheckIn") as trace:
            try:
                return self.progress.add_entry(
                    user_id,
                    height=sample.height_value,
                    height_unit=sample.height_unit,
                    weight=sample.weight_value,
                    weight_unit=sample.weight_unit,
                    notes=notes,
                    photo_url=photo_url,
                )
            except MetricsError as e:
                trace.rejected_fields = [e.field or "unknown"]
                raise

    def weight_trend(self, user_id: str) -> List[Dict[str, Any]]:
        if self.progress is None:
            return []
        return self.progress.weight_series_kg(user_id)

    def _build_context(self, sample: AnthropometricSample, user_id: Optional[str]) -> Dict[str, Any]:
        profile = {}
        if user_id and self.profiles is not None:
            stored = self.profiles.get_profile(user_id)
            if stored:
                profile = {"user_id": stored.user_id, "gender": stored.gender}
        return {"sample": sample, "profile": profile, "errors": []}


def format_report(context: Dict[str, Any]) -> str:
    """Render an assessment context as plain text for the terminal."""
    lines = []
    for error in context.get("errors", []):
        lines.append(f"! {error['message']}")

    m = context.get("metrics") or {}
    if m.get("bmi") is not None:
        lines.append(f"BMI: {m['bmi']} ({m['bmi_category']})")
    if m.get("bmr") is not None:
        lines.append(f"BMR: {m['bmr']} calories/day")
    elif m.get("bmr_missing"):
        lines.append(f"BMR: needs {' and '.join(m['bmr_missing'])}")

    targets = m.get("daily_targets")
    if targets:
        lines.append(
            f"Daily targets: {targets['calories']} kcal | protein {targets['protein_g']}g | "
            f"carbs {targets['carbs_g']}g | fats {targets['fats_g']}g"
        )
        lines.extend(f"  - {tip}" for tip in targets["tips"])

    bucket = m.get("nutrition")
    if bucket:
        lines.append(f"Calories: {bucket['calories']} | Protein: {bucket['protein']}")
        lines.append(f"Carbs: {bucket['carbs']} | Fats: {bucket['fats']}")
        lines.extend(f"  * {meal['name']}" for meal in bucket["meals"])
        lines.append(bucket["advice"])

    plan = context.get("ai_nutrition")
    if plan:
        source = context.get("ai_nutrition_source", "model")
        lines.append(f"AI plan ({source}): {plan.get('dailyCalories')} kcal")
        for food in plan.get("recommendedFoods", []):
            lines.append(f"  {food.get('icon', '')} {food.get('name')}: {food.get('benefits')}")

    return "\n".join(lines)


def _ask(prompt: str, default: str = "") -> str:
    value = input(f"{prompt}{f' [{default}]' if default else ''}: ").strip()
    return value or default


def _ask_user_id() -> Optional[str]:
    while True:
        user_id = _ask("User id (optional)")
        if not user_id:
            return None
        try:
            return check_user_id(user_id)
        except MetricsError:
            print("! Use letters, digits, '.', '_', '-' or '@' only.")


def main():
    print("=== Coaching Metrics Companion ===")
    print("Type 'exit' at any prompt to quit.\n")

    system = CoachSystem(profiles=get_profile_service(), progress=get_progress_service())
    user_id = _ask_user_id()

    while True:
        height = _ask("Height")
        if height.lower() in ("exit", "quit"):
            break
        height_unit = _ask("Height unit (cm/inch)", "cm")
        weight = _ask("Weight")
        weight_unit = _ask("Weight unit (kg/lb)", "kg")
        age = _ask("Age (optional)")
        sex = _ask("Sex for BMR (male/female, optional)")
        with_ai = _ask("AI recommendations? (y/n)", "n").lower().startswith("y")

        sample = AnthropometricSample(
            height_value=height,
            height_unit=height_unit,
            weight_value=weight,
            weight_unit=weight_unit,
            age_years=age or None,
            biological_sex=sex or None,
        )
        context = system.assess(sample, user_id=user_id, with_ai=with_ai)
        print("\n" + format_report(context) + "\n")

        if not user_id or context["metrics"]["bmi"] is None:
            continue
        if _ask("Log this as a progress check-in? (y/n)", "n").lower().startswith("y"):
            notes = _ask("Notes (optional)")
            system.record_progress(user_id, sample, notes=notes or None)
            trend = system.weight_trend(user_id)
            print("Weight trend (kg): " + " -> ".join(str(point["weight"]) for point in trend) + "\n")


if __name__ == "__main__":
    main()
