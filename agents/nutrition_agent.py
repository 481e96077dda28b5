"""NutritionAgent - AI Nutrition Recommendations

LLM-powered agent (Gemini) that turns a BMI and an optional gender hint into
a richer nutrition narrative: calorie target, macros in grams, recommended
foods, foods to avoid and meal suggestions.

Design Decisions:
    1. Runs AFTER MetricsAgent and only when a BMI exists.
    2. The model output is passed through verbatim. Parsing is best-effort:
       the first {...} span is extracted and decoded.
    3. Any failure (no API key, gateway error, unparseable reply) yields the
       same hardcoded default plan so the screen always has something to show.
"""
from typing import Dict, Any, Optional
import json
import logging
import re

from config.llm import get_gemini_model
from core.observability import trace_agent
from tools.metrics_engine import bmi_category

logger = logging.getLogger(__name__)

_JSON_SPAN = re.compile(r"\{[\s\S]*\}")
_IMG = "https://images.unsplash.com/photo-{}?w=400&h=300&fit=crop"

# Gender-specific nutrient hints, only for the two values the prompt knows
_GENDER_HINTS = {
    "female": (
        "Higher iron requirements, especially during menstruation",
        "Calcium needs for bone health",
        "Folate requirements",
    ),
    "male": (
        "Higher protein needs for muscle maintenance",
        "Higher calorie baseline",
        "Zinc for testosterone production",
    ),
}

_CATEGORY_LABELS = {
    "Underweight": "underweight",
    "Normal": "normal weight",
    "Overweight": "overweight",
    "Obese": "obese",
}


class NutritionAgent:
    """Asks Gemini for a BMI-based nutrition plan, falling back to a default."""

    def __init__(self, model=None):
        self.model = model if model is not None else get_gemini_model()

    @trace_agent
    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        metrics = context.get("metrics") or {}
        bmi = metrics.get("bmi")

        if bmi is None:
            logger.warning("NutritionAgent: No BMI available, skipping AI recommendations")
            context.setdefault("errors", []).append(
                {"field": "bmi", "message": "Please calculate your BMI first."}
            )
            return context

        gender = (context.get("profile") or {}).get("gender")

        if not self.model:
            return self._fallback(context, bmi)

        prompt = self._build_prompt(bmi, gender)

        try:
            response = self.model.generate_content(
                prompt,
                generation_config={"response_mime_type": "application/json"}
            )
            text = response.text
        except Exception as e:
            logger.error(f"NutritionAgent error: {e}", exc_info=True)
            return self._fallback(context, bmi)

        plan = self.parse_response(text)
        if plan is None:
            logger.error(f"NutritionAgent: Failed to parse AI response: {(text or '')[:200]!r}")
            return self._fallback(context, bmi)

        context["ai_nutrition"] = plan
        context["ai_nutrition_source"] = "model"
        logger.info(f"NutritionAgent: Generated plan for BMI {bmi} ({gender or 'no gender hint'})")
        return context

    @staticmethod
    def parse_response(text: Optional[str]) -> Optional[Dict[str, Any]]:
        """Extract the first JSON object from a model reply, or None."""
        if not text:
            return None
        text = text.replace("```json", "").replace("```", "").strip()
        match = _JSON_SPAN.search(text)
        if not match:
            return None
        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError:
            return None
        return data if isinstance(data, dict) else None

    def _build_prompt(self, bmi: float, gender: Optional[str]) -> str:
        category = _CATEGORY_LABELS[bmi_category(bmi).value]
        gender = (gender or "").strip().lower() or None

        gender_context = ""
        if gender:
            hints = _GENDER_HINTS.get(gender)
            gender_context = f"The user is {gender}."
            if hints:
                gender_context += " Consider gender-specific nutritional needs such as:\n"
                gender_context += "\n".join(f"- {hint}" for hint in hints)

        who = f" for a {gender} individual" if gender else ""

        return f"""Based on a BMI of {bmi} ({category}){who}, provide personalized nutrition recommendations.
{gender_context}

Include:
1. Daily calorie target (adjusted for gender if specified)
2. Macronutrient breakdown (protein, carbs, fats in grams)
3. List of 5 recommended foods with their nutritional benefits and a relevant emoji icon
4. 3 foods to avoid or limit
5. 3 healthy meal suggestions with descriptions

Format the response as JSON with this structure:
{{
  "dailyCalories": number,
  "macros": {{ "protein": number, "carbs": number, "fats": number }},
  "recommendedFoods": [{{ "name": string, "benefits": string, "icon": string, "imageUrl": string }}],
  "avoidFoods": [string],
  "mealSuggestions": [{{ "name": string, "description": string, "imageUrl": string }}]
}}

For imageUrl fields, use real Unsplash image URLs in this format: {_IMG.format('XXXXXXXX')}
Examples:
- Chicken: {_IMG.format('1598103442097-8b74394b95c6')}
- Salmon: {_IMG.format('1519708227418-c8fd9a32b7a2')}
- Broccoli: {_IMG.format('1459411552884-841db9b3cc2a')}
- Quinoa: {_IMG.format('1586201375761-83865001e31c')}
- Greek Yogurt: {_IMG.format('1488477181946-6428a0291777')}
- Salad: {_IMG.format('1512621776951-a57141f2eefd')}"""

    def _fallback(self, context: Dict[str, Any], bmi: float) -> Dict[str, Any]:
        context["ai_nutrition"] = default_plan(bmi)
        context["ai_nutrition_source"] = "fallback"
        return context


def default_plan(bmi: float) -> Dict[str, Any]:
    """The fixed plan shown whenever the model cannot be used."""
    return {
        "dailyCalories": 2000 if bmi < 25 else 1800,
        "macros": {"protein": 100, "carbs": 200, "fats": 65},
        "recommendedFoods": [
            {"name": "Lean Chicken", "benefits": "High protein, low fat", "icon": "🍗", "imageUrl": _IMG.format("1598103442097-8b74394b95c6")},
            {"name": "Quinoa", "benefits": "Complete protein, fiber-rich", "icon": "🌾", "imageUrl": _IMG.format("1586201375761-83865001e31c")},
            {"name": "Broccoli", "benefits": "Vitamins, fiber, low calories", "icon": "🥦", "imageUrl": _IMG.format("1459411552884-841db9b3cc2a")},
            {"name": "Salmon", "benefits": "Omega-3, protein", "icon": "🐟", "imageUrl": _IMG.format("1519708227418-c8fd9a32b7a2")},
            {"name": "Greek Yogurt", "benefits": "Probiotics, protein", "icon": "🥛", "imageUrl": _IMG.format("1488477181946-6428a0291777")},
        ],
        "avoidFoods": ["Processed snacks", "Sugary drinks", "Fried foods"],
        "mealSuggestions": [
            {"name": "Grilled Salmon Bowl", "description": "Salmon with quinoa and roasted vegetables", "imageUrl": _IMG.format("1546069901-ba9599a7e63c")},
            {"name": "Greek Yogurt Parfait", "description": "Yogurt with berries and nuts", "imageUrl": _IMG.format("1488477181946-6428a0291777")},
            {"name": "Veggie Stir Fry", "description": "Mixed vegetables with lean protein", "imageUrl": _IMG.format("1512621776951-a57141f2eefd")},
        ],
    }
