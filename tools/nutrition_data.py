"""Static nutrition guidance keyed by BMI category.

Read-only reference data. Buckets are frozen dataclasses and the mapping is a
MappingProxyType, so nothing can mutate them at runtime.
"""
from types import MappingProxyType

from models.measurements import BMICategory, Meal, NutritionBucket

_IMG = "https://images.unsplash.com/photo-{}?w=400&h=300&fit=crop"


NUTRITION_BUCKETS = MappingProxyType({
    BMICategory.UNDERWEIGHT: NutritionBucket(
        category=BMICategory.UNDERWEIGHT,
        calorie_range="2,500-3,000",
        protein_guideline="1.6-2.0g per kg body weight",
        carb_guideline="50-60% of daily calories",
        fat_guideline="25-30% of daily calories",
        sample_meals=(
            Meal("Protein-rich breakfast with whole grains", _IMG.format("1533089860892-a7c6f0a88666")),
            Meal("Calorie-dense snacks (nuts, dried fruits)", _IMG.format("1599599810769-bcde5a160d32")),
            Meal("Lean meats with complex carbs for lunch", _IMG.format("1546069901-ba9599a7e63c")),
            Meal("Healthy fats from avocados and olive oil", _IMG.format("1623428187969-5da2dcea5ebf")),
            Meal("Protein shake post-workout", _IMG.format("1622597467836-f3285f2131b8")),
        ),
        advice=(
            "Focus on nutrient-dense, calorie-rich foods to gain weight healthily. "
            "Eat frequent meals and include strength training."
        ),
    ),
    BMICategory.NORMAL: NutritionBucket(
        category=BMICategory.NORMAL,
        calorie_range="2,000-2,500",
        protein_guideline="1.2-1.6g per kg body weight",
        carb_guideline="45-55% of daily calories",
        fat_guideline="20-30% of daily calories",
        sample_meals=(
            Meal("Balanced breakfast with protein and fiber", _IMG.format("1525351484163-7529414344d8")),
            Meal("Colorful salads with lean protein", _IMG.format("1512621776951-a57141f2eefd")),
            Meal("Whole grains and vegetables", _IMG.format("1490645935967-10de6ba17061")),
            Meal("Healthy snacks like fruits and yogurt", _IMG.format("1488477181946-6428a0291777")),
            Meal("Lean protein with steamed vegetables", _IMG.format("1604909052743-94e838986d24")),
        ),
        advice=(
            "Maintain your healthy weight with balanced nutrition and regular exercise. "
            "Focus on whole foods and portion control."
        ),
    ),
    BMICategory.OVERWEIGHT: NutritionBucket(
        category=BMICategory.OVERWEIGHT,
        calorie_range="1,500-2,000",
        protein_guideline="1.6-2.0g per kg body weight",
        carb_guideline="40-45% of daily calories",
        fat_guideline="20-25% of daily calories",
        sample_meals=(
            Meal("High-protein, low-carb breakfast", _IMG.format("1525351484163-7529414344d8")),
            Meal("Vegetable-heavy meals with lean protein", _IMG.format("1546069901-ba9599a7e63c")),
            Meal("Portion-controlled whole grains", _IMG.format("1586201375761-83865001e31c")),
            Meal("Low-calorie, high-volume snacks", _IMG.format("1610348725531-843dff563e2c")),
            Meal("Grilled fish or chicken with vegetables", _IMG.format("1467003909585-2f8a72700288")),
        ),
        advice=(
            "Create a moderate calorie deficit through portion control and increased "
            "physical activity. Avoid processed foods and sugary drinks."
        ),
    ),
    BMICategory.OBESE: NutritionBucket(
        category=BMICategory.OBESE,
        calorie_range="1,200-1,800",
        protein_guideline="1.8-2.2g per kg body weight",
        carb_guideline="35-40% of daily calories",
        fat_guideline="20-25% of daily calories",
        sample_meals=(
            Meal("Protein-rich breakfast (eggs, Greek yogurt)", _IMG.format("1525351484163-7529414344d8")),
            Meal("Large portions of non-starchy vegetables", _IMG.format("1540420773420-3366772f4999")),
            Meal("Lean proteins (chicken breast, fish, tofu)", _IMG.format("1432139555190-58524dae6a55")),
            Meal("Limited whole grains, focus on vegetables", _IMG.format("1512621776951-a57141f2eefd")),
            Meal("Meal prep for portion control", _IMG.format("1547592166-23ac45744acd")),
        ),
        advice=(
            "Consult with a healthcare provider for a personalized weight loss plan. "
            "Focus on sustainable lifestyle changes, not quick fixes."
        ),
    ),
})


# Multiplier applied to BMR, plus coaching tips, per category
CALORIE_ADJUSTMENTS = MappingProxyType({
    BMICategory.UNDERWEIGHT: 1.2,
    BMICategory.NORMAL: 1.1,
    BMICategory.OVERWEIGHT: 0.9,
    BMICategory.OBESE: 0.8,
})

COACHING_TIPS = MappingProxyType({
    BMICategory.UNDERWEIGHT: (
        "Focus on nutrient-dense, calorie-rich foods",
        "Eat frequent, smaller meals throughout the day",
        "Include healthy fats like avocados, nuts, and olive oil",
        "Consider strength training to build muscle mass",
    ),
    BMICategory.NORMAL: (
        "Maintain a balanced diet with variety",
        "Stay consistent with your eating schedule",
        "Keep up with regular physical activity",
        "Focus on whole, unprocessed foods",
    ),
    BMICategory.OVERWEIGHT: (
        "Create a moderate calorie deficit (250-500 calories)",
        "Increase protein intake to preserve muscle mass",
        "Focus on high-fiber foods to stay fuller longer",
        "Incorporate regular cardiovascular exercise",
    ),
    BMICategory.OBESE: (
        "Consult with your coach for a structured plan",
        "Focus on sustainable lifestyle changes",
        "Prioritize whole foods and eliminate processed foods",
        "Start with low-impact exercises and gradually increase intensity",
    ),
})
