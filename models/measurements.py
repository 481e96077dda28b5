from typing import Optional, Tuple, Union
from dataclasses import dataclass, field
from enum import Enum


class HeightUnit(str, Enum):
    CM = "cm"
    INCH = "inch"


class WeightUnit(str, Enum):
    KG = "kg"
    LB = "lb"


class BiologicalSex(str, Enum):
    """Sex used only for the BMR formula (not gender identity)."""
    MALE = "male"
    FEMALE = "female"


class BMICategory(str, Enum):
    UNDERWEIGHT = "Underweight"
    NORMAL = "Normal"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"


@dataclass
class AnthropometricSample:
    """Raw form input. Transient: only the normalized values ever get stored."""
    height_value: float
    weight_value: float
    height_unit: Union[HeightUnit, str] = HeightUnit.CM
    weight_unit: Union[WeightUnit, str] = WeightUnit.KG
    age_years: Optional[float] = None
    biological_sex: Optional[Union[BiologicalSex, str]] = None


@dataclass(frozen=True)
class BMIResult:
    value: float                # one decimal place
    category: BMICategory


@dataclass(frozen=True)
class BMRResult:
    value: int                  # kcal/day


@dataclass(frozen=True)
class Meal:
    name: str
    image_ref: str


@dataclass(frozen=True)
class NutritionBucket:
    """Static calorie/macro guidance for one BMI category."""
    category: BMICategory
    calorie_range: str
    protein_guideline: str
    carb_guideline: str
    fat_guideline: str
    sample_meals: Tuple[Meal, ...]
    advice: str

    def to_dict(self) -> dict:
        return {
            "category": self.category.value,
            "calories": self.calorie_range,
            "protein": self.protein_guideline,
            "carbs": self.carb_guideline,
            "fats": self.fat_guideline,
            "meals": [{"name": m.name, "image": m.image_ref} for m in self.sample_meals],
            "advice": self.advice,
        }


@dataclass(frozen=True)
class DailyTargets:
    """Calorie and macro targets derived from BMR and BMI category."""
    calories: int
    protein_g: int
    carbs_g: int
    fats_g: int
    tips: Tuple[str, ...] = field(default_factory=tuple)
