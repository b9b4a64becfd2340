"""Threshold rules that turn nutrition totals into a score and advice."""

from collections.abc import Sequence

from meal_scan.domain.analysis import FoodItem, HealthScore, NutritionTotals

HIGH_CALORIES = 700
HIGH_FAT_G = 25
HIGH_SODIUM_MG = 800
HIGH_SUGAR_G = 30
GOOD_PROTEIN_G = 20

HEALTHY_MIN_SCORE = 80
AVERAGE_MIN_SCORE = 50

HEALTHY_COLOR = "#4CAF50"
AVERAGE_COLOR = "#FF9800"
RISKY_COLOR = "#F44336"

WARNING_CALORIES = "High calorie content."
WARNING_FAT = "High in fat."
WARNING_SODIUM = "High sodium content."
WARNING_SUGAR = "High in sugar."

RECOMMEND_NOT_FRIED = (
    "Consider replacing fried items with grilled or baked alternatives."
)
RECOMMEND_VEGETABLES = (
    "Adding a side of non-starchy vegetables like broccoli or spinach "
    "can add fiber and nutrients."
)
RECOMMEND_PROTEIN = (
    "To increase protein, consider adding beans, lentils, or a lean meat source."
)
RECOMMEND_LESS_SUGAR = (
    "Be mindful of sugary sauces or drinks. Water is a great alternative."
)
RECOMMEND_BALANCED = "This looks like a well-balanced meal! Great choice."

_RECOMMEND_FAT_G = 20
_RECOMMEND_CARBS_G = 80
_RECOMMEND_MIN_PROTEIN_G = 15
_RECOMMEND_SUGAR_G = 25


def calculate_health_score(totals: NutritionTotals) -> HealthScore:
    """Score a meal from 0 to 100 and assign its rating tier."""
    score = 100
    if totals.calories > HIGH_CALORIES:
        score -= 25
    if totals.fat_g > HIGH_FAT_G:
        score -= 20
    if totals.sodium_mg > HIGH_SODIUM_MG:
        score -= 20
    if totals.sugar_g > HIGH_SUGAR_G:
        score -= 20
    if totals.protein_g > GOOD_PROTEIN_G:
        score += 5
    return rate_score(score)


def rate_score(score: int) -> HealthScore:
    """Clamp a raw score to 0..100 and map it to a rating tier."""
    score = max(0, min(100, score))
    if score >= HEALTHY_MIN_SCORE:
        return HealthScore(rating="Healthy", color=HEALTHY_COLOR, score=score)
    if score >= AVERAGE_MIN_SCORE:
        return HealthScore(rating="Average", color=AVERAGE_COLOR, score=score)
    return HealthScore(rating="Risky", color=RISKY_COLOR, score=score)


def generate_warnings(totals: NutritionTotals) -> list[str]:
    """Return warnings for every exceeded threshold, in a fixed order."""
    warnings: list[str] = []
    if totals.calories > HIGH_CALORIES:
        warnings.append(WARNING_CALORIES)
    if totals.fat_g > HIGH_FAT_G:
        warnings.append(WARNING_FAT)
    if totals.sodium_mg > HIGH_SODIUM_MG:
        warnings.append(WARNING_SODIUM)
    if totals.sugar_g > HIGH_SUGAR_G:
        warnings.append(WARNING_SUGAR)
    return warnings


def generate_recommendations(
    totals: NutritionTotals, food_items: Sequence[FoodItem]
) -> list[str]:
    """Return meal suggestions; never empty."""
    recommendations: list[str] = []
    if totals.fat_g > _RECOMMEND_FAT_G:
        recommendations.append(RECOMMEND_NOT_FRIED)
    if totals.carbs_g > _RECOMMEND_CARBS_G and not _has_vegetables(food_items):
        recommendations.append(RECOMMEND_VEGETABLES)
    if totals.protein_g < _RECOMMEND_MIN_PROTEIN_G:
        recommendations.append(RECOMMEND_PROTEIN)
    if totals.sugar_g > _RECOMMEND_SUGAR_G:
        recommendations.append(RECOMMEND_LESS_SUGAR)
    if not recommendations:
        recommendations.append(RECOMMEND_BALANCED)
    return recommendations


def _has_vegetables(food_items: Sequence[FoodItem]) -> bool:
    for item in food_items:
        if not isinstance(item.name, str):
            raise TypeError("food item has no name")
        if "vegetable" in item.name.lower():
            return True
    return False
