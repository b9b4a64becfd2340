"""Models for meal analysis results."""

from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

HealthRating = Literal["Healthy", "Average", "Risky"]


@dataclass(frozen=True)
class ImageSubmission:
    """Uploaded image bytes with their declared media type."""

    content: bytes
    media_type: str
    filename: str | None = None

    @property
    def size_kb(self) -> float:
        return len(self.content) / 1024


class FoodItem(BaseModel):
    """Single food item identified by the model, kept as the model wrote it."""

    model_config = ConfigDict(frozen=True, extra="allow")

    name: Any = None
    description: Any = None
    calories: Any = None
    protein_g: Any = None
    carbs_g: Any = None
    fat_g: Any = None


class NutritionTotals(BaseModel):
    """Estimated nutrition totals for the whole meal."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    sodium_mg: float
    sugar_g: float


class HealthScore(BaseModel):
    """Health score with its rating tier and display color."""

    model_config = ConfigDict(frozen=True)

    rating: HealthRating
    color: str
    score: int = Field(ge=0, le=100)


class AnalysisResult(BaseModel):
    """Complete analysis of one meal photo."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    food_items: list[FoodItem] = Field(alias="foodItems")
    nutrition: NutritionTotals
    health_score: HealthScore = Field(alias="healthScore")
    warnings: list[str]
    recommendations: list[str]
    timestamp: str
