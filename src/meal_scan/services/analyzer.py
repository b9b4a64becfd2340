"""Meal photo analysis using a multimodal LLM."""

import base64
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from meal_scan.domain.analysis import AnalysisResult, FoodItem, NutritionTotals
from meal_scan.domain.errors import AnalysisFailure
from meal_scan.services.extraction import extract_json
from meal_scan.services.scoring import (
    calculate_health_score,
    generate_recommendations,
    generate_warnings,
)

ANALYSIS_PROMPT = """\
Analyze the food items in this image. Provide a detailed nutritional analysis.
Your response MUST be a valid JSON object and nothing else. Do not wrap it in markdown.

The JSON object should have the following structure:
{
  "foodItems": [
    {
      "name": "Identified Food Item",
      "description": "A brief description of the item.",
      "calories": <estimated_calories_for_item>,
      "protein_g": <estimated_protein_for_item>,
      "carbs_g": <estimated_carbs_for_item>,
      "fat_g": <estimated_fat_for_item>
    }
  ],
  "totalNutrition": {
    "calories": <total_calories_for_the_meal>,
    "protein_g": <total_protein_grams>,
    "carbs_g": <total_carbohydrates_grams>,
    "fat_g": <total_fat_grams>,
    "sodium_mg": <total_sodium_milligrams>,
    "sugar_g": <total_sugar_grams>
  }
}

Provide your best estimate for a typical serving size shown in the image.
"""

MISSING_DATA_MESSAGE = "The AI model's analysis was missing nutrition data."

_logger = logging.getLogger(__name__)


class VisionClient(Protocol):
    """Interface for a multimodal LLM that answers about one image."""

    async def generate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        prompt: str,
    ) -> str:
        """Return the model's text reply for the prompt and image."""


@dataclass(frozen=True)
class FoodAnalyzer:
    """Runs a meal photo through the model and scores the reply."""

    client: VisionClient
    model: str
    reasoning_effort: str | None = None
    store: bool = False

    async def analyze(self, image_bytes: bytes, media_type: str) -> AnalysisResult:
        """Analyze a meal photo.

        Raises:
            AnalysisFailure: the model call failed, its reply was not JSON, or
                the reply lacked the nutrition fields needed for scoring.
        """
        try:
            reply = await self.client.generate(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                image_data_url=_to_data_url(image_bytes, media_type),
                prompt=ANALYSIS_PROMPT,
            )
        except Exception as exc:
            _logger.exception("Food analysis model call failed")
            raise AnalysisFailure(str(exc)) from exc

        payload = extract_json(reply)
        try:
            return build_result(payload)
        except (KeyError, TypeError, ValueError) as exc:
            _logger.exception("Food analysis reply is missing nutrition fields")
            raise AnalysisFailure(MISSING_DATA_MESSAGE) from exc


def build_result(
    payload: dict[str, object], now: datetime | None = None
) -> AnalysisResult:
    """Assemble an analysis result from the parsed model reply.

    Only the meal totals are validated. Food items are passed through as the
    model wrote them; their names are read only when the vegetable
    recommendation needs them.
    """
    totals = NutritionTotals.model_validate(payload["totalNutrition"])
    raw_items = payload.get("foodItems")
    if raw_items is None:
        raw_items = []
    if not isinstance(raw_items, list):
        raise TypeError("foodItems must be a list")
    food_items = [FoodItem.model_validate(item) for item in raw_items]
    created_at = now or datetime.now(tz=UTC)
    return AnalysisResult(
        food_items=food_items,
        nutrition=totals,
        health_score=calculate_health_score(totals),
        warnings=generate_warnings(totals),
        recommendations=generate_recommendations(totals, food_items),
        timestamp=created_at.isoformat(),
    )


def _to_data_url(image_bytes: bytes, media_type: str) -> str:
    """Convert bytes to a base64 data URL for image input."""
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{media_type};base64,{encoded}"
