"""Shared test fixtures."""

import json
from dataclasses import dataclass, field

import pytest

from meal_scan.config import Settings
from meal_scan.containers import AppContainer
from meal_scan.services.analyzer import FoodAnalyzer, VisionClient

BALANCED_MEAL: dict[str, object] = {
    "foodItems": [
        {
            "name": "Grilled chicken breast",
            "description": "Skinless grilled chicken.",
            "calories": 250,
            "protein_g": 25,
            "carbs_g": 0,
            "fat_g": 6,
        },
        {
            "name": "Brown rice",
            "description": "A cup of steamed brown rice.",
            "calories": 150,
            "protein_g": 0,
            "carbs_g": 50,
            "fat_g": 4,
        },
    ],
    "totalNutrition": {
        "calories": 400,
        "protein_g": 25,
        "carbs_g": 50,
        "fat_g": 10,
        "sodium_mg": 300,
        "sugar_g": 10,
    },
}


@dataclass
class FakeVisionClient(VisionClient):
    """Fake vision client returning a fixed reply and recording calls."""

    reply: str = field(default_factory=lambda: json.dumps(BALANCED_MEAL))
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def generate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        prompt: str,
    ) -> str:
        self.calls.append(
            {
                "model": model,
                "reasoning_effort": reasoning_effort,
                "store": store,
                "image_data_url": image_data_url,
                "prompt": prompt,
            }
        )
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="openai-key")


@pytest.fixture
def vision_client() -> FakeVisionClient:
    return FakeVisionClient()


@pytest.fixture
def container(settings: Settings, vision_client: FakeVisionClient) -> AppContainer:
    food_analyzer = FoodAnalyzer(
        client=vision_client,
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        food_analyzer=food_analyzer,
        close_resources=close_resources,
    )
