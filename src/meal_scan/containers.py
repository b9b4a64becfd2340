"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from meal_scan.adapters.openai_vision_client import OpenAIVisionClient
from meal_scan.config import Settings
from meal_scan.services.analyzer import FoodAnalyzer


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    food_analyzer: FoodAnalyzer
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    openai_client = OpenAIVisionClient.create(resolved_settings.openai_api_key)
    food_analyzer = FoodAnalyzer(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        food_analyzer=food_analyzer,
        close_resources=close_resources,
    )
