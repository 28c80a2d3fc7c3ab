from typing import Optional

from fastapi import FastAPI

from mm_weather.api import weather
from mm_weather.core.settings import Settings
from mm_weather.weather.types import CurrentWeatherProvider
from mm_weather.weather.weatherapi import WeatherApiClient


def create_app(settings: Settings, provider: Optional[CurrentWeatherProvider] = None) -> FastAPI:
    app = FastAPI(title="mm-weather - Mattermost weather slash command", docs_url=None, redoc_url=None)

    # ============================================================
    # 🌦 Weather provider (settings are fixed for the process lifetime)
    # ============================================================
    app.state.settings = settings
    app.state.weather_provider = provider or WeatherApiClient(
        settings.api_key,
        base_url=settings.weather_api_url,
    )

    # ============================================================
    # 📦 Router registration: /weather only
    # ============================================================
    app.include_router(weather.router)

    return app
