# src/mm_weather/core/urls.py
from __future__ import annotations
from typing import Final

# Base domain; WEATHER_API_BASE in the environment replaces the full endpoint URL
WEATHERAPI_BASE: Final[str] = "http://api.weatherapi.com"

# current conditions
WEATHERAPI_CURRENT_PATH: Final[str] = "/v1/current.json"

# Fixed query suffix: disable the air-quality extension
WEATHERAPI_AQI: Final[str] = "no"


def weatherapi_url(*, base: str = WEATHERAPI_BASE) -> str:
    """
    ex) weatherapi_url() -> "http://api.weatherapi.com/v1/current.json"
    """
    return f"{base.rstrip('/')}{WEATHERAPI_CURRENT_PATH}"


DEFAULT_WEATHER_API_URL: Final[str] = weatherapi_url()
