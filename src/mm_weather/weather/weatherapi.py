# src/mm_weather/weather/weatherapi.py
from __future__ import annotations
import json
import logging
from typing import Any, Dict, Optional

import httpx

from mm_weather.core.urls import DEFAULT_WEATHER_API_URL, WEATHERAPI_AQI
from mm_weather.weather.types import CurrentWeatherProvider

logger = logging.getLogger(__name__)


class WeatherProviderError(RuntimeError):
    """Any failure talking to the weather provider. Callers get no finer distinction."""


class WeatherApiClient(CurrentWeatherProvider):
    """
    weatherapi.com current-conditions client.
    One GET per call, httpx default timeout, no retry.
    """
    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_WEATHER_API_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not api_key:
            raise RuntimeError("weather API key missing")
        self.api_key = api_key
        self.base_url = base_url
        self._transport = transport

    def _params(self, location: str) -> Dict[str, str]:
        # httpx percent-encodes the values once; pass the raw location
        return {"key": self.api_key, "q": location, "aqi": WEATHERAPI_AQI}

    async def fetch_weather(self, location: str) -> Dict[str, Any]:
        logger.debug("Calling weather API for location: %s", location)

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                r = await client.get(self.base_url, params=self._params(location))
        except httpx.HTTPError as e:
            logger.error("Call to Weather API failed: %s", e)
            raise WeatherProviderError(str(e) or e.__class__.__name__) from e

        if r.is_error:
            # the provider's error body is still JSON; it renders with empty fields
            logger.warning("Weather API responded with status %s", r.status_code)

        try:
            data = r.json()
        except ValueError as e:
            logger.error("Unable to decode body data from Weather API response: %s", e)
            raise WeatherProviderError(f"invalid response from weather provider: {e}") from e

        if not isinstance(data, dict):
            logger.error("Failed to convert body data: expected a JSON object, got %s", type(data).__name__)
            raise WeatherProviderError("invalid response from weather provider: expected a JSON object")

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Weather data: %s", json.dumps(data, ensure_ascii=False))
        return data
