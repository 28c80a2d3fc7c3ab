# src/mm_weather/weather/types.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol, Dict, Any

@dataclass(frozen=True)
class WeatherSnapshot:
    location_name: str = ""
    temp_c: float = 0.0
    condition: str = ""

class CurrentWeatherProvider(Protocol):
    async def fetch_weather(self, location: str) -> Dict[str, Any]: ...
