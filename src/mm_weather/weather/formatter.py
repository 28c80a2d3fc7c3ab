# src/mm_weather/weather/formatter.py
from __future__ import annotations
from typing import Any, Mapping

from mm_weather.weather.types import WeatherSnapshot

MESSAGE_TEMPLATE = "Current weather in {name}: {temp}°C - {condition}"


def lookup(document: Any, *path: str, default: Any = None) -> Any:
    """
    Walk nested JSON objects along *path*.
    Returns *default* as soon as a step is missing or is not an object.
    """
    node = document
    for key in path:
        if not isinstance(node, Mapping) or key not in node:
            return default
        node = node[key]
    return node


def lookup_str(document: Any, *path: str) -> str:
    value = lookup(document, *path)
    return value if isinstance(value, str) else ""


def lookup_float(document: Any, *path: str) -> float:
    value = lookup(document, *path)
    # bool is an int subclass but never a temperature
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


def extract_snapshot(document: Any) -> WeatherSnapshot:
    """
    Pull the three consumed fields out of a weatherapi.com "current" response.
    Missing or mistyped fields become "" / 0 instead of failing the request.
    """
    return WeatherSnapshot(
        location_name=lookup_str(document, "location", "name"),
        temp_c=lookup_float(document, "current", "temp_c"),
        condition=lookup_str(document, "current", "condition", "text"),
    )


def format_temperature(value: float) -> str:
    # 20.0 -> "20", 21.5 -> "21.5"
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_weather_message(snapshot: WeatherSnapshot) -> str:
    return MESSAGE_TEMPLATE.format(
        name=snapshot.location_name,
        temp=format_temperature(snapshot.temp_c),
        condition=snapshot.condition,
    )
