"""Shared fixtures.

The weather provider is never contacted: ``httpx.MockTransport`` answers
for it (see :mod:`mm_weather.tests.fakes`) and records every outbound
request so tests can inspect the query string.
"""

from __future__ import annotations

from typing import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from mm_weather.core.settings import API_BASE_ENV, API_TOKEN_ENV, LISTEN_PORT_ENV, Settings
from mm_weather.server import create_app
from mm_weather.tests.fakes import RecordingProvider
from mm_weather.weather.weatherapi import WeatherApiClient


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (API_TOKEN_ENV, LISTEN_PORT_ENV, API_BASE_ENV):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="test-key")


@pytest.fixture
def fake_provider() -> RecordingProvider:
    return RecordingProvider()


@pytest.fixture
def make_client(settings) -> Callable[[RecordingProvider], TestClient]:
    def _make(handler: RecordingProvider) -> TestClient:
        provider = WeatherApiClient(
            settings.api_key,
            base_url=settings.weather_api_url,
            transport=httpx.MockTransport(handler),
        )
        return TestClient(create_app(settings, provider=provider))

    return _make


@pytest.fixture
def client(make_client, fake_provider) -> TestClient:
    return make_client(fake_provider)
