# src/mm_weather/core/settings.py
from __future__ import annotations
import argparse
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from mm_weather.core.urls import DEFAULT_WEATHER_API_URL

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config.json"
DEFAULT_LISTEN_PORT = "8080"

API_TOKEN_ENV = "WEATHER_API_TOKEN"
LISTEN_PORT_ENV = "MM_LISTEN_PORT"
API_BASE_ENV = "WEATHER_API_BASE"

# exit status when no API key is found anywhere
EXIT_NO_API_KEY = 2


class ConfigError(RuntimeError):
    """The config file had to be read and could not be."""


class Settings(BaseModel):
    """Startup configuration. Built once, read-only afterwards."""

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(..., min_length=1)
    listen_port: str = DEFAULT_LISTEN_PORT
    debug: bool = False
    weather_api_url: str = DEFAULT_WEATHER_API_URL


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mm-weather",
        description="Mattermost slash-command relay for current weather conditions",
    )
    parser.add_argument("-debug", "--debug", action="store_true", help="Enable debug mode")
    parser.add_argument(
        "-config", "--config", default=DEFAULT_CONFIG_FILE,
        help=f"Override default config file ({DEFAULT_CONFIG_FILE})",
    )
    parser.add_argument(
        "-token", "--token", default="",
        help="Override the API token supplied in the environment or config file",
    )
    parser.add_argument(
        "-port", "--port", default="",
        help="Override the port that this utility should listen on",
    )
    return parser


def file_exists(path: Path) -> bool:
    """True only for an existing regular file; a directory is reported and treated as missing."""
    if not path.exists():
        return False
    if path.is_dir():
        logger.error("%s is a directory!", path)
        return False
    return True


class ConfigFile:
    """JSON config file, read at most once and only when a value is needed from it."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        self._data: Optional[Dict[str, Any]] = None

    @property
    def loaded(self) -> bool:
        return self._data is not None

    def exists(self) -> bool:
        return file_exists(self.path)

    def load(self) -> Dict[str, Any]:
        if self._data is None:
            try:
                with self.path.open("r", encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, ValueError) as e:
                raise ConfigError(f"fatal error processing config file {self.path}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigError(f"fatal error processing config file {self.path}: top level must be a JSON object")
            self._data = data
        return self._data

    def get_string(self, key: str) -> str:
        value = self.load().get(key)
        # numbers are accepted as strings ("listenPort": 8080)
        if isinstance(value, bool) or value is None:
            return ""
        if isinstance(value, (int, float)):
            return str(value)
        if isinstance(value, str):
            return value.strip()
        return ""


def _resolve_api_key(token: str, env: Mapping[str, str], config: ConfigFile) -> str:
    if token:
        logger.debug("Obtained API key from command line")
        return token

    api_key = env.get(API_TOKEN_ENV, "").strip()
    if api_key:
        logger.debug("Obtained API key from environment")
        return api_key

    api_key = config.get_string("apiKey")
    logger.debug("Obtained API key from config file")
    return api_key


def _resolve_listen_port(port: str, env: Mapping[str, str], config: ConfigFile) -> str:
    if port:
        logger.debug("Obtained listen port '%s' from command line", port)
        return port

    listen_port = env.get(LISTEN_PORT_ENV, "").strip()
    if listen_port:
        logger.debug("Obtained listen port '%s' from environment", listen_port)
        return listen_port

    if config.loaded or config.exists():
        listen_port = config.get_string("listenPort")
        if listen_port:
            logger.debug("Obtained listen port '%s' from config file", listen_port)
            return listen_port

    logger.debug("Using default listen port: %s", DEFAULT_LISTEN_PORT)
    return DEFAULT_LISTEN_PORT


def resolve_settings(args: argparse.Namespace, environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Resolve the startup settings.
    - API key: -token > WEATHER_API_TOKEN > "apiKey" in the config file
    - port:    -port  > MM_LISTEN_PORT    > "listenPort" in the config file > 8080
    Raises SystemExit(2) when no API key is found, ConfigError when a needed config file is unreadable.
    """
    env = os.environ if environ is None else environ
    config = ConfigFile(args.config)

    api_key = _resolve_api_key((args.token or "").strip(), env, config)
    if not api_key:
        logger.error("Failed to locate API key!")
        raise SystemExit(EXIT_NO_API_KEY)

    listen_port = _resolve_listen_port((args.port or "").strip(), env, config)
    weather_api_url = env.get(API_BASE_ENV, "").strip() or DEFAULT_WEATHER_API_URL

    return Settings(
        api_key=api_key,
        listen_port=listen_port,
        debug=bool(args.debug),
        weather_api_url=weather_api_url,
    )


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    return build_arg_parser().parse_args(argv)
