# src/mm_weather/main.py
import logging
from typing import Optional, Sequence

import uvicorn
from dotenv import find_dotenv, load_dotenv

from mm_weather.core.logging_config import setup_logging
from mm_weather.core.settings import parse_args, resolve_settings
from mm_weather.server import create_app

logger = logging.getLogger(__name__)

LISTEN_HOST = "0.0.0.0"


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entry point: resolve settings, then serve /weather until killed."""
    # .env values fill in WEATHER_API_TOKEN / MM_LISTEN_PORT without overriding the real environment
    # searched from the working directory, where config.json lives too
    load_dotenv(find_dotenv(usecwd=True))

    args = parse_args(argv)
    setup_logging(debug=args.debug)

    settings = resolve_settings(args)
    app = create_app(settings)

    logger.info("Starting server on port %s", settings.listen_port)
    logger.debug("Listen address: %s:%s", LISTEN_HOST, settings.listen_port)
    uvicorn.run(
        app,
        host=LISTEN_HOST,
        port=int(settings.listen_port),
        log_config=None,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
