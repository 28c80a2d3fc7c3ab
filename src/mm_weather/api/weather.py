# src/mm_weather/api/weather.py
import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.types import Receive, Scope, Send

from mm_weather.models.schemas import SlashCommandResponse
from mm_weather.weather.formatter import extract_snapshot, format_weather_message
from mm_weather.weather.types import CurrentWeatherProvider
from mm_weather.weather.weatherapi import WeatherProviderError

logger = logging.getLogger(__name__)

router = APIRouter()

# lets the provider infer the location from the caller's address
SENTINEL_LOCATION = "auto:ip"

# Mattermost may be configured for GET or POST; no method is refused
ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


class MattermostJSONResponse(JSONResponse):
    """JSON response that logs an OSError raised by the server's send().

    Only errors the ASGI server actually raises are seen here; uvicorn drops
    writes to a disconnected client silently, so this is not a delivery check.
    """

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        except OSError as e:
            logger.error("Error posting response to Mattermost: %s", e)


def get_weather_provider(request: Request) -> CurrentWeatherProvider:
    return request.app.state.weather_provider


def _error_response(e: Exception) -> PlainTextResponse:
    return PlainTextResponse(str(e) or e.__class__.__name__, status_code=500)


@router.api_route("/weather", methods=ALL_METHODS, response_class=MattermostJSONResponse)
async def weather_command(
    text: str = Query("", description="Slash command argument: free-text location"),
    provider: CurrentWeatherProvider = Depends(get_weather_provider),
) -> Response:
    """
    Mattermost slash command callback.
    - Query: text=<location> (empty -> auto:ip)
    - 200: {"response_type": "in_channel", "text": "..."}
    - 500: plain-text error when the provider call or serialization fails
    """
    logger.info("Received inbound request")
    logger.debug("Text: %s", text)

    location = text or SENTINEL_LOCATION

    try:
        document = await provider.fetch_weather(location)
    except WeatherProviderError as e:
        return _error_response(e)

    message = format_weather_message(extract_snapshot(document))

    try:
        payload = SlashCommandResponse(response_type="in_channel", text=message)
        return MattermostJSONResponse(content=payload.model_dump())
    except (TypeError, ValueError) as e:
        logger.error("Unable to serialize response payload: %s", e)
        return _error_response(e)
