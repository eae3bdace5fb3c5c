import logging
from typing import Any, Dict, Optional

import httpx

from openmeteo_weather_mcp import __version__
from openmeteo_weather_mcp.errors import NetworkError, UpstreamError

logger = logging.getLogger("openmeteo_weather.client")

# API endpoints
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
ARCHIVE_URL = "https://archive-api.open-meteo.com/v1/archive"
GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"

REQUEST_TIMEOUT_SECONDS = 30.0
ERROR_SNIPPET_LENGTH = 200


class OpenMeteoClient:
    """Shared HTTP access to the Open-Meteo APIs.

    One ``httpx.AsyncClient`` (and its connection pool) is reused by every
    tool call. Each ``get_json`` call issues exactly one request and never
    retries.
    """

    def __init__(self, http_client: Optional[httpx.AsyncClient] = None, timeout: float = REQUEST_TIMEOUT_SECONDS):
        self._http_client = http_client
        self._timeout = timeout

    @property
    def http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={"User-Agent": f"OpenMeteo_Weather_MCP/{__version__}"},
            )
        return self._http_client

    async def aclose(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def get_json(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """GET ``url`` and return the decoded JSON object"""
        logger.debug(f"Requesting {url} with params {params}")

        try:
            response = await self.http_client.get(url, params=params)
        except httpx.TimeoutException as e:
            logger.error(f"Request to {url} timed out: {str(e)}")
            raise NetworkError(f"Request to Open-Meteo timed out after {self._timeout:.0f} seconds", timeout=True) from e
        except httpx.RequestError as e:
            logger.error(f"Request to {url} failed: {str(e)}")
            raise NetworkError(f"Could not reach Open-Meteo: {str(e) or type(e).__name__}") from e

        logger.debug(f"Open-Meteo response status: {response.status_code}")

        if not response.is_success:
            detail = _error_detail(response)
            logger.error(f"Open-Meteo API error. Status: {response.status_code}. Detail: {detail}")
            raise UpstreamError(
                f"OpenMeteo API error: {response.status_code} {response.reason_phrase}. {detail}".strip(),
                status_code=response.status_code,
                detail=detail,
            )

        try:
            data = response.json()
        except ValueError as e:
            snippet = response.text[:ERROR_SNIPPET_LENGTH]
            logger.error(f"Failed to parse Open-Meteo JSON. Error: {str(e)}. Response text: {snippet}")
            raise UpstreamError(
                f"Failed to parse OpenMeteo JSON response: {str(e)}",
                status_code=response.status_code,
                detail=snippet,
            ) from e

        if not isinstance(data, dict):
            raise UpstreamError(
                "OpenMeteo returned an unexpected JSON document", status_code=response.status_code
            )
        return data


def _error_detail(response: httpx.Response) -> str:
    """Open-Meteo reports errors as {"error": true, "reason": "..."}"""
    try:
        body = response.json()
    except ValueError:
        return response.text[:ERROR_SNIPPET_LENGTH]
    if isinstance(body, dict) and body.get("reason"):
        return str(body["reason"])
    return response.text[:ERROR_SNIPPET_LENGTH]
