from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Any

import httpx

from sharkpicks.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

UNKNOWN_SPORT_ERROR_CODE = "UNKNOWN_SPORT"


class OddsAPIConfigError(RuntimeError):
    """Raised when the provider API key is not configured."""


class OddsAPIError(RuntimeError):
    """Upstream request failed: non-2xx status, transport error or undecodable body."""

    def __init__(self, message: str, status_code: int | None = None, body: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class UnknownSportError(OddsAPIError):
    """Upstream rejected the sport key with error_code UNKNOWN_SPORT."""


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


class OddsAPIClient:
    def __init__(self, settings: Settings | None = None, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = settings or default_settings
        self.base_url = self.settings.odds_api_base_url.rstrip("/")
        self.api_key = self.settings.odds_api_key
        self.requests_remaining: int | None = None
        self.requests_used: int | None = None
        self._client = httpx.AsyncClient(timeout=self.settings.odds_api_timeout_seconds, transport=transport)

    async def __aenter__(self) -> OddsAPIClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        if not self.api_key:
            raise OddsAPIConfigError("ODDS_API_KEY is not configured")
        params = dict(params or {})
        params["apiKey"] = self.api_key
        url = f"{self.base_url}/{path.lstrip('/')}"

        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            logger.error("odds api request failed without a response: path=%s error=%s", path, exc)
            raise OddsAPIError(str(exc) or exc.__class__.__name__) from exc

        self._track_credits(response, path)

        if response.is_error:
            body = _decode_body(response)
            logger.error("odds api error: path=%s status=%s body=%s", path, response.status_code, body)
            message = f"Odds API returned {response.status_code} for {path}"
            if isinstance(body, dict) and body.get("error_code") == UNKNOWN_SPORT_ERROR_CODE:
                raise UnknownSportError(message, status_code=response.status_code, body=body)
            raise OddsAPIError(message, status_code=response.status_code, body=body)

        try:
            return response.json()
        except ValueError as exc:
            logger.error("odds api returned a malformed body: path=%s", path)
            raise OddsAPIError(f"Malformed response from Odds API for {path}", status_code=response.status_code) from exc

    def _track_credits(self, response: httpx.Response, path: str) -> None:
        remaining = response.headers.get("x-requests-remaining")
        used = response.headers.get("x-requests-used")
        if remaining and remaining.isdigit():
            self.requests_remaining = int(remaining)
        if used and used.isdigit():
            self.requests_used = int(used)
        if remaining is not None or used is not None:
            logger.info("odds api credits: path=%s used=%s remaining=%s", path, used, remaining)

    async def get_sports(self) -> Any:
        return await self._get("sports")

    async def get_odds(self, sport: str, markets: str | None = None) -> Any:
        params: dict[str, Any] = {
            "regions": self.settings.odds_api_regions,
            "markets": markets or self.settings.odds_api_markets,
            "oddsFormat": self.settings.odds_api_odds_format,
            "dateFormat": self.settings.odds_api_date_format,
        }
        return await self._get(f"sports/{sport}/odds", params=params)


async def get_odds_client() -> AsyncIterator[OddsAPIClient]:
    async with OddsAPIClient() as client:
        yield client
