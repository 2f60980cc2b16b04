from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from sharkpicks.data_providers.odds_api import (
    OddsAPIClient,
    OddsAPIConfigError,
    OddsAPIError,
    UnknownSportError,
    get_odds_client,
)
from sharkpicks.schemas.odds import GamePreview
from sharkpicks.services.odds_lookup import build_odds_preview

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/odds", tags=["odds"])

MISSING_KEY_MESSAGE = "Missing Odds API key (ODDS_API_KEY). Set this environment variable and restart the server."
PREVIEW_MARKETS = "h2h,spreads,totals"


async def _unknown_sport_response(client: OddsAPIClient, exc: UnknownSportError) -> JSONResponse:
    try:
        available = await client.get_sports()
    except OddsAPIError as inner:
        logger.error("failed to fetch available sports from odds api: %s", inner)
        return JSONResponse(status_code=500, content={"error": exc.body or "Failed to fetch odds"})
    return JSONResponse(
        status_code=400,
        content={"error": "Unknown sport slug", "upstream": exc.body, "available_sports": available},
    )


@router.get("/sports")
async def list_sports(client: OddsAPIClient = Depends(get_odds_client)) -> Any:
    try:
        return await client.get_sports()
    except OddsAPIConfigError:
        logger.error("ODDS_API_KEY is missing; cannot list sports")
        return JSONResponse(status_code=500, content={"error": "Missing Odds API key (ODDS_API_KEY)"})
    except OddsAPIError as exc:
        logger.error("error fetching sports list from odds api: %s", exc.body or exc)
        return JSONResponse(status_code=500, content={"error": exc.body or str(exc) or "Failed to fetch sports list"})


@router.get("/{sport}")
async def get_sport_odds(sport: str, client: OddsAPIClient = Depends(get_odds_client)) -> Any:
    try:
        return await client.get_odds(sport)
    except OddsAPIConfigError:
        logger.error("ODDS_API_KEY is missing; cannot fetch odds for sport=%s", sport)
        return JSONResponse(status_code=500, content={"error": MISSING_KEY_MESSAGE})
    except UnknownSportError as exc:
        logger.warning("unknown sport slug requested: sport=%s upstream=%s", sport, exc.body)
        return await _unknown_sport_response(client, exc)
    except OddsAPIError as exc:
        logger.error("error fetching odds: sport=%s status=%s message=%s", sport, exc.status_code, exc)
        return JSONResponse(status_code=500, content={"error": exc.body or "Failed to fetch odds"})


@router.get("/{sport}/preview", response_model=list[GamePreview])
async def get_sport_odds_preview(sport: str, client: OddsAPIClient = Depends(get_odds_client)) -> Any:
    try:
        games = await client.get_odds(sport, markets=PREVIEW_MARKETS)
    except OddsAPIConfigError:
        logger.error("ODDS_API_KEY is missing; cannot build odds preview for sport=%s", sport)
        return JSONResponse(status_code=500, content={"error": MISSING_KEY_MESSAGE})
    except UnknownSportError as exc:
        logger.warning("unknown sport slug requested: sport=%s upstream=%s", sport, exc.body)
        return await _unknown_sport_response(client, exc)
    except OddsAPIError as exc:
        logger.error("error fetching odds preview: sport=%s status=%s message=%s", sport, exc.status_code, exc)
        return JSONResponse(status_code=500, content={"error": exc.body or "Failed to fetch odds"})
    return build_odds_preview(games)
