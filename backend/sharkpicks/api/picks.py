from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from sharkpicks.data_providers.odds_api import OddsAPIClient, OddsAPIConfigError, OddsAPIError, get_odds_client
from sharkpicks.schemas.picks import PickResponse, PicksMessage
from sharkpicks.services.shark_picks import build_picks

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/shark-picks", tags=["picks"])


@router.get("/{sport}", response_model=list[PickResponse] | PicksMessage)
async def get_shark_picks(
    sport: str, client: OddsAPIClient = Depends(get_odds_client)
) -> list[PickResponse] | PicksMessage | JSONResponse:
    try:
        games = await client.get_odds(sport)
    except OddsAPIConfigError:
        logger.error("ODDS_API_KEY is missing; cannot build shark picks for sport=%s", sport)
        return JSONResponse(status_code=500, content={"error": "Missing Odds API key"})
    except OddsAPIError as exc:
        logger.error("shark picks error: sport=%s detail=%s", sport, exc.body or exc)
        return JSONResponse(status_code=500, content={"error": "Failed to fetch Shark Picks"})

    try:
        return build_picks(games, sport)
    except Exception:
        logger.exception("shark picks failed while selecting picks for sport=%s", sport)
        return JSONResponse(status_code=500, content={"error": "Failed to fetch Shark Picks"})
