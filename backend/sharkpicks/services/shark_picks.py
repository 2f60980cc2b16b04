"""Shark Picks: the lowest-priced outcome per game across all bookmakers.

Input is raw upstream JSON, so every accessor tolerates missing or mistyped
fields and degrades to "no pick" instead of raising.
"""

from __future__ import annotations

import logging
from typing import Any

from sharkpicks.schemas.picks import PickResponse, PicksMessage

logger = logging.getLogger(__name__)

MISSING_TEAM_LABEL = "TBD"


def team_label(team: Any) -> str:
    return team if isinstance(team, str) and team else MISSING_TEAM_LABEL


def is_valid_outcome(outcome: Any) -> bool:
    if not isinstance(outcome, dict):
        return False
    price = outcome.get("price")
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        return False
    return isinstance(outcome.get("name"), str)


def first_market_outcomes(bookmaker: Any) -> list[Any]:
    """Outcomes of the bookmaker's first market; the market key is not checked."""
    if not isinstance(bookmaker, dict):
        return []
    markets = bookmaker.get("markets")
    if not isinstance(markets, list) or not markets or not isinstance(markets[0], dict):
        return []
    outcomes = markets[0].get("outcomes")
    return outcomes if isinstance(outcomes, list) else []


def local_favorite(outcomes: list[dict[str, Any]]) -> dict[str, Any]:
    favorite = outcomes[0]
    for outcome in outcomes[1:]:
        if outcome["price"] < favorite["price"]:
            favorite = outcome
    return favorite


def select_best_outcome(game: Any) -> PickResponse | None:
    if not isinstance(game, dict):
        return None
    bookmakers = game.get("bookmakers")
    if not isinstance(bookmakers, list) or not bookmakers:
        return None

    best: dict[str, Any] | None = None
    best_bookmaker: Any = None
    for bookmaker in bookmakers:
        valid = [o for o in first_market_outcomes(bookmaker) if is_valid_outcome(o)]
        if not valid:
            continue
        favorite = local_favorite(valid)
        if best is None or favorite["price"] < best["price"]:
            best = favorite
            best_bookmaker = bookmaker.get("title")

    if best is None or not isinstance(best_bookmaker, str) or not best_bookmaker:
        return None

    commence_time = game.get("commence_time")
    return PickResponse(
        matchup=f"{team_label(game.get('home_team'))} vs {team_label(game.get('away_team'))}",
        recommended_pick=best["name"],
        best_odds=best["price"],
        bookmaker=best_bookmaker,
        start_time=commence_time if isinstance(commence_time, str) else None,
    )


def build_picks(games: Any, sport: str) -> list[PickResponse] | PicksMessage:
    if not isinstance(games, list) or not games:
        return PicksMessage(message=f"No games available for {sport}")

    picks: list[PickResponse] = []
    for game in games:
        pick = select_best_outcome(game)
        if pick is None:
            continue
        logger.info("shark pick: %s", pick.model_dump())
        picks.append(pick)

    if not picks:
        logger.warning("no valid shark picks for sport=%s", sport)
        return PicksMessage(message=f"No valid picks available for {sport}")
    return picks
