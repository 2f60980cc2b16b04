from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from sharkpicks.schemas.odds import GamePreview, SidePreview, Totals
from sharkpicks.services.shark_picks import team_label
from sharkpicks.utils.odds_math import decimal_to_american, decimal_to_implied_prob

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _bookmakers(game: Any) -> list[Any]:
    if not isinstance(game, dict):
        return []
    bookmakers = game.get("bookmakers")
    return bookmakers if isinstance(bookmakers, list) else []


def _find_market(bookmaker: Any, market_key: str) -> dict[str, Any] | None:
    if not isinstance(bookmaker, dict):
        return None
    markets = bookmaker.get("markets")
    if not isinstance(markets, list):
        return None
    for market in markets:
        if isinstance(market, dict) and market.get("key") == market_key:
            return market
    return None


def _find_outcome(market: dict[str, Any] | None, name: str) -> dict[str, Any] | None:
    if market is None or not isinstance(market.get("outcomes"), list):
        return None
    for outcome in market["outcomes"]:
        if isinstance(outcome, dict) and outcome.get("name") == name:
            return outcome
    return None


def find_best_odds_for_team(game: Any, team_name: str, market_key: str = "h2h") -> float | None:
    """Highest decimal price offered for a team across bookmakers."""
    best: float | None = None
    for bookmaker in _bookmakers(game):
        outcome = _find_outcome(_find_market(bookmaker, market_key), team_name)
        if outcome is None or not _is_number(outcome.get("price")):
            continue
        if best is None or outcome["price"] > best:
            best = outcome["price"]
    return best


def get_line_for_team(game: Any, team_name: str, market_key: str) -> float | None:
    """First spread/total point listed for a team, in bookmaker order."""
    for bookmaker in _bookmakers(game):
        outcome = _find_outcome(_find_market(bookmaker, market_key), team_name)
        if outcome is not None and _is_number(outcome.get("point")):
            return outcome["point"]
    return None


def get_totals_for_game(game: Any) -> Totals:
    for bookmaker in _bookmakers(game):
        market = _find_market(bookmaker, "totals")
        if market is None or not isinstance(market.get("outcomes"), list) or len(market["outcomes"]) < 2:
            continue
        over = _find_outcome(market, "Over")
        under = _find_outcome(market, "Under")
        if over is None or under is None:
            continue
        return Totals(
            over=over["price"] if _is_number(over.get("price")) else None,
            under=under["price"] if _is_number(under.get("price")) else None,
            line=over["point"] if _is_number(over.get("point")) and over["point"] else None,
        )
    return Totals()


def format_game_date(value: Any) -> str:
    """Short UTC display form of an ISO timestamp, e.g. 'Mon, Oct 19, 7:30 PM'.

    Naive timestamps are taken as UTC.
    """
    if not isinstance(value, str) or not value:
        return "TBD"
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.debug("unparseable commence_time %r", value)
        return "TBD"
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC)
    hour = parsed.hour % 12 or 12
    meridiem = "AM" if parsed.hour < 12 else "PM"
    return f"{parsed:%a, %b} {parsed.day}, {hour}:{parsed:%M} {meridiem}"


def _side_preview(game: dict[str, Any], team: Any) -> SidePreview:
    team_name = team if isinstance(team, str) else ""
    best = find_best_odds_for_team(game, team_name)
    priced = best is not None and best > 1
    return SidePreview(
        team=team_name,
        best_odds=best,
        american_odds=decimal_to_american(best) if priced else None,
        implied_prob=decimal_to_implied_prob(best) if priced else None,
        spread=get_line_for_team(game, team_name, "spreads"),
        spread_odds=find_best_odds_for_team(game, team_name, "spreads"),
    )


def build_game_preview(game: dict[str, Any]) -> GamePreview:
    """Display summary of one upstream game: best moneyline per side, spreads and totals."""
    commence_time = game.get("commence_time")
    commence_time = commence_time if isinstance(commence_time, str) else None
    game_id = game.get("id")
    return GamePreview(
        id=game_id if isinstance(game_id, str) else None,
        matchup=f"{team_label(game.get('away_team'))} @ {team_label(game.get('home_team'))}",
        start_time=commence_time,
        display_time=format_game_date(commence_time),
        home=_side_preview(game, game.get("home_team")),
        away=_side_preview(game, game.get("away_team")),
        totals=get_totals_for_game(game),
    )


def build_odds_preview(games: Any) -> list[GamePreview]:
    if not isinstance(games, list):
        return []
    return [build_game_preview(game) for game in games if isinstance(game, dict)]
