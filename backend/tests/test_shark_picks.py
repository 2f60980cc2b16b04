import logging

import pytest

from sharkpicks.schemas.picks import PickResponse, PicksMessage
from sharkpicks.services.shark_picks import build_picks, select_best_outcome


def _book(title, *outcomes, market_key="h2h"):
    return {
        "key": title.lower(),
        "title": title,
        "markets": [{"key": market_key, "outcomes": [{"name": n, "price": p} for n, p in outcomes]}],
    }


def _game(*bookmakers, home="Lakers", away="Celtics", game_id="g1"):
    return {
        "id": game_id,
        "home_team": home,
        "away_team": away,
        "commence_time": "2026-10-19T23:30:00Z",
        "bookmakers": list(bookmakers),
    }


@pytest.mark.parametrize("bookmakers", [None, "not-a-list", [], {"title": "BookA"}])
def test_select_returns_none_without_bookmaker_list(bookmakers):
    game = _game()
    if bookmakers is None:
        del game["bookmakers"]
    else:
        game["bookmakers"] = bookmakers
    assert select_best_outcome(game) is None


def test_select_returns_none_for_non_mapping_game():
    assert select_best_outcome(None) is None
    assert select_best_outcome(["bookmakers"]) is None


def test_select_returns_none_when_no_outcome_is_valid():
    game = _game(
        {"title": "BookA", "markets": [{"key": "h2h", "outcomes": [{"name": "Lakers", "price": "1.8"}]}]},
        {"title": "BookB", "markets": [{"key": "h2h", "outcomes": [{"name": 7, "price": 1.5}, {"price": 1.2}]}]},
    )
    assert select_best_outcome(game) is None


def test_select_picks_lowest_price_across_bookmakers():
    game = _game(_book("BookA", ("Lakers", 1.80), ("Celtics", 2.10)), _book("BookB", ("Lakers", 2.00), ("Celtics", 1.50)))

    pick = select_best_outcome(game)

    assert pick == PickResponse(
        matchup="Lakers vs Celtics",
        recommended_pick="Celtics",
        best_odds=1.50,
        bookmaker="BookB",
        start_time="2026-10-19T23:30:00Z",
    )


def test_select_scenario_b_single_outcome_books():
    game = _game(_book("BookA", ("Lakers", 1.80)), _book("BookB", ("Celtics", 1.50)))

    pick = select_best_outcome(game)

    assert pick is not None
    assert pick.matchup == "Lakers vs Celtics"
    assert pick.recommended_pick == "Celtics"
    assert pick.best_odds == 1.50
    assert pick.bookmaker == "BookB"


def test_select_tie_across_bookmakers_keeps_first_book():
    game = _game(_book("BookX", ("Lakers", 2.00)), _book("BookY", ("Celtics", 2.00)))

    pick = select_best_outcome(game)

    assert pick.bookmaker == "BookX"
    assert pick.recommended_pick == "Lakers"


def test_select_tie_within_bookmaker_keeps_first_outcome():
    game = _game(_book("BookA", ("Lakers", 1.90), ("Celtics", 1.90), ("Draw", 3.40)))

    assert select_best_outcome(game).recommended_pick == "Lakers"


def test_select_only_reads_first_market():
    book = _book("BookA", ("Lakers", 1.95), market_key="spreads")
    book["markets"].append({"key": "h2h", "outcomes": [{"name": "Celtics", "price": 1.10}]})

    pick = select_best_outcome(_game(book))

    assert pick.recommended_pick == "Lakers"
    assert pick.best_odds == 1.95


def test_select_skips_books_with_empty_or_broken_markets():
    game = _game(
        {"title": "NoMarkets", "markets": []},
        {"title": "MissingMarkets"},
        {"title": "NoOutcomes", "markets": [{"key": "h2h"}]},
        {"title": "BadOutcomes", "markets": [{"key": "h2h", "outcomes": "oops"}]},
        "not-a-bookmaker",
        _book("BookA", ("Lakers", 1.70), ("Celtics", 2.20)),
    )

    pick = select_best_outcome(game)

    assert pick.bookmaker == "BookA"
    assert pick.best_odds == 1.70


def test_select_drops_invalid_outcomes_and_boolean_prices():
    game = _game(
        {
            "title": "BookA",
            "markets": [
                {
                    "key": "h2h",
                    "outcomes": [
                        {"name": "Lakers", "price": True},
                        {"name": "Celtics", "price": None},
                        {"name": "Draw", "price": 3},
                    ],
                }
            ],
        }
    )

    pick = select_best_outcome(game)

    assert pick.recommended_pick == "Draw"
    assert pick.best_odds == 3


def test_select_best_odds_is_global_minimum():
    game = _game(
        _book("BookA", ("Lakers", 1.91), ("Celtics", 1.95)),
        _book("BookB", ("Lakers", 1.87), ("Celtics", 2.02)),
        _book("BookC", ("Lakers", 1.89), ("Celtics", 1.99)),
    )
    minimum = min(o["price"] for b in game["bookmakers"] for o in b["markets"][0]["outcomes"])

    assert select_best_outcome(game).best_odds == minimum
    assert select_best_outcome(game).bookmaker == "BookB"


def test_select_returns_none_when_winning_book_has_no_title():
    book = _book("BookA", ("Lakers", 1.50))
    del book["title"]

    assert select_best_outcome(_game(book)) is None


def test_build_picks_scenario_a_no_games():
    assert build_picks([], "nba") == PicksMessage(message="No games available for nba")


def test_build_picks_non_list_payload():
    assert build_picks({"message": "quota"}, "nba") == PicksMessage(message="No games available for nba")


def test_build_picks_scenario_c_no_valid_prices(caplog):
    game = _game(
        {"title": "BookA", "markets": [{"key": "h2h", "outcomes": [{"name": "Lakers"}, {"name": "Celtics"}]}]}
    )

    with caplog.at_level(logging.WARNING):
        result = build_picks([game], "basketball_nba")

    assert result == PicksMessage(message="No valid picks available for basketball_nba")
    assert "no valid shark picks" in caplog.text


def test_build_picks_scenario_d_empty_markets_does_not_raise():
    game = _game({"title": "BookA", "markets": []}, _book("BookB", ("Lakers", 1.60)))

    picks = build_picks([game], "nba")

    assert [p.bookmaker for p in picks] == ["BookB"]


def test_build_picks_scenario_e_tie_goes_to_first_book():
    game = _game(_book("BookX", ("Lakers", 2.00)), _book("BookY", ("Celtics", 2.00)))

    picks = build_picks([game], "nba")

    assert picks[0].bookmaker == "BookX"


def test_build_picks_preserves_order_and_drops_games_without_picks(caplog):
    games = [
        _game(_book("BookA", ("Heat", 1.40)), home="Heat", away="Knicks", game_id="g1"),
        _game(home="Bulls", away="Nets", game_id="g2"),
        _game(_book("BookB", ("Suns", 1.75)), home="Suns", away="Jazz", game_id="g3"),
    ]

    with caplog.at_level(logging.INFO):
        picks = build_picks(games, "nba")

    assert [p.matchup for p in picks] == ["Heat vs Knicks", "Suns vs Jazz"]
    assert caplog.text.count("shark pick:") == 2


def test_select_labels_missing_teams_as_tbd():
    game = _game(_book("BookA", ("Lakers", 1.60)))
    del game["home_team"]
    game["away_team"] = None

    assert select_best_outcome(game).matchup == "TBD vs TBD"
