from pydantic import BaseModel


class Totals(BaseModel):
    over: float | None = None
    under: float | None = None
    line: float | None = None


class SidePreview(BaseModel):
    team: str
    best_odds: float | None = None
    american_odds: int | None = None
    implied_prob: float | None = None
    spread: float | None = None
    spread_odds: float | None = None


class GamePreview(BaseModel):
    id: str | None = None
    matchup: str
    start_time: str | None = None
    display_time: str
    home: SidePreview
    away: SidePreview
    totals: Totals
