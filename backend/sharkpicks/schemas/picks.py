from pydantic import BaseModel


class PickResponse(BaseModel):
    matchup: str
    recommended_pick: str
    best_odds: float
    bookmaker: str
    start_time: str | None = None


class PicksMessage(BaseModel):
    message: str
