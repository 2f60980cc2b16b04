from __future__ import annotations


def decimal_to_implied_prob(decimal_odds: float) -> float:
    """Implied win probability of a decimal price. 1.5 -> 0.6667"""
    if decimal_odds <= 1:
        raise ValueError("Decimal odds must be greater than 1")
    return round(1 / decimal_odds, 4)


def decimal_to_american(decimal_odds: float) -> int:
    """Convert decimal odds to American. 1.5 -> -200, 2.5 -> +150"""
    if decimal_odds <= 1:
        raise ValueError("Decimal odds must be greater than 1")
    if decimal_odds >= 2:
        return int(round((decimal_odds - 1) * 100))
    return int(round(-100 / (decimal_odds - 1)))
