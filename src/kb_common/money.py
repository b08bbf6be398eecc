"""Integer arithmetic utilities for balances, stakes and odds.

Balances and stakes are whole currency units (int). Odds are stored as
hundredths (1.80 -> 180) so every payout is computed without float or Decimal.
"""


def validate_odds(odds_x100: int) -> None:
    if odds_x100 <= 0:
        raise ValueError(f"Odds must be positive, got {odds_x100 / 100:.2f}")


def validate_stake(stake: int) -> None:
    if stake <= 0:
        raise ValueError(f"Stake must be positive, got {stake}")


def calculate_payout(stake: int, odds_x100: int) -> int:
    """Gross return of a winning stake, rounded half-up to a whole unit.

    payout = floor(stake * odds_x100 / 100 + 0.5)
    Using integer arithmetic: (a + 50) // 100
    """
    return (stake * odds_x100 + 50) // 100


def odds_to_display(odds_x100: int) -> str:
    """180 -> '1.80'."""
    return f"{odds_x100 // 100}.{odds_x100 % 100:02d}"


def amount_to_display(amount: int) -> str:
    """Thousands-separated whole units: 10080 -> '10,080', -100 -> '-100'."""
    return f"{amount:,}"
