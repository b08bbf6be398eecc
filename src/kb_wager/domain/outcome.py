"""Outcome evaluator — maps a final score to the categorical bet outcomes."""

from dataclasses import dataclass

from src.kb_common.enums import Market, MatchResult, Parity, TotalCategory

DEFAULT_TOTAL_LINE = 4.5

_RESULT_BANNERS = {
    MatchResult.HOME: "Home Win",
    MatchResult.AWAY: "Away Win",
    MatchResult.DRAW: "Draw",
}


@dataclass(frozen=True)
class MatchOutcome:
    result: MatchResult
    total: TotalCategory
    parity: Parity

    def winning_outcome(self, market: Market) -> str:
        if market == Market.RESULT:
            return self.result.value
        if market == Market.TOTAL:
            return self.total.value
        return self.parity.value

    @property
    def banner(self) -> str:
        return _RESULT_BANNERS[self.result]


def validate_total_line(line: float) -> None:
    """Line must be a half-integer so a total can never land on it (no push)."""
    if line < 0 or (line * 2) % 2 != 1:
        raise ValueError(f"Total line must be a non-negative half-integer, got {line}")


def evaluate(home: int, away: int, total_line: float = DEFAULT_TOTAL_LINE) -> MatchOutcome:
    if home < 0 or away < 0:
        raise ValueError(f"Scores must be non-negative, got {home}-{away}")
    validate_total_line(total_line)

    if home > away:
        result = MatchResult.HOME
    elif away > home:
        result = MatchResult.AWAY
    else:
        result = MatchResult.DRAW

    total_goals = home + away
    total = TotalCategory.OVER if total_goals > total_line else TotalCategory.UNDER
    parity = Parity.ODD if total_goals % 2 else Parity.EVEN
    return MatchOutcome(result=result, total=total, parity=parity)
