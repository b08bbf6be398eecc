"""Static market table: odds and display names per (market, outcome).

Loaded once per session and read-only afterwards.
"""

from collections.abc import Mapping
from types import MappingProxyType

from src.kb_common.enums import Market, MatchResult, Parity, TotalCategory
from src.kb_common.errors import UnknownSelectionError
from src.kb_common.money import validate_odds
from src.kb_wager.domain.outcome import DEFAULT_TOTAL_LINE, validate_total_line

DEFAULT_ODDS_X100: dict[str, dict[str, int]] = {
    Market.RESULT.value: {
        MatchResult.HOME.value: 180,
        MatchResult.DRAW.value: 320,
        MatchResult.AWAY.value: 210,
    },
    Market.TOTAL.value: {
        TotalCategory.OVER.value: 190,
        TotalCategory.UNDER.value: 180,
    },
    Market.PARITY.value: {
        Parity.ODD.value: 190,
        Parity.EVEN.value: 190,
    },
}

_OUTCOMES: dict[Market, tuple[str, ...]] = {
    Market.RESULT: tuple(m.value for m in MatchResult),
    Market.TOTAL: tuple(t.value for t in TotalCategory),
    Market.PARITY: tuple(p.value for p in Parity),
}


def _line_display(line: float) -> str:
    return f"{line:g}"


class MarketTable:
    def __init__(
        self,
        overrides: Mapping[str, Mapping[str, int]] | None = None,
        total_line: float = DEFAULT_TOTAL_LINE,
    ) -> None:
        validate_total_line(total_line)
        table: dict[Market, dict[str, int]] = {
            Market(m): dict(outcomes) for m, outcomes in DEFAULT_ODDS_X100.items()
        }
        for market_key, outcomes in (overrides or {}).items():
            market = _parse_market(market_key)
            for outcome, odds in outcomes.items():
                if outcome not in _OUTCOMES[market]:
                    raise UnknownSelectionError(market.value, outcome)
                validate_odds(odds)
                table[market][outcome] = odds
        self.total_line = total_line
        self._odds: Mapping[Market, Mapping[str, int]] = MappingProxyType(
            {m: MappingProxyType(o) for m, o in table.items()}
        )

    def odds_for(self, market: Market | str, outcome: str) -> int:
        m = _parse_market(market)
        try:
            return self._odds[m][outcome]
        except KeyError:
            raise UnknownSelectionError(m.value, outcome) from None

    def outcomes(self, market: Market) -> tuple[str, ...]:
        return _OUTCOMES[market]

    def describe(self, market: Market | str, outcome: str) -> str:
        """Human label for a bet option, e.g. 'Over (> 4.5)'."""
        m = _parse_market(market)
        if outcome not in _OUTCOMES[m]:
            raise UnknownSelectionError(m.value, outcome)
        if m == Market.TOTAL:
            line = _line_display(self.total_line)
            if outcome == TotalCategory.OVER.value:
                return f"Over (> {line})"
            return f"Under (< {line})"
        return outcome.capitalize()

    def as_dict(self) -> dict[str, dict[str, int]]:
        return {m.value: dict(o) for m, o in self._odds.items()}


def _parse_market(market: Market | str) -> Market:
    if isinstance(market, Market):
        return market
    try:
        return Market(market)
    except ValueError:
        raise UnknownSelectionError(str(market), "*") from None
