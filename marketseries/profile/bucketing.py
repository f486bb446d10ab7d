"""
Price bucketing shared by the volume and market profile aggregators.

A bar touches the prices sampled from its low up to its high in fixed steps,
each rounded to the symbol's digit precision. Levels are keyed by exact
rounded price and kept in first-seen order.
"""

from decimal import Decimal
from typing import Dict, Iterator, List

from ..models.levels import PriceLevel
from ..models.ohlcv import OHLCV
from ..models.symbol import SymbolInfo
from ..series.accessor import last_index
from ..utils.errors import MissingSymbolError
from ..utils.numeric import D


def step_in_price(symbol: SymbolInfo, step_pips) -> Decimal:
    """Price distance of one bucket step."""
    if symbol is None:
        raise MissingSymbolError("Price bucketing needs symbol metadata")
    step_pips = D(step_pips)
    if step_pips <= 0:
        raise ValueError("step_pips must be > 0")
    return symbol.pips_to_price(step_pips)


def touched_prices(low: Decimal, high: Decimal, step: Decimal, symbol: SymbolInfo) -> Iterator[Decimal]:
    """
    Rounded prices a bar spanning [low, high] touches.

    Samples `low + k * step` up to `high` and rounds each one. Steps finer than
    the symbol's precision round several samples to one price, which is
    yielded once. A zero-height bar touches nothing.
    """
    if high <= low:
        return
    previous = None
    k = 0
    sample = low
    while sample <= high:
        price = symbol.round_price(sample)
        if price != previous:
            yield price
            previous = price
        k += 1
        sample = low + step * k


def window_indices(data: OHLCV, periods: int, index: int = None) -> List[int]:
    """
    Bar indices of the window [index - periods + 1, index], newest first.

    `index` defaults to the last bar.
    """
    if periods < 1:
        raise ValueError("periods must be >= 1")
    if index is None:
        index = last_index(data)
    data.check_window(index - periods + 1, index)
    return list(range(index, index - periods, -1))


class LevelBook:
    """Order-preserving map from rounded price to PriceLevel."""

    def __init__(self):
        self._levels: Dict[Decimal, PriceLevel] = {}

    def __len__(self) -> int:
        return len(self._levels)

    def upsert(self, price: Decimal) -> PriceLevel:
        """Return the level at `price`, creating it on first sight."""
        level = self._levels.get(price)
        if level is None:
            level = PriceLevel(level=price)
            self._levels[price] = level
        return level

    def levels(self) -> List[PriceLevel]:
        return list(self._levels.values())
