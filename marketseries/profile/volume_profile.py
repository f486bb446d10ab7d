"""
Volume profile: estimated buy/sell volume distributed over price levels.
"""

import logging
from typing import Iterable, Iterator, List, Optional

from ..models.levels import PriceLevel
from ..models.ohlcv import OHLCV
from ..models.symbol import SymbolInfo
from ..utils.errors import MissingSymbolError
from ..utils.numeric import D
from .bucketing import LevelBook, step_in_price, touched_prices, window_indices

logger = logging.getLogger(__name__)


def eligible_bars(data: OHLCV, symbol: SymbolInfo, indices: Iterable[int]) -> Iterator[int]:
    """
    Drop bars that cannot carry volume: a non-positive range, a non-positive
    volume, or a range whose tick count is not positive.
    """
    for i in indices:
        bar = data.bar(i)
        shadow = bar.range_size
        if shadow <= 0 or bar.volume <= 0 or symbol.to_ticks(shadow) <= 0:
            logger.debug("volume_profile_bar_skipped", extra={
                "symbol": data.symbol,
                "bar_index": i,
                "range": float(shadow),
                "volume": float(bar.volume)
            })
            continue
        yield i


def compute_volume_profile(data: OHLCV, symbol: Optional[SymbolInfo], periods: int,
                           step_pips, index: int = None) -> List[PriceLevel]:
    """
    Distribute each bar's tick volume over the price levels it touched.

    The share of the bar's range below the close counts as bullish volume and
    the share above the close as bearish volume. Each share is divided by the
    bar height in steps and added, truncated to whole volume, to every level
    the bar touched.

    Args:
        data: OHLCV time series
        symbol: Symbol metadata (pip size, digits)
        periods: Number of bars ending at `index`
        step_pips: Bucket height in pips
        index: Last bar of the window (default: last bar of the series)

    Returns:
        Price levels in first-seen order, newest bar first

    Raises:
        MissingSymbolError: If symbol is None
        IndexOutOfRangeError: If the window extends outside the series
    """
    if symbol is None:
        raise MissingSymbolError("Volume profile needs symbol metadata")
    step_pips = D(step_pips)
    step = step_in_price(symbol, step_pips)
    indices = window_indices(data, periods, index)

    book = LevelBook()
    used = 0
    for i in eligible_bars(data, symbol, indices):
        bar = data.bar(i)
        shadow = bar.range_size

        above_close = (bar.high - bar.close) / shadow
        below_close = (bar.close - bar.low) / shadow

        range_in_steps = symbol.to_pips(shadow) / step_pips
        bullish_per_level = int(bar.volume * below_close / range_in_steps)
        bearish_per_level = int(bar.volume * above_close / range_in_steps)

        for price in touched_prices(bar.low, bar.high, step, symbol):
            level = book.upsert(price)
            level.bullish_volume += bullish_per_level
            level.bearish_volume += bearish_per_level
        used += 1

    logger.debug("volume_profile_built", extra={
        "symbol": data.symbol,
        "periods": periods,
        "bars_used": used,
        "levels": len(book)
    })
    return book.levels()
