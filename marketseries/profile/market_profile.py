"""Market profile: which bars visited each price level."""

import logging
from typing import List, Optional

from ..models.levels import PriceLevel
from ..models.ohlcv import OHLCV
from ..models.symbol import SymbolInfo
from ..utils.errors import MissingSymbolError
from .bucketing import LevelBook, step_in_price, touched_prices, window_indices

logger = logging.getLogger(__name__)


def compute_market_profile(data: OHLCV, symbol: Optional[SymbolInfo], periods: int,
                           step_pips, index: int = None) -> List[PriceLevel]:
    """
    Record, per price level, the indices of the bars whose range touched it.

    Args:
        data: OHLCV time series
        symbol: Symbol metadata (pip size, digits)
        periods: Number of bars ending at `index`
        step_pips: Bucket height in pips
        index: Last bar of the window (default: last bar of the series)

    Returns:
        Price levels in first-seen order; volumes stay zero and each
        level's profile lists bar indices newest first
    """
    if symbol is None:
        raise MissingSymbolError("Market profile needs symbol metadata")
    step = step_in_price(symbol, step_pips)

    book = LevelBook()
    for i in window_indices(data, periods, index):
        bar = data.bar(i)
        for price in touched_prices(bar.low, bar.high, step, symbol):
            book.upsert(price).profile.append(i)

    logger.debug("market_profile_built", extra={
        "symbol": data.symbol,
        "periods": periods,
        "levels": len(book)
    })
    return book.levels()
