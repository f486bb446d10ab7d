"""
Bar range statistics: per-bar ranges, windowed reductions and interval checks.
"""

import statistics
from decimal import Decimal
from typing import List, Optional, Union

from ..models.ohlcv import OHLCV
from ..models.symbol import PriceUnit, SymbolInfo
from ..utils.errors import InvalidUnitError, MissingSymbolError


def bar_range(data: OHLCV, index: int, use_body: bool = False) -> Decimal:
    """
    Range of a bar.

    Args:
        data: OHLCV time series
        index: Bar index
        use_body: Use |open - close| instead of high - low

    Returns:
        Non-negative price distance
    """
    bar = data.bar(index)
    return bar.body_size if use_body else bar.range_size


def _resolve_unit(unit: Union[PriceUnit, str]) -> PriceUnit:
    if isinstance(unit, PriceUnit):
        return unit
    try:
        return PriceUnit(str(unit).lower())
    except ValueError:
        raise InvalidUnitError(f"Unknown price unit: {unit!r}") from None


def bar_range_converted(data: OHLCV, index: int, symbol: Optional[SymbolInfo],
                        unit: Union[PriceUnit, str] = PriceUnit.PIPS,
                        use_body: bool = False) -> Decimal:
    """
    Range of a bar expressed in price, pips or ticks.

    Raises:
        InvalidUnitError: If `unit` is not price, pips or ticks
        MissingSymbolError: If pips or ticks are requested without a symbol
    """
    unit = _resolve_unit(unit)
    value = bar_range(data, index, use_body)

    if unit == PriceUnit.PRICE:
        return value
    if symbol is None:
        raise MissingSymbolError(f"Converting a range to {unit.value} needs symbol metadata")
    if unit == PriceUnit.PIPS:
        return symbol.to_pips(value)
    return symbol.to_ticks(value)


def _window_ranges(data: OHLCV, index: int, periods: int, use_body: bool) -> List[Decimal]:
    """Ranges over the inclusive window [index - periods, index]."""
    if periods < 0:
        raise ValueError("periods must be >= 0")
    data.check_window(index - periods, index)
    return [bar_range(data, i, use_body) for i in range(index, index - periods - 1, -1)]


def window_max(data: OHLCV, index: int, periods: int, use_body: bool = False) -> Decimal:
    """Largest bar range in [index - periods, index]."""
    return max(_window_ranges(data, index, periods, use_body))


def window_min(data: OHLCV, index: int, periods: int, use_body: bool = False) -> Decimal:
    """Smallest bar range in [index - periods, index]."""
    return min(_window_ranges(data, index, periods, use_body))


def window_mean(data: OHLCV, index: int, periods: int, use_body: bool = False) -> Decimal:
    """Arithmetic mean bar range in [index - periods, index]."""
    return statistics.mean(_window_ranges(data, index, periods, use_body))


def interval_range(data: OHLCV, start_index: int, end_index: int, use_body: bool = False) -> Decimal:
    """
    Distance between the highest and lowest price in an interval.

    With `use_body`, each bar contributes its body extremes instead of its
    shadow extremes.
    """
    if end_index < start_index:
        raise ValueError("end_index must be >= start_index")
    data.check_window(start_index, end_index)

    bars = data.bars[start_index:end_index + 1]
    if use_body:
        highest = max(b.body_high for b in bars)
        lowest = min(b.body_low for b in bars)
    else:
        highest = max(b.high for b in bars)
        lowest = min(b.low for b in bars)
    return highest - lowest


def is_flat(data: OHLCV, start_index: int, end_index: int, max_std_dev) -> bool:
    """True if the population std dev of highs and of lows both stay within max_std_dev."""
    if end_index < start_index:
        raise ValueError("end_index must be >= start_index")
    data.check_window(start_index, end_index)

    bars = data.bars[start_index:end_index + 1]
    limit = Decimal(str(max_std_dev))
    high_std = statistics.pstdev([b.high for b in bars])
    low_std = statistics.pstdev([b.low for b in bars])
    return high_std <= limit and low_std <= limit


def percentage_change(data: OHLCV, index: int) -> Decimal:
    """Close-to-open change of a bar, in percent of its open."""
    bar = data.bar(index)
    if bar.open == 0:
        raise ValueError(f"Bar {index} has a zero open price")
    return -((bar.open - bar.close) / bar.open) * 100


def largest_bar_index(data: OHLCV, start_index: int, end_index: int) -> int:
    """Index of the widest shadow range in [start_index, end_index]; first one wins ties."""
    if end_index < start_index:
        raise ValueError("end_index must be >= start_index")
    data.check_window(start_index, end_index)

    best_index = start_index
    best_range = Decimal('-Infinity')
    for i in range(start_index, end_index + 1):
        current = bar_range(data, i)
        if current > best_range:
            best_range, best_index = current, i
    return best_index


def smallest_bar_index(data: OHLCV, start_index: int, end_index: int) -> int:
    """Index of the narrowest shadow range in [start_index, end_index]; first one wins ties."""
    if end_index < start_index:
        raise ValueError("end_index must be >= start_index")
    data.check_window(start_index, end_index)

    best_index = start_index
    best_range = Decimal('Infinity')
    for i in range(start_index, end_index + 1):
        current = bar_range(data, i)
        if current < best_range:
            best_range, best_index = current, i
    return best_index
