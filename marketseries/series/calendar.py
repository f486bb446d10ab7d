"""
Trading calendar and future bar time extrapolation.

The calendar is a simplified model: configurable non-trading weekdays plus an
optional set of holiday dates. Intraday session hours are not modelled.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, Optional, Union

from ..models.ohlcv import OHLCV
from ..utils.errors import IndexOutOfRangeError
from .accessor import last_index, time_delta

logger = logging.getLogger(__name__)

WEEKDAY_NAMES = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


class TradingCalendar:
    """
    Decides which calendar days carry no bars.

    Usage:
        calendar = TradingCalendar()  # Saturday and Sunday closed
        calendar.is_non_trading_day(datetime(2024, 1, 6))  # True
    """

    DEFAULT_NON_TRADING_WEEKDAYS = (5, 6)

    def __init__(self, non_trading_weekdays: Iterable[int] = DEFAULT_NON_TRADING_WEEKDAYS,
                 holidays: Iterable[date] = ()):
        self.non_trading_weekdays = frozenset(non_trading_weekdays)
        self.holidays = frozenset(holidays)

        for weekday in self.non_trading_weekdays:
            if weekday < 0 or weekday > 6:
                raise ValueError(f"Invalid weekday number: {weekday}")
        if len(self.non_trading_weekdays) == 7:
            raise ValueError("Calendar must leave at least one trading weekday")

    def is_non_trading_day(self, moment: Union[datetime, date]) -> bool:
        day = moment.date() if isinstance(moment, datetime) else moment
        return day.weekday() in self.non_trading_weekdays or day in self.holidays

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]]) -> "TradingCalendar":
        """
        Build from a calendar config section.

        Keys: `non_trading_weekdays` (names, e.g. ["saturday", "sunday"]) and
        `holidays` (ISO dates).
        """
        config = config or {}
        names = config.get('non_trading_weekdays')
        if names is None:
            weekdays = cls.DEFAULT_NON_TRADING_WEEKDAYS
        else:
            weekdays = [WEEKDAY_NAMES.index(str(n).lower()) for n in names]
        holidays = [date.fromisoformat(d) for d in config.get('holidays', [])]
        return cls(non_trading_weekdays=weekdays, holidays=holidays)


def estimate_open_time(data: OHLCV, index: Union[int, float],
                       calendar: Optional[TradingCalendar] = None) -> datetime:
    """
    Estimate the open time of bar `index`, which may lie past the series end.

    Known bars return their stored timestamp. Future bars step forward from the
    last timestamp one typical bar gap at a time; a step landing on a
    non-trading day is repeated until it lands on a trading day. The
    fractional part of the distance adds a proportional share of one gap.

    Args:
        data: OHLCV time series
        index: Bar index; may be fractional beyond the last bar
        calendar: Non-trading day predicate (default: weekends closed)

    Returns:
        Estimated open time

    Raises:
        IndexOutOfRangeError: If index is negative or the series is empty
        InsufficientHistoryError: If the bar gap cannot be resolved
    """
    calendar = calendar or TradingCalendar()
    last = last_index(data)

    if index < 0:
        raise IndexOutOfRangeError(index, len(data))
    if index <= last:
        return data.bar(int(index)).timestamp

    delta = time_delta(data)
    distance = index - last
    whole_steps = int(distance)
    fraction = distance - whole_steps

    moment = data.bar(last).timestamp
    for _ in range(whole_steps):
        moment += delta
        while calendar.is_non_trading_day(moment):
            moment += delta

    if fraction > 0:
        moment += timedelta(minutes=delta.total_seconds() / 60 * float(fraction))

    logger.debug("open_time_estimated", extra={
        "symbol": data.symbol,
        "index": index,
        "last_index": last,
        "estimate": moment.isoformat()
    })
    return moment
