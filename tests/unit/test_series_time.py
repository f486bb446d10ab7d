"""
Unit tests for the bar accessor and future open-time estimation.
"""

import pytest
from decimal import Decimal
from datetime import date, datetime, timezone, timedelta

from marketseries.models.ohlcv import Bar, OHLCV
from marketseries.series.accessor import last_index, time_delta
from marketseries.series.calendar import TradingCalendar, estimate_open_time
from marketseries.utils.errors import IndexOutOfRangeError, InsufficientHistoryError


def _bar(timestamp: datetime) -> Bar:
    return Bar(Decimal('1.1000'), Decimal('1.1010'), Decimal('1.0990'), Decimal('1.1005'),
               Decimal('1000'), timestamp)


def _series(timestamps) -> OHLCV:
    return OHLCV(symbol='EURUSD', bars=tuple(_bar(t) for t in timestamps), timeframe='D1')


def _weekday_daily_series() -> OHLCV:
    """Tue 2 Jan 2024 .. Thu 11 Jan 2024, weekdays only."""
    days = [2, 3, 4, 5, 8, 9, 10, 11]
    return _series([datetime(2024, 1, d, tzinfo=timezone.utc) for d in days])


class TestLastIndex:
    """Last bar index resolution."""

    def test_non_empty(self):
        data = _weekday_daily_series()
        assert last_index(data) == 7

    def test_empty_series_returns_length(self):
        data = OHLCV(symbol='EURUSD', bars=(), timeframe='D1')
        assert last_index(data) == 0


class TestTimeDelta:
    """Typical bar gap detection."""

    def test_uniform_gaps(self):
        start = datetime(2024, 1, 2, tzinfo=timezone.utc)
        data = _series([start + timedelta(hours=i) for i in range(7)])
        assert time_delta(data) == timedelta(hours=1)

    def test_weekend_gap_is_outvoted(self):
        assert time_delta(_weekday_daily_series()) == timedelta(days=1)

    def test_tie_goes_to_last_encountered_group(self):
        # Newest-first gaps: 1h, 2h, 1h, 2h, 3h -> 1h and 2h both seen twice
        start = datetime(2024, 1, 2, tzinfo=timezone.utc)
        offsets = [0, 3, 5, 6, 8, 9]
        data = _series([start + timedelta(hours=h) for h in offsets])
        assert time_delta(data) == timedelta(hours=2)

    def test_only_recent_gaps_count(self):
        # Old 1h gaps are outside the five most recent gaps
        start = datetime(2024, 1, 2, tzinfo=timezone.utc)
        offsets = [0, 1, 2, 3, 4, 6, 8, 10, 12, 14]
        data = _series([start + timedelta(hours=h) for h in offsets])
        assert time_delta(data) == timedelta(hours=2)

    def test_insufficient_history(self):
        start = datetime(2024, 1, 2, tzinfo=timezone.utc)
        data = _series([start + timedelta(hours=i) for i in range(5)])
        with pytest.raises(InsufficientHistoryError):
            time_delta(data)

    def test_exactly_five_prior_bars_is_enough(self):
        start = datetime(2024, 1, 2, tzinfo=timezone.utc)
        data = _series([start + timedelta(hours=i) for i in range(6)])
        assert time_delta(data) == timedelta(hours=1)


class TestEstimateOpenTime:
    """Future bar open-time extrapolation."""

    def test_known_index_returns_stored_time(self):
        data = _weekday_daily_series()
        assert estimate_open_time(data, 7) == data.bar(7).timestamp
        assert estimate_open_time(data, 0) == data.bar(0).timestamp

    def test_one_step_beyond(self):
        data = _weekday_daily_series()
        assert estimate_open_time(data, 8) == datetime(2024, 1, 12, tzinfo=timezone.utc)

    def test_weekend_is_skipped(self):
        data = _weekday_daily_series()
        # Thu 11 -> Fri 12 -> (Sat 13, Sun 14 skipped) -> Mon 15
        assert estimate_open_time(data, 9) == datetime(2024, 1, 15, tzinfo=timezone.utc)
        assert estimate_open_time(data, 10) == datetime(2024, 1, 16, tzinfo=timezone.utc)

    def test_fractional_index_interpolates(self):
        data = _weekday_daily_series()
        expected = datetime(2024, 1, 12, 12, 0, tzinfo=timezone.utc)
        assert estimate_open_time(data, 8.5) == expected

    def test_holiday_calendar(self):
        data = _weekday_daily_series()
        calendar = TradingCalendar(holidays=[date(2024, 1, 12)])
        assert estimate_open_time(data, 8, calendar) == datetime(2024, 1, 15, tzinfo=timezone.utc)

    def test_seven_day_calendar_never_skips(self):
        data = _weekday_daily_series()
        calendar = TradingCalendar(non_trading_weekdays=())
        assert estimate_open_time(data, 9, calendar) == datetime(2024, 1, 13, tzinfo=timezone.utc)

    def test_negative_index(self):
        with pytest.raises(IndexOutOfRangeError):
            estimate_open_time(_weekday_daily_series(), -1)

    def test_negative_fraction_is_not_truncated_to_first_bar(self):
        with pytest.raises(IndexOutOfRangeError):
            estimate_open_time(_weekday_daily_series(), -0.5)

    def test_future_index_needs_history(self):
        start = datetime(2024, 1, 2, tzinfo=timezone.utc)
        data = _series([start + timedelta(days=i) for i in range(3)])
        with pytest.raises(InsufficientHistoryError):
            estimate_open_time(data, 5)


class TestTradingCalendar:

    def test_default_weekends(self):
        calendar = TradingCalendar()
        assert calendar.is_non_trading_day(datetime(2024, 1, 6))
        assert calendar.is_non_trading_day(date(2024, 1, 7))
        assert not calendar.is_non_trading_day(datetime(2024, 1, 8))

    def test_from_config(self):
        calendar = TradingCalendar.from_config({
            'non_trading_weekdays': ['Friday', 'saturday'],
            'holidays': ['2024-12-25']
        })
        assert calendar.is_non_trading_day(date(2024, 1, 5))
        assert not calendar.is_non_trading_day(date(2024, 1, 7))
        assert calendar.is_non_trading_day(date(2024, 12, 25))

    def test_from_empty_config_uses_weekends(self):
        calendar = TradingCalendar.from_config(None)
        assert calendar.non_trading_weekdays == frozenset({5, 6})

    def test_invalid_weekdays(self):
        with pytest.raises(ValueError):
            TradingCalendar(non_trading_weekdays=[7])
        with pytest.raises(ValueError):
            TradingCalendar(non_trading_weekdays=range(7))
