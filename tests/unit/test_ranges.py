"""
Unit tests for bar range statistics.
"""

import unittest
from decimal import Decimal
from datetime import datetime, timezone, timedelta

from marketseries.models.ohlcv import Bar, OHLCV
from marketseries.models.symbol import PriceUnit, SymbolInfo
from marketseries.indicators.ranges import (
    bar_range,
    bar_range_converted,
    interval_range,
    is_flat,
    largest_bar_index,
    percentage_change,
    smallest_bar_index,
    window_max,
    window_mean,
    window_min,
)
from marketseries.utils.errors import IndexOutOfRangeError, InvalidUnitError, MissingSymbolError


def _make_series(rows, symbol='TEST') -> OHLCV:
    """Build a daily series from (open, high, low, close) tuples."""
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    bars = []
    for i, (o, h, l, c) in enumerate(rows):
        bars.append(Bar(
            open=Decimal(str(o)),
            high=Decimal(str(h)),
            low=Decimal(str(l)),
            close=Decimal(str(c)),
            volume=Decimal('1000'),
            timestamp=start + timedelta(days=i)
        ))
    return OHLCV(symbol=symbol, bars=tuple(bars), timeframe='D1')


def _up_bars(count: int) -> OHLCV:
    return _make_series([(100, 106, 99, 105)] * count)


class TestBarRange(unittest.TestCase):
    """Single bar ranges."""

    def test_shadow_and_body(self):
        data = _up_bars(6)
        self.assertEqual(bar_range(data, 5), Decimal('7'))
        self.assertEqual(bar_range(data, 5, use_body=True), Decimal('5'))

    def test_shadow_contains_body(self):
        data = _make_series([
            (100, 106, 99, 105),
            (105, 105, 95, 95),
            (100, 100.5, 99.5, 100),
        ])
        for i in range(data.length):
            self.assertGreaterEqual(bar_range(data, i), Decimal(0))
            self.assertGreaterEqual(bar_range(data, i, use_body=True), Decimal(0))
            self.assertGreaterEqual(bar_range(data, i), bar_range(data, i, use_body=True))

    def test_out_of_range(self):
        data = _up_bars(3)
        with self.assertRaises(IndexOutOfRangeError):
            bar_range(data, 3)
        with self.assertRaises(IndexOutOfRangeError):
            bar_range(data, -1)


class TestBarRangeConverted(unittest.TestCase):
    """Range unit conversions."""

    def setUp(self):
        self.data = _up_bars(2)
        self.symbol = SymbolInfo(name='TEST', digits=2, pip_size=Decimal('0.1'), tick_size=Decimal('0.01'))

    def test_pips_and_ticks(self):
        self.assertEqual(bar_range_converted(self.data, 1, self.symbol, PriceUnit.PIPS), Decimal('70'))
        self.assertEqual(bar_range_converted(self.data, 1, self.symbol, 'ticks'), Decimal('700'))
        self.assertEqual(bar_range_converted(self.data, 1, self.symbol, 'pips', use_body=True), Decimal('50'))

    def test_price_unit_needs_no_symbol(self):
        self.assertEqual(bar_range_converted(self.data, 1, None, PriceUnit.PRICE), Decimal('7'))

    def test_invalid_unit(self):
        with self.assertRaises(InvalidUnitError):
            bar_range_converted(self.data, 1, self.symbol, 'points')

    def test_missing_symbol(self):
        with self.assertRaises(MissingSymbolError):
            bar_range_converted(self.data, 1, None, PriceUnit.PIPS)
        with self.assertRaises(MissingSymbolError):
            bar_range_converted(self.data, 1, None, 'ticks')


class TestWindowStatistics(unittest.TestCase):
    """Windowed min/max/mean over [index - periods, index]."""

    def setUp(self):
        self.data = _make_series([
            (100, 110, 90, 105),   # 20
            (105, 108, 104, 106),  # 4
            (106, 116, 106, 110),  # 10
            (110, 112, 104, 108),  # 8
        ])

    def test_reductions(self):
        self.assertEqual(window_max(self.data, 3, 3), Decimal('20'))
        self.assertEqual(window_min(self.data, 3, 3), Decimal('4'))
        self.assertEqual(window_mean(self.data, 3, 3), Decimal('10.5'))

    def test_window_is_inclusive(self):
        # periods=1 covers bars 2 and 3
        self.assertEqual(window_max(self.data, 3, 1), Decimal('10'))
        self.assertEqual(window_mean(self.data, 3, 1), Decimal('9'))
        self.assertEqual(window_min(self.data, 2, 0), Decimal('10'))

    def test_body_ranges(self):
        self.assertEqual(window_max(self.data, 3, 3, use_body=True), Decimal('5'))
        self.assertEqual(window_min(self.data, 3, 3, use_body=True), Decimal('1'))

    def test_window_outside_series(self):
        with self.assertRaises(IndexOutOfRangeError):
            window_max(self.data, 2, 3)
        with self.assertRaises(IndexOutOfRangeError):
            window_mean(self.data, 4, 1)

    def test_negative_periods(self):
        with self.assertRaises(ValueError):
            window_min(self.data, 3, -1)


class TestIntervalStatistics(unittest.TestCase):
    """Interval range, flatness and extreme bars."""

    def test_interval_range_shadow(self):
        data = _make_series([(100, 106, 99, 105), (110, 112, 101, 102)])
        self.assertEqual(interval_range(data, 0, 1), Decimal('13'))

    def test_interval_range_body_uses_bar_type(self):
        data = _make_series([(100, 106, 99, 105), (110, 112, 101, 102)])
        # Body lows: 100 (up open), 102 (down close); highs: 105, 110 (down open)
        self.assertEqual(interval_range(data, 0, 1, use_body=True), Decimal('10'))

    def test_interval_range_errors(self):
        data = _up_bars(3)
        with self.assertRaises(ValueError):
            interval_range(data, 2, 1)
        with self.assertRaises(IndexOutOfRangeError):
            interval_range(data, 1, 3)

    def test_constant_prices_are_flat(self):
        data = _make_series([(100, 101, 99, 100)] * 5)
        self.assertTrue(is_flat(data, 0, 4, 0))
        self.assertTrue(is_flat(data, 0, 4, Decimal('0.5')))

    def test_varying_highs_are_not_flat(self):
        data = _make_series([(100, 101, 99, 100), (100, 110, 99, 100), (100, 101, 99, 100)])
        self.assertFalse(is_flat(data, 0, 2, 1))
        self.assertTrue(is_flat(data, 0, 2, 5))

    def test_percentage_change(self):
        data = _make_series([(100, 106, 99, 105), (200, 201, 189, 190)])
        self.assertEqual(percentage_change(data, 0), Decimal('5'))
        self.assertEqual(percentage_change(data, 1), Decimal('-5'))

    def test_largest_bar_index(self):
        data = _make_series([
            (100, 107, 100, 105),  # 7
            (100, 103, 100, 101),  # 3
            (100, 109, 100, 105),  # 9
            (100, 109, 100, 105),  # 9
        ])
        self.assertEqual(largest_bar_index(data, 0, 3), 2)
        self.assertEqual(largest_bar_index(data, 0, 1), 0)

    def test_smallest_bar_index_finds_the_minimum(self):
        """The running minimum starts at +infinity, so a real minimum is always found."""
        data = _make_series([
            (100, 107, 100, 105),  # 7
            (100, 103, 100, 101),  # 3
            (100, 105, 100, 102),  # 5
            (100, 103, 100, 101),  # 3
        ])
        self.assertEqual(smallest_bar_index(data, 0, 3), 1)
        self.assertEqual(smallest_bar_index(data, 2, 3), 3)
        self.assertEqual(smallest_bar_index(data, 2, 2), 2)


if __name__ == '__main__':
    unittest.main()
