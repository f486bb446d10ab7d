"""Rejection (pin) bar detector."""

from decimal import Decimal
from typing import Dict, Any

from ..models.candle import BarType, CandlePattern
from ..models.ohlcv import OHLCV
from ..indicators.ranges import bar_range
from .detector import PatternDetector


class RejectionDetector(PatternDetector):
    """
    Small body parked at one end of a wider-than-average bar.

    An UP bar must open above the bar midpoint and close above the third
    quartile; a DOWN bar must open below the midpoint and close below the
    first quartile.
    """

    def __init__(self, config: Dict[str, Any] = None):
        config = config or {}

        # Set attributes BEFORE super().__init__()
        self.max_body_ratio = Decimal(str(config.get('max_body_ratio', 0.3)))
        self.mean_range_periods = config.get('mean_range_periods', 50)

        super().__init__('RejectionDetector', CandlePattern.REJECTION, config)

    def _matches(self, data: OHLCV, index: int) -> bool:
        shadow = bar_range(data, index)
        if self._body_to_range(data, index) >= self.max_body_ratio:
            return False
        if shadow <= self._mean_range_before(data, index, self.mean_range_periods):
            return False

        bar = data.bar(index)
        middle = bar.low + shadow * Decimal('0.5')
        first_quartile = bar.low + shadow * Decimal('0.25')
        third_quartile = bar.low + shadow * Decimal('0.75')

        if bar.bar_type == BarType.UP:
            return bar.open > middle and bar.close > third_quartile
        if bar.bar_type == BarType.DOWN:
            return bar.open < middle and bar.close < first_quartile
        return False

    def _validate_parameters(self) -> None:
        """Validate rejection parameters."""
        if self.max_body_ratio <= 0 or self.max_body_ratio > 1:
            raise ValueError("max_body_ratio must be in (0, 1]")
        if self.mean_range_periods < 1:
            raise ValueError("mean_range_periods must be >= 1")
