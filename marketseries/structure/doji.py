"""Doji bar detector."""

from decimal import Decimal
from typing import Dict, Any

from ..models.candle import CandlePattern
from ..models.ohlcv import OHLCV
from ..indicators.ranges import bar_range
from .detector import PatternDetector


class DojiDetector(PatternDetector):
    """Narrow bar (a fraction of the mean range) whose body is under half its range."""

    def __init__(self, config: Dict[str, Any] = None):
        config = config or {}

        self.max_body_ratio = Decimal(str(config.get('max_body_ratio', 0.5)))
        self.mean_range_divisor = Decimal(str(config.get('mean_range_divisor', 3)))
        self.mean_range_periods = config.get('mean_range_periods', 50)

        super().__init__('DojiDetector', CandlePattern.DOJI, config)

    def _matches(self, data: OHLCV, index: int) -> bool:
        mean_range = self._mean_range_before(data, index, self.mean_range_periods)
        return (
            bar_range(data, index) < mean_range / self.mean_range_divisor and
            self._body_to_range(data, index) < self.max_body_ratio
        )

    def _validate_parameters(self) -> None:
        if self.max_body_ratio <= 0 or self.max_body_ratio > 1:
            raise ValueError("max_body_ratio must be in (0, 1]")
        if self.mean_range_divisor <= 0:
            raise ValueError("mean_range_divisor must be > 0")
        if self.mean_range_periods < 1:
            raise ValueError("mean_range_periods must be >= 1")
