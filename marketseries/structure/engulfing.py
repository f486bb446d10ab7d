"""
Engulfing bar detector.
"""

from typing import Dict, Any

from ..models.candle import CandlePattern
from ..models.ohlcv import OHLCV
from ..indicators.ranges import bar_range
from .detector import PatternDetector


class EngulfingDetector(PatternDetector):
    """Body of the bar exceeds the full range of the previous bar, with the direction flipped."""

    def __init__(self, config: Dict[str, Any] = None):
        config = config or {}
        super().__init__('EngulfingDetector', CandlePattern.ENGULFING, config)

    def _matches(self, data: OHLCV, index: int) -> bool:
        body = bar_range(data, index, use_body=True)
        previous_range = bar_range(data, index - 1)

        return (
            body > previous_range and
            data.bar(index).bar_type != data.bar(index - 1).bar_type
        )
