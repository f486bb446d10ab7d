"""Three bar reversal detector."""

from typing import Dict, Any

from ..models.candle import BarType, CandlePattern
from ..models.ohlcv import OHLCV
from .detector import PatternDetector


class ThreeBarReversalDetector(PatternDetector):
    """
    Two bars in one direction, the middle one making the extreme, then a bar
    in the other direction closing back past the middle bar's open.
    """

    depth = 2

    def __init__(self, config: Dict[str, Any] = None):
        super().__init__('ThreeBarReversalDetector', CandlePattern.THREE_BAR_REVERSAL, config or {})

    def _matches(self, data: OHLCV, index: int) -> bool:
        bar1 = data.bar(index - 2)
        bar2 = data.bar(index - 1)
        bar3 = data.bar(index)

        types = (bar1.bar_type, bar2.bar_type, bar3.bar_type)

        # Bullish: DOWN, DOWN (lowest low), UP closing above the middle open
        if types == (BarType.DOWN, BarType.DOWN, BarType.UP):
            return (
                bar2.low < bar1.low and
                bar2.low < bar3.low and
                bar3.close > bar2.open
            )

        # Bearish: UP, UP (highest high), DOWN closing below the middle open
        if types == (BarType.UP, BarType.UP, BarType.DOWN):
            return (
                bar2.high > bar1.high and
                bar2.high > bar3.high and
                bar3.close < bar2.open
            )

        return False
