"""Inside bar detector."""

from typing import Dict, Any

from ..models.candle import CandlePattern
from ..models.ohlcv import OHLCV
from .detector import PatternDetector


class InsideBarDetector(PatternDetector):
    """Bar strictly inside the previous bar's range, with the direction flipped."""

    def __init__(self, config: Dict[str, Any] = None):
        super().__init__('InsideBarDetector', CandlePattern.INSIDE_BAR, config or {})

    def _matches(self, data: OHLCV, index: int) -> bool:
        curr_bar = data.bar(index)
        prev_bar = data.bar(index - 1)

        return (
            curr_bar.high < prev_bar.high and
            curr_bar.low > prev_bar.low and
            curr_bar.bar_type != prev_bar.bar_type
        )
