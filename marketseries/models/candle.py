"""Bar type and candle pattern enumerations."""

from enum import Enum


class BarType(Enum):
    """Direction of a single bar."""
    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


class CandlePattern(Enum):
    """Candle patterns recognised by the classifier, in evaluation order."""
    ENGULFING = "engulfing"
    REJECTION = "rejection"
    DOJI = "doji"
    INSIDE_BAR = "inside_bar"
    THREE_BAR_REVERSAL = "three_bar_reversal"
