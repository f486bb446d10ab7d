"""
OHLCV data models for price bars and time series.
"""

from decimal import Decimal
from datetime import datetime
from dataclasses import dataclass
from typing import Optional, Tuple

from ..utils.errors import IndexOutOfRangeError
from ..utils.numeric import D
from .candle import BarType

TIMESTAMP_COLUMNS = ("timestamp_utc", "timestamp", "datetime", "time")


@dataclass(frozen=True)
class Bar:
    """Single OHLCV bar (immutable)."""
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: Decimal
    timestamp: datetime

    def __post_init__(self):
        if self.high < self.low:
            raise ValueError("High must be >= Low")
        if self.high < self.open or self.high < self.close:
            raise ValueError("High must be >= Open and Close")
        if self.low > self.open or self.low > self.close:
            raise ValueError("Low must be <= Open and Close")
        if self.volume < 0:
            raise ValueError("Volume must be >= 0")

    @property
    def bar_type(self) -> BarType:
        """UP, DOWN or NEUTRAL from the close relative to the open."""
        if self.close > self.open:
            return BarType.UP
        if self.close < self.open:
            return BarType.DOWN
        return BarType.NEUTRAL

    @property
    def is_bullish(self) -> bool:
        return self.bar_type == BarType.UP

    @property
    def is_bearish(self) -> bool:
        return self.bar_type == BarType.DOWN

    @property
    def body_size(self) -> Decimal:
        """Absolute open-close distance."""
        return abs(self.open - self.close)

    @property
    def range_size(self) -> Decimal:
        """High-low distance (shadow range)."""
        return self.high - self.low

    @property
    def body_low(self) -> Decimal:
        return self.open if self.bar_type == BarType.UP else self.close

    @property
    def body_high(self) -> Decimal:
        return self.close if self.bar_type == BarType.UP else self.open


@dataclass(frozen=True)
class OHLCV:
    """Time series of OHLCV bars, index 0 oldest."""
    symbol: str
    bars: Tuple[Bar, ...]
    timeframe: str

    def __post_init__(self):
        if not isinstance(self.bars, tuple):
            object.__setattr__(self, 'bars', tuple(self.bars))
        for prev, curr in zip(self.bars, self.bars[1:]):
            if curr.timestamp <= prev.timestamp:
                raise ValueError("Bar timestamps must be strictly increasing")

    def __len__(self) -> int:
        return len(self.bars)

    @property
    def latest_bar(self) -> Optional[Bar]:
        """Get the most recent bar."""
        return self.bars[-1] if self.bars else None

    @property
    def length(self) -> int:
        """Number of bars."""
        return len(self.bars)

    def bar(self, index: int) -> Bar:
        """
        Get the bar at `index`.

        Negative indices are rejected rather than wrapped around.

        Raises:
            IndexOutOfRangeError: If index is outside [0, length)
        """
        if index < 0 or index >= len(self.bars):
            raise IndexOutOfRangeError(index, len(self.bars))
        return self.bars[index]

    def check_window(self, start: int, end: int) -> None:
        """Raise IndexOutOfRangeError unless every index in [start, end] exists."""
        if start < 0:
            raise IndexOutOfRangeError(start, len(self.bars))
        if end >= len(self.bars):
            raise IndexOutOfRangeError(end, len(self.bars))

    @classmethod
    def from_frame(cls, frame, symbol: str, timeframe: str) -> "OHLCV":
        """
        Build a series from a pandas DataFrame.

        Column names are matched case-insensitively. The timestamp column is the
        first of timestamp_utc, timestamp, datetime or time that is present;
        rows are sorted by it. A missing volume column means zero volume.

        Args:
            frame: DataFrame with open/high/low/close[/volume] columns
            symbol: Symbol name
            timeframe: Timeframe (e.g., 'M15')

        Returns:
            OHLCV series
        """
        import pandas as pd

        df = frame.copy()
        df.columns = [str(c).strip().lower() for c in df.columns]

        time_col = next((c for c in TIMESTAMP_COLUMNS if c in df.columns), None)
        if time_col is None:
            raise ValueError("No timestamp column found in frame")
        missing = [c for c in ("open", "high", "low", "close") if c not in df.columns]
        if missing:
            raise ValueError(f"Missing price columns: {missing}")

        df[time_col] = pd.to_datetime(df[time_col], utc=True)
        df = df.sort_values(time_col)

        bars = []
        for _, row in df.iterrows():
            bars.append(Bar(
                open=D(float(row["open"])),
                high=D(float(row["high"])),
                low=D(float(row["low"])),
                close=D(float(row["close"])),
                volume=D(float(row["volume"])) if "volume" in df.columns else Decimal(0),
                timestamp=row[time_col].to_pydatetime(),
            ))

        return cls(symbol=symbol, bars=tuple(bars), timeframe=timeframe)
