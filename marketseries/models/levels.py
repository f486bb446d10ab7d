"""Price level models produced by the profile aggregators."""

from decimal import Decimal
from dataclasses import dataclass, field
from typing import List


@dataclass
class PriceLevel:
    """A price bucket with accumulated volume and visiting bars."""
    level: Decimal
    bullish_volume: int = 0
    bearish_volume: int = 0
    profile: List[int] = field(default_factory=list)  # bar indices, Market Profile only

    @property
    def total_volume(self) -> int:
        return self.bullish_volume + self.bearish_volume

    @property
    def delta(self) -> int:
        """Bullish minus bearish volume."""
        return self.bullish_volume - self.bearish_volume

    @property
    def bar_count(self) -> int:
        """Number of bar visits recorded in the profile."""
        return len(self.profile)

    def copy(self) -> "PriceLevel":
        return PriceLevel(
            level=self.level,
            bullish_volume=self.bullish_volume,
            bearish_volume=self.bearish_volume,
            profile=list(self.profile),
        )
