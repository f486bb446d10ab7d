"""Base detector class for all candle pattern detectors."""

import logging
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Dict, Any

from ..models.candle import CandlePattern
from ..models.ohlcv import OHLCV
from ..indicators.ranges import bar_range, window_mean

logger = logging.getLogger(__name__)


class PatternDetector(ABC):
    """Abstract base class for all candle pattern detectors."""

    # Number of bars before `index` the predicate reads
    depth = 1

    def __init__(self, name: str, pattern: CandlePattern, parameters: Dict[str, Any]):
        """
        Initialize detector.

        Args:
            name: Detector name (e.g., 'EngulfingDetector')
            pattern: Candle pattern this detector recognises
            parameters: Configuration parameters
        """
        self.name = name
        self.pattern = pattern
        self.parameters = parameters or {}
        self.enabled = self.parameters.get('enabled', True)

        # Validate parameters (subclass can override)
        self._validate_parameters()

        logger.debug(f"Initialized {self.name}", extra={
            "pattern": pattern.value,
            "enabled": self.enabled
        })

    def matches(self, data: OHLCV, index: int) -> bool:
        """
        Evaluate the pattern at bar `index`.

        Raises:
            IndexOutOfRangeError: If `index` or any bar the pattern reads is
                outside the series
        """
        data.check_window(index - self.depth, index)
        matched = self._matches(data, index)
        if matched:
            logger.debug("pattern_matched", extra={
                "pattern": self.pattern.value,
                "symbol": data.symbol,
                "bar_index": index
            })
        return matched

    @abstractmethod
    def _matches(self, data: OHLCV, index: int) -> bool:
        """Pattern predicate; indices [index - depth, index] are known to exist."""

    def _validate_parameters(self) -> None:
        """
        Validate detector parameters.

        Subclasses should override to validate their specific parameters.
        Called during __init__(), so subclass attributes must be set BEFORE super().__init__().
        """
        pass

    @staticmethod
    def _mean_range_before(data: OHLCV, index: int, periods: int) -> Decimal:
        """
        Mean shadow range over `periods` bars ending at index - 1.

        The lookback is clipped to the bars that exist.
        """
        end = index - 1
        return window_mean(data, end, min(periods, end))

    @staticmethod
    def _body_to_range(data: OHLCV, index: int) -> Decimal:
        shadow = bar_range(data, index)
        if shadow == 0:
            return Decimal('Infinity')
        return bar_range(data, index, use_body=True) / shadow

    def get_info(self) -> Dict[str, Any]:
        """Detector name, pattern and parameters."""
        return {
            'name': self.name,
            'pattern': self.pattern.value,
            'enabled': self.enabled,
            'parameters': dict(self.parameters)
        }
