"""Candle pattern classifier - coordinates all pattern detectors."""

import logging
from typing import Iterable, List, Dict, Any

from ..models.candle import CandlePattern
from ..models.ohlcv import OHLCV
from .detector import PatternDetector
from .engulfing import EngulfingDetector
from .rejection import RejectionDetector
from .doji import DojiDetector
from .inside_bar import InsideBarDetector
from .three_bar_reversal import ThreeBarReversalDetector

logger = logging.getLogger(__name__)


class PatternClassifier:
    """Evaluates every enabled pattern detector against a bar."""

    def __init__(self, config: Dict[str, Any] = None):
        self.config = config or {}
        self.detectors: List[PatternDetector] = []
        self._initialize_detectors()

    def _initialize_detectors(self):
        """Initialize all enabled detectors, in pattern evaluation order."""
        shared = {}
        if 'mean_range_periods' in self.config:
            shared['mean_range_periods'] = self.config['mean_range_periods']

        factories = [
            ('engulfing', EngulfingDetector),
            ('rejection', RejectionDetector),
            ('doji', DojiDetector),
            ('inside_bar', InsideBarDetector),
            ('three_bar_reversal', ThreeBarReversalDetector),
        ]
        for key, factory in factories:
            detector_config = {**shared, **self.config.get(key, {})}
            if detector_config.get('enabled', True):
                self.detectors.append(factory(detector_config))

        names = [d.name for d in self.detectors]
        logger.info(f"Initialized {len(self.detectors)} pattern detectors: {names}")

    def patterns_of(self, data: OHLCV, index: int) -> List[CandlePattern]:
        """
        Patterns matched by bar `index`.

        Returns:
            Matching patterns in order: engulfing, rejection, doji, inside bar,
            three bar reversal

        Raises:
            IndexOutOfRangeError: If a bar a detector reads is outside the series
        """
        return [d.pattern for d in self.detectors if d.matches(data, index)]

    def matches_any(self, data: OHLCV, index: int, patterns: Iterable[CandlePattern]) -> bool:
        """True if the bar matches at least one of `patterns`."""
        found = set(self.patterns_of(data, index))
        return any(p in found for p in patterns)

    def matches_all(self, data: OHLCV, index: int, patterns: Iterable[CandlePattern]) -> bool:
        """True if the bar matches every one of `patterns` (an empty target always matches)."""
        found = set(self.patterns_of(data, index))
        return all(p in found for p in patterns)
