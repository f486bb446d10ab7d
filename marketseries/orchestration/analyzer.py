"""Series analyzer: every analysis operation bound to one series snapshot."""

import logging
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable, List, Optional, Union

from ..models.candle import BarType, CandlePattern
from ..models.config import Config
from ..models.levels import PriceLevel
from ..models.ohlcv import OHLCV
from ..models.symbol import PriceUnit, SymbolInfo
from ..indicators import ranges
from ..profile.combiner import combine_levels, point_of_control
from ..profile.market_profile import compute_market_profile
from ..profile.volume_profile import compute_volume_profile
from ..series.accessor import last_index, time_delta
from ..series.calendar import TradingCalendar, estimate_open_time
from ..structure.manager import PatternClassifier
from ..utils.errors import MissingSymbolError
from ..utils.numeric import D

logger = logging.getLogger(__name__)


class SeriesAnalyzer:
    """
    Analysis facade over an OHLCV snapshot.

    Symbol metadata is resolved from the argument, or else from the
    configured symbol table by the series' symbol name. Profile defaults
    (periods, step, combine width) come from the profile config section.
    """

    def __init__(self, data: OHLCV, symbol: Optional[SymbolInfo] = None,
                 config: Optional[Config] = None, calendar: Optional[TradingCalendar] = None):
        self.data = data
        self.config = config or Config()
        self.symbol = symbol or self._symbol_from_config(data.symbol)
        self.calendar = calendar or TradingCalendar.from_config(self.config.calendar_configs)
        self.classifier = PatternClassifier(self.config.pattern_configs)

        profile_cfg = self.config.profile_configs or {}
        self.default_periods = int(profile_cfg.get('periods', 100))
        self.default_step_pips = D(profile_cfg.get('step_pips', 10))
        self.default_combine_width_pips = D(profile_cfg.get('combine_width_pips', 20))

        logger.info("series_analyzer_initialized", extra={
            "symbol": data.symbol,
            "timeframe": data.timeframe,
            "bars": len(data),
            "has_symbol_info": self.symbol is not None,
            "config_hash": self.config.config_hash.hash_value[:16]
        })

    def _symbol_from_config(self, name: str) -> Optional[SymbolInfo]:
        meta = (self.config.symbol_configs or {}).get(name)
        if meta is None:
            return None
        return SymbolInfo.from_broker_meta(name, meta)

    # ---- Bar accessor / time ----

    @property
    def last_index(self) -> int:
        return last_index(self.data)

    def time_delta(self) -> timedelta:
        return time_delta(self.data)

    def estimate_open_time(self, index: Union[int, float]) -> datetime:
        return estimate_open_time(self.data, index, self.calendar)

    def bar_type(self, index: int) -> BarType:
        return self.data.bar(index).bar_type

    # ---- Ranges ----

    def bar_range(self, index: int, use_body: bool = False) -> Decimal:
        return ranges.bar_range(self.data, index, use_body)

    def bar_range_converted(self, index: int, unit: Union[PriceUnit, str] = PriceUnit.PIPS,
                            use_body: bool = False) -> Decimal:
        return ranges.bar_range_converted(self.data, index, self.symbol, unit, use_body)

    def window_max(self, index: int, periods: int, use_body: bool = False) -> Decimal:
        return ranges.window_max(self.data, index, periods, use_body)

    def window_min(self, index: int, periods: int, use_body: bool = False) -> Decimal:
        return ranges.window_min(self.data, index, periods, use_body)

    def window_mean(self, index: int, periods: int, use_body: bool = False) -> Decimal:
        return ranges.window_mean(self.data, index, periods, use_body)

    def interval_range(self, start_index: int, end_index: int, use_body: bool = False) -> Decimal:
        return ranges.interval_range(self.data, start_index, end_index, use_body)

    def is_flat(self, start_index: int, end_index: int, max_std_dev) -> bool:
        return ranges.is_flat(self.data, start_index, end_index, max_std_dev)

    def percentage_change(self, index: int) -> Decimal:
        return ranges.percentage_change(self.data, index)

    def largest_bar_index(self, start_index: int, end_index: int) -> int:
        return ranges.largest_bar_index(self.data, start_index, end_index)

    def smallest_bar_index(self, start_index: int, end_index: int) -> int:
        return ranges.smallest_bar_index(self.data, start_index, end_index)

    # ---- Patterns ----

    def patterns_of(self, index: int) -> List[CandlePattern]:
        return self.classifier.patterns_of(self.data, index)

    def matches_any(self, index: int, patterns: Iterable[CandlePattern]) -> bool:
        return self.classifier.matches_any(self.data, index, patterns)

    def matches_all(self, index: int, patterns: Iterable[CandlePattern]) -> bool:
        return self.classifier.matches_all(self.data, index, patterns)

    # ---- Profiles ----

    def volume_profile(self, periods: int = None, step_pips=None, index: int = None) -> List[PriceLevel]:
        return compute_volume_profile(
            self.data, self.symbol,
            periods if periods is not None else self.default_periods,
            step_pips if step_pips is not None else self.default_step_pips,
            index
        )

    def market_profile(self, periods: int = None, step_pips=None, index: int = None) -> List[PriceLevel]:
        return compute_market_profile(
            self.data, self.symbol,
            periods if periods is not None else self.default_periods,
            step_pips if step_pips is not None else self.default_step_pips,
            index
        )

    def combine(self, levels: Iterable[PriceLevel], width=None) -> List[PriceLevel]:
        """Combine levels; `width` defaults to the configured width in pips converted to price."""
        if width is None:
            if self.symbol is None:
                raise MissingSymbolError("Default combine width is in pips and needs symbol metadata")
            width = self.symbol.pips_to_price(self.default_combine_width_pips)
        return combine_levels(levels, width)

    def point_of_control(self, levels: Iterable[PriceLevel]) -> PriceLevel:
        return point_of_control(levels)
