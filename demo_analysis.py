"""
marketseries analysis demo

Runs every analysis family over a synthetic EURUSD M15 series.
"""

import json
import logging
from decimal import Decimal
from datetime import datetime, timezone, timedelta

from marketseries.models.ohlcv import Bar, OHLCV
from marketseries.models.config import Config
from marketseries.orchestration.analyzer import SeriesAnalyzer
from marketseries.utils.log import setup_logging
from configs import config_loader

logger = logging.getLogger(__name__)


def create_sample_data() -> OHLCV:
    """Create sample OHLCV data for demonstration."""
    bars = []
    base_price = Decimal('1.1000')
    start = datetime(2024, 1, 8, tzinfo=timezone.utc)

    # 120 weekday bars of sample data
    for i in range(120):
        timestamp = start + timedelta(minutes=15 * i)

        price_change = Decimal(str((i % 10 - 5) * 0.0001))
        open_price = base_price + price_change
        close_price = open_price + Decimal(str((i % 3 - 1) * 0.0002))
        high_price = max(open_price, close_price) + Decimal('0.0005')
        low_price = min(open_price, close_price) - Decimal('0.0003')

        bars.append(Bar(
            open=open_price,
            high=high_price,
            low=low_price,
            close=close_price,
            volume=Decimal(1000 + 50 * (i % 7)),
            timestamp=timestamp
        ))
        base_price = close_price

    return OHLCV(symbol='EURUSD', bars=tuple(bars), timeframe='M15')


def main():
    """Main demo function."""
    log_file = setup_logging()
    logger.info("demo_started", extra={"log_file": str(log_file)})

    data = create_sample_data()
    config = Config.from_loader(config_loader)
    analyzer = SeriesAnalyzer(data, config=config)

    last = analyzer.last_index
    report = {
        "bars": len(data),
        "config_hash": config.config_hash.hash_value[:16],
        "last_bar_type": analyzer.bar_type(last).value,
        "last_range_pips": str(analyzer.bar_range_converted(last)),
        "mean_range_20": str(analyzer.window_mean(last, 20)),
        "patterns": {
            str(i): [p.value for p in analyzer.patterns_of(i)]
            for i in range(last - 10, last + 1)
        },
        "next_bar_open": analyzer.estimate_open_time(last + 1).isoformat(),
    }

    volume_levels = analyzer.volume_profile(periods=50, step_pips=2)
    bands = analyzer.combine(volume_levels)
    poc = analyzer.point_of_control(bands)
    report["volume_bands"] = [
        {"level": str(b.level), "bullish": b.bullish_volume, "bearish": b.bearish_volume}
        for b in bands
    ]
    report["point_of_control"] = str(poc.level)

    market_levels = analyzer.market_profile(periods=50, step_pips=2)
    report["market_profile_levels"] = len(market_levels)

    print(json.dumps(report, indent=2))


if __name__ == "__main__":
    main()
