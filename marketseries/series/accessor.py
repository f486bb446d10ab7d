"""Index and timing helpers over a bar series."""

import logging
from collections import Counter
from datetime import timedelta

from ..models.ohlcv import OHLCV
from ..utils.errors import InsufficientHistoryError

logger = logging.getLogger(__name__)

TIME_DELTA_SAMPLES = 5


def last_index(data: OHLCV) -> int:
    """
    Index of the most recent bar.

    An empty series returns 0 (its length) rather than -1.
    """
    count = len(data)
    return count - 1 if count > 0 else count


def time_delta(data: OHLCV, samples: int = TIME_DELTA_SAMPLES) -> timedelta:
    """
    Most frequent gap between consecutive bar timestamps.

    The `samples` most recent gaps are scanned newest first. When several gap
    values share the highest count, the one whose first occurrence comes last
    in that scan wins.

    Args:
        data: OHLCV time series
        samples: Number of gaps to inspect (default 5)

    Returns:
        Typical bar-to-bar timedelta

    Raises:
        InsufficientHistoryError: If fewer than `samples` bars precede the last bar
    """
    index = last_index(data)
    if len(data) == 0 or index < samples:
        raise InsufficientHistoryError(
            f"time_delta needs {samples} prior bars, series has {max(index, 0)}"
        )

    bars = data.bars
    gaps = [bars[i].timestamp - bars[i - 1].timestamp for i in range(index, index - samples, -1)]

    best_gap = None
    best_count = 0
    for gap, count in Counter(gaps).items():
        if count >= best_count:
            best_gap, best_count = gap, count

    logger.debug("time_delta_resolved", extra={
        "symbol": data.symbol,
        "gap_seconds": best_gap.total_seconds(),
        "count": best_count
    })
    return best_gap
