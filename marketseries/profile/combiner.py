"""
Level combination: merge neighbouring price levels into coarser bands.
"""

import logging
from typing import Iterable, List

from ..models.levels import PriceLevel
from ..utils.errors import EmptyInputError
from ..utils.numeric import D

logger = logging.getLogger(__name__)


def combine_levels(levels: Iterable[PriceLevel], width) -> List[PriceLevel]:
    """
    Merge price levels lying within `width` of a band's anchor price.

    Levels are visited in ascending price. The first level anchors a band;
    every following level priced within [anchor, anchor + width] is folded into
    it (volumes summed, profiles concatenated), otherwise it anchors the next
    band. Input levels are left untouched.

    Args:
        levels: Price levels from either profile aggregator, in any order
        width: Band height in price units

    Returns:
        Bands in ascending price order

    Raises:
        EmptyInputError: If `levels` is empty
    """
    width = D(width)
    if width < 0:
        raise ValueError("width must be >= 0")

    ordered = sorted(levels, key=lambda lvl: lvl.level)
    if not ordered:
        raise EmptyInputError("No price levels to combine")

    bands = []
    band = ordered[0].copy()
    for level in ordered[1:]:
        if band.level <= level.level <= band.level + width:
            band.bullish_volume += level.bullish_volume
            band.bearish_volume += level.bearish_volume
            band.profile.extend(level.profile)
        else:
            bands.append(band)
            band = level.copy()
    bands.append(band)

    logger.debug("levels_combined", extra={
        "input_levels": len(ordered),
        "bands": len(bands),
        "width": float(width)
    })
    return bands


def point_of_control(levels: Iterable[PriceLevel]) -> PriceLevel:
    """
    Level with the most activity.

    Ranks by total volume, falling back to bar visits when no level carries
    volume (market profiles). The lowest price wins ties.
    """
    ordered = sorted(levels, key=lambda lvl: lvl.level)
    if not ordered:
        raise EmptyInputError("No price levels to rank")

    if any(lvl.total_volume for lvl in ordered):
        return max(ordered, key=lambda lvl: lvl.total_volume)
    return max(ordered, key=lambda lvl: lvl.bar_count)
