"""
Symbol metadata: pip size, price precision and pip/tick conversions.
"""

from decimal import Decimal
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..utils.numeric import D, quantize_digits


class PriceUnit(Enum):
    """Units a price distance can be expressed in."""
    PRICE = "price"
    PIPS = "pips"
    TICKS = "ticks"


@dataclass(frozen=True)
class SymbolInfo:
    """Instrument metadata (immutable)."""
    name: str
    digits: int
    pip_size: Decimal
    tick_size: Decimal

    def __post_init__(self):
        object.__setattr__(self, 'pip_size', D(self.pip_size))
        object.__setattr__(self, 'tick_size', D(self.tick_size))
        if self.digits < 0:
            raise ValueError("digits must be >= 0")
        if self.pip_size <= 0:
            raise ValueError("pip_size must be > 0")
        if self.tick_size <= 0:
            raise ValueError("tick_size must be > 0")

    def to_pips(self, price_delta) -> Decimal:
        """Convert a price distance to pips."""
        return D(price_delta) / self.pip_size

    def to_ticks(self, price_delta) -> Decimal:
        """Convert a price distance to ticks."""
        return D(price_delta) / self.tick_size

    def pips_to_price(self, pips) -> Decimal:
        """Convert a pip count to a price distance."""
        return D(pips) * self.pip_size

    def round_price(self, price) -> Decimal:
        """Round a price to the symbol's digit precision."""
        return quantize_digits(price, self.digits)

    @classmethod
    def from_broker_meta(cls, name: str, meta: Dict[str, Any]) -> "SymbolInfo":
        """
        Build from broker symbol metadata.

        Expects `digits` and `point` (tick size). `pip_size` is optional; when
        absent, 3- and 5-digit quotes use ten points per pip, others one.
        """
        if meta is None or "digits" not in meta or "point" not in meta:
            raise ValueError(f"Broker metadata for {name} needs 'digits' and 'point'")

        digits = int(meta["digits"])
        point = D(str(meta["point"]))
        pip_size: Optional[Any] = meta.get("pip_size")
        if pip_size is None:
            pip_size = point * 10 if digits in (3, 5) else point

        return cls(name=name, digits=digits, pip_size=D(str(pip_size)), tick_size=point)
