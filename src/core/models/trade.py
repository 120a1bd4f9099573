"""
Trade domain model.

Mirrors one record of a stored backtest ``trades`` array. Records are
trusted producer output: the P&L sign is never re-derived from the outcome,
and a record with an unparseable time or a non-numeric P&L is kept (so it
round-trips unchanged) but flagged as not valid for derived statistics.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from src.core.enums import OrderSide, TradeOutcome
from src.core.exceptions.backtest import InvalidFormatError
from src.core.types import try_float
from src.core.utils.timestamps import parse_timestamp

# Document keys
SIDE_KEY = "ORDEN"
OUTCOME_KEY = "RESULTADO"
ENTRY_KEY = "ENTRADA"
EXIT_KEY = "SALIDA"
TAKE_PROFIT_KEY = "TP"
STOP_LOSS_KEY = "SL"
TIME_KEY = "HORA"
PNL_KEY = "P&L"
IMAGES_KEY = "IMAGE"

_KNOWN_KEYS = {
    SIDE_KEY,
    OUTCOME_KEY,
    ENTRY_KEY,
    EXIT_KEY,
    TAKE_PROFIT_KEY,
    STOP_LOSS_KEY,
    TIME_KEY,
    PNL_KEY,
    IMAGES_KEY,
}


@dataclass(frozen=True)
class TradeImage:
    """Chart snapshot attached to a trade (payload is base64 text)."""

    title: str
    payload: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TradeImage":
        return cls(title=str(data.get("titulo", "")), payload=str(data.get("imagen", "")))

    def to_dict(self) -> dict[str, str]:
        return {"titulo": self.title, "imagen": self.payload}


@dataclass(frozen=True)
class Trade:
    """Represents one executed position of a backtest run."""

    side: OrderSide
    outcome: TradeOutcome
    raw_timestamp: Any
    raw_pnl: Any
    entry_price: float | None = None
    exit_price: float | None = None
    take_profit: float | None = None
    stop_loss: float | None = None
    images: tuple[TradeImage, ...] = ()
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def timestamp(self) -> datetime | None:
        """Trade time in UTC, or None when ``HORA`` is not a valid timestamp."""
        return parse_timestamp(self.raw_timestamp)

    @property
    def pnl(self) -> float | None:
        """Realized P&L, or None when ``P&L`` is not numeric."""
        return try_float(self.raw_pnl)

    @property
    def is_valid(self) -> bool:
        """Check if the record can take part in derived statistics."""
        return self.timestamp is not None and self.pnl is not None

    @property
    def is_win(self) -> bool:
        return self.outcome.is_win

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Trade":
        """Build a trade from its document representation.

        Raises:
            InvalidFormatError: If the side or outcome is not one of the
                allowed values, or the images are not a list
        """
        invalid = []
        try:
            side = OrderSide(data.get(SIDE_KEY))
        except ValueError:
            invalid.append(SIDE_KEY)
        try:
            outcome = TradeOutcome(data.get(OUTCOME_KEY))
        except ValueError:
            invalid.append(OUTCOME_KEY)
        images = data.get(IMAGES_KEY) or []
        if not isinstance(images, list):
            invalid.append(IMAGES_KEY)
        if invalid:
            raise InvalidFormatError(invalid)

        return cls(
            side=side,
            outcome=outcome,
            raw_timestamp=data.get(TIME_KEY),
            raw_pnl=data.get(PNL_KEY),
            entry_price=try_float(data.get(ENTRY_KEY)),
            exit_price=try_float(data.get(EXIT_KEY)),
            take_profit=try_float(data.get(TAKE_PROFIT_KEY)),
            stop_loss=try_float(data.get(STOP_LOSS_KEY)),
            images=tuple(
                TradeImage.from_dict(image) for image in images if isinstance(image, dict)
            ),
            extra={key: value for key, value in data.items() if key not in _KNOWN_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert trade back to its document representation."""
        result: dict[str, Any] = {
            SIDE_KEY: self.side.value,
            OUTCOME_KEY: self.outcome.value,
            ENTRY_KEY: self.entry_price,
        }
        optional_prices = {
            EXIT_KEY: self.exit_price,
            TAKE_PROFIT_KEY: self.take_profit,
            STOP_LOSS_KEY: self.stop_loss,
        }
        result.update({key: value for key, value in optional_prices.items() if value is not None})
        result[TIME_KEY] = self.raw_timestamp
        result[PNL_KEY] = self.raw_pnl
        if self.images:
            result[IMAGES_KEY] = [image.to_dict() for image in self.images]
        result.update(self.extra)
        return result
