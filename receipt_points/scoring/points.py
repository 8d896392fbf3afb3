"""Loyalty points calculator.

Seven additive rules score a receipt. Each rule is evaluated on its own, so
the order below does not change the result. Numeric fields that fail to
parse never raise: the affected rule contributes nothing and the path taken
is recorded in ``PointsBreakdown.fallbacks`` for compatibility with the
permissive scoring older clients relied on.
"""

from dataclasses import dataclass
from decimal import ROUND_CEILING, Decimal, InvalidOperation, localcontext
from typing import Iterable, List, Optional, Protocol, Tuple

import structlog

logger = structlog.get_logger()

ROUND_TOTAL_POINTS = 50
QUARTER_TOTAL_POINTS = 25
ITEM_PAIR_POINTS = 5
ODD_DAY_POINTS = 6
AFTERNOON_POINTS = 10

QUARTERS_PER_DOLLAR = 4
DESCRIPTION_PRICE_MULTIPLIER = Decimal("0.2")


class ScorableItem(Protocol):
    short_description: str
    price: str


class ScorableReceipt(Protocol):
    """Anything carrying the receipt fields the rules read."""

    retailer: str
    purchase_date: str
    purchase_time: str
    total: str
    items: Iterable[ScorableItem]


@dataclass(frozen=True)
class PointsBreakdown:
    retailer: int = 0
    round_total: int = 0
    quarter_total: int = 0
    item_pairs: int = 0
    descriptions: int = 0
    odd_day: int = 0
    afternoon: int = 0
    fallbacks: Tuple[str, ...] = ()

    @property
    def total(self) -> int:
        return (
            self.retailer
            + self.round_total
            + self.quarter_total
            + self.item_pairs
            + self.descriptions
            + self.odd_day
            + self.afternoon
        )


def _parse_money(value: str) -> Optional[Decimal]:
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return None
    if not amount.is_finite() or amount < 0:
        return None
    return amount


def _parse_int(value: str) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def retailer_points(retailer: str) -> int:
    return sum(1 for char in retailer if char.isascii() and char.isalnum())


def _is_whole(value: Decimal) -> bool:
    return value == value.to_integral_value()


def total_points(total: Optional[Decimal]) -> Tuple[int, int]:
    """Return the (round dollar, quarter multiple) contributions."""
    if total is None:
        return 0, 0
    # Exact products for totals wider than the default 28 digit precision.
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(total.as_tuple().digits) + 2)
        round_total = ROUND_TOTAL_POINTS if _is_whole(total) else 0
        quarter_total = QUARTER_TOTAL_POINTS if _is_whole(total * QUARTERS_PER_DOLLAR) else 0
    return round_total, quarter_total


def item_pair_points(item_count: int) -> int:
    return ITEM_PAIR_POINTS * (item_count // 2)


def description_points(description: str, price: Decimal) -> int:
    length = len(description.strip())
    if length == 0 or length % 3 != 0:
        return 0
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(price.as_tuple().digits) + 2)
        bonus = (price * DESCRIPTION_PRICE_MULTIPLIER).to_integral_value(rounding=ROUND_CEILING)
    return int(bonus)


def odd_day_points(day: Optional[int]) -> int:
    if day is not None and day % 2 == 1:
        return ODD_DAY_POINTS
    return 0


def afternoon_points(hour: Optional[int], minute: Optional[int]) -> int:
    # 14:00 itself does not qualify, 15:00 through 15:59 do.
    if hour is None or minute is None:
        return 0
    if (hour == 14 and minute > 0) or hour == 15:
        return AFTERNOON_POINTS
    return 0


def _split_time(purchase_time: str) -> Tuple[Optional[int], Optional[int]]:
    hour, sep, minute = purchase_time.partition(":")
    if not sep:
        return None, None
    return _parse_int(hour), _parse_int(minute)


def score_receipt(receipt: ScorableReceipt) -> PointsBreakdown:
    """Evaluate every rule against ``receipt`` and return each contribution."""
    fallbacks: List[str] = []

    def fallback(rule: str, value: str) -> None:
        logger.warning("points_fallback", rule=rule, value=value)
        fallbacks.append(rule)

    total = _parse_money(receipt.total)
    if total is None:
        fallback("total", receipt.total)
    round_total, quarter_total = total_points(total)

    items = list(receipt.items)
    descriptions = 0
    for item in items:
        price = _parse_money(item.price)
        if price is None:
            fallback("item_price", item.price)
            price = Decimal(0)
        descriptions += description_points(item.short_description, price)

    day = _parse_int(receipt.purchase_date.rsplit("-", 1)[-1])
    if day is None:
        fallback("purchase_day", receipt.purchase_date)

    hour, minute = _split_time(receipt.purchase_time)
    if hour is None or minute is None:
        fallback("purchase_time", receipt.purchase_time)

    return PointsBreakdown(
        retailer=retailer_points(receipt.retailer),
        round_total=round_total,
        quarter_total=quarter_total,
        item_pairs=item_pair_points(len(items)),
        descriptions=descriptions,
        odd_day=odd_day_points(day),
        afternoon=afternoon_points(hour, minute),
        fallbacks=tuple(fallbacks),
    )


def calculate_points(receipt: ScorableReceipt) -> int:
    return score_receipt(receipt).total
