from dataclasses import dataclass
from typing import Tuple

from receipt_points.model.ReceiptItemModel import ReceiptItem


@dataclass(frozen=True)
class Receipt:
    id: str
    retailer: str
    purchase_date: str
    purchase_time: str
    total: str
    items: Tuple[ReceiptItem, ...]
    points: str
