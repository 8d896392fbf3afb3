import threading
from typing import Dict, Protocol

from receipt_points.model.ReceiptModel import Receipt


class ReceiptNotFoundError(LookupError):
    """No stored receipt matches the requested id."""


class ReceiptStore(Protocol):
    def insert(self, receipt: Receipt) -> None: ...

    def find_by_id(self, receipt_id: str) -> Receipt: ...


class InMemoryReceiptStore:
    """Process-lifetime receipt ledger, keyed by id in insertion order."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._receipts: Dict[str, Receipt] = {}

    def insert(self, receipt: Receipt) -> None:
        if not receipt.id:
            raise ValueError("Receipt id must not be empty")
        with self._lock:
            if receipt.id in self._receipts:
                raise ValueError(f"Receipt id already stored: {receipt.id}")
            self._receipts[receipt.id] = receipt

    def find_by_id(self, receipt_id: str) -> Receipt:
        with self._lock:
            receipt = self._receipts.get(receipt_id)
        if receipt is None:
            raise ReceiptNotFoundError(f"No receipt found for id {receipt_id}")
        return receipt

    def __len__(self) -> int:
        with self._lock:
            return len(self._receipts)
