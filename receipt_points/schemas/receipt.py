from typing import List

from pydantic import BaseModel, Field

from receipt_points.model.ReceiptItemModel import ReceiptItem
from receipt_points.model.ReceiptModel import Receipt

MONEY_PATTERN = r"^[0-9]+\.[0-9]{2}$"
DATE_PATTERN = r"^[0-9]{4}-(0[1-9]|1[012])-(0[1-9]|[12][0-9]|3[01])$"
TIME_PATTERN = r"^([0-9]|0[0-9]|1[0-9]|2[0-3]):[0-5][0-9]$"


class ItemPayload(BaseModel):
    """A single line item as submitted on the wire."""

    short_description: str = Field(
        ...,
        alias="shortDescription",
        description="Short product description, no whitespace.",
        examples=["Mountain-Dew-12PK"],
        pattern=r"^\S+$",
    )
    price: str = Field(
        ...,
        description="Price paid for the item, two fractional digits.",
        examples=["6.49"],
        pattern=MONEY_PATTERN,
    )


class ProcessReceiptRequest(BaseModel):
    """
    Body of ``POST /receipt/process``.

    ``id`` and ``points`` are assigned by the server and ignored when present.
    """

    retailer: str = Field(..., min_length=1, examples=["M&M Corner Market"])
    purchase_date: str = Field(
        ..., alias="purchaseDate", examples=["2022-01-01"], pattern=DATE_PATTERN
    )
    purchase_time: str = Field(
        ..., alias="purchaseTime", examples=["13:01"], pattern=TIME_PATTERN
    )
    total: str = Field(..., examples=["35.35"], pattern=MONEY_PATTERN)
    items: List[ItemPayload] = Field(..., min_length=1)

    def to_receipt(self, receipt_id: str, points: int) -> Receipt:
        return Receipt(
            id=receipt_id,
            retailer=self.retailer,
            purchase_date=self.purchase_date,
            purchase_time=self.purchase_time,
            total=self.total,
            items=tuple(
                ReceiptItem(short_description=item.short_description, price=item.price)
                for item in self.items
            ),
            points=str(points),
        )


class ProcessReceiptResponse(BaseModel):
    id: str


class PointsResponse(BaseModel):
    points: str


class ErrorResponse(BaseModel):
    detail: str
