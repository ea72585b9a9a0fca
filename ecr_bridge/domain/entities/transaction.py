import math

from pydantic import BaseModel, Field, ValidationInfo, field_validator, model_validator

from ecr_bridge.domain.value_objects.payment_type import PaymentType

Z_REPORT_COMMAND = "Z;1"

# Commands are one per line with ';' between tokens
FORBIDDEN_TEXT_CHARS = frozenset(";\r\n")

# Rendered precision: quantities to 3 decimals, amounts to 2
QUANTITY_DECIMALS = 3
AMOUNT_DECIMALS = 2


def _require_positive_finite(value: float, label: str, decimals: int) -> float:
    if not math.isfinite(value):
        raise ValueError(f"{label} must be a finite number")
    if value <= 0:
        raise ValueError(f"{label} must be a positive number")
    if float(f"{value:.{decimals}f}") <= 0:
        raise ValueError(f"{label} must be at least {10**-decimals:.{decimals}f}")
    return value


def _require_single_token(value: str | None, label: str) -> str | None:
    if value is not None and FORBIDDEN_TEXT_CHARS.intersection(value):
        raise ValueError(f"{label} must not contain ';' or line breaks")
    return value


class ReceiptItem(BaseModel, frozen=True):
    name: str = Field(min_length=1)
    quantity: float = 1
    price: float

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        _require_single_token(v, "Name")
        return v

    @field_validator("quantity")
    @classmethod
    def validate_quantity(cls, v: float) -> float:
        return _require_positive_finite(v, "Quantity", QUANTITY_DECIMALS)

    @field_validator("price")
    @classmethod
    def validate_price(cls, v: float) -> float:
        return _require_positive_finite(v, "Price", AMOUNT_DECIMALS)


class Transaction(BaseModel, frozen=True):
    """A sale to be printed as one receipt.

    Either the legacy single-product triple (product_name, duration, price)
    or a non-empty list of items is given, never both.
    """

    payment_type: PaymentType
    product_name: str | None = None
    duration: str | None = None
    price: float | None = None
    items: tuple[ReceiptItem, ...] = ()

    @field_validator("product_name", "duration")
    @classmethod
    def validate_text(cls, v: str | None, info: ValidationInfo) -> str | None:
        label = "Product name" if info.field_name == "product_name" else "Duration"
        return _require_single_token(v, label)

    @field_validator("price")
    @classmethod
    def validate_price(cls, v: float | None) -> float | None:
        if v is None:
            return v
        return _require_positive_finite(v, "Price", AMOUNT_DECIMALS)

    @model_validator(mode="after")
    def check_exactly_one_shape(self) -> "Transaction":
        has_legacy = self.product_name is not None or self.price is not None
        has_items = len(self.items) > 0

        if has_legacy and has_items:
            raise ValueError("Provide either items or productName/duration/price, not both")
        if has_items:
            return self
        if not self.product_name or self.duration is None or self.price is None:
            raise ValueError("Either items array or productName/duration/price must be provided")
        return self

    @property
    def is_legacy(self) -> bool:
        return not self.items

    @property
    def total(self) -> float:
        if self.is_legacy:
            return self.price or 0.0
        return sum(item.quantity * item.price for item in self.items)


class ZReport(BaseModel, frozen=True):
    """Daily fiscal close. Renders to a fixed protocol literal."""

    command: str = Z_REPORT_COMMAND
