from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ecr_bridge.domain.entities.transaction import ReceiptItem, Transaction
from ecr_bridge.domain.value_objects.payment_type import PaymentType


class ReceiptItemInput(BaseModel):
    name: str
    quantity: float = 1
    price: float


class PrintRequest(BaseModel):
    """Inbound body of a print request.

    Accepts the legacy single product (``productName``/``duration``/``price``)
    or an ``items`` list.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    product_name: str | None = Field(default=None, alias="productName")
    duration: str | None = None
    price: float | None = None
    items: list[ReceiptItemInput] | None = None
    payment_type: PaymentType = Field(alias="paymentType")

    def to_transaction(self) -> Transaction:
        return Transaction(
            payment_type=self.payment_type,
            product_name=self.product_name,
            duration=self.duration,
            price=self.price,
            items=tuple(ReceiptItem(**item.model_dump()) for item in self.items or []),
        )


def format_validation_error(error: ValidationError) -> str:
    """Flatten pydantic errors into ``field: message`` pairs."""
    parts = []
    for err in error.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        msg = err.get("msg", str(err))
        if msg.startswith("Value error, "):
            msg = msg[13:]
        parts.append(f"{loc}: {msg}" if loc else msg)
    return ", ".join(parts)


def parse_print_request(data: object) -> Transaction:
    """Validate a raw request body into a Transaction.

    Raises:
        ValidationError: if the body is not a valid print request
    """
    return PrintRequest.model_validate(data).to_transaction()
