"""Tests for transaction validation."""

import math

import pytest
from pydantic import ValidationError

from ecr_bridge.domain.entities import ReceiptItem, Transaction, ZReport
from ecr_bridge.domain.value_objects import PaymentType


class TestLegacyTransaction:
    def test_valid_legacy_triple(self) -> None:
        tx = Transaction(
            payment_type=PaymentType.CASH, product_name="Coffee", duration="", price=5.0
        )
        assert tx.is_legacy
        assert tx.total == 5.0

    def test_empty_duration_is_allowed(self) -> None:
        tx = Transaction(payment_type=PaymentType.CARD, product_name="Play", duration="", price=1)
        assert tx.duration == ""

    def test_missing_duration_rejected(self) -> None:
        with pytest.raises(ValidationError, match="productName/duration/price"):
            Transaction(payment_type=PaymentType.CASH, product_name="Coffee", price=5.0)

    def test_empty_product_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Transaction(payment_type=PaymentType.CASH, product_name="", duration="1h", price=5.0)

    @pytest.mark.parametrize("price", [0, -1.5, math.inf, math.nan])
    def test_price_must_be_positive_and_finite(self, price: float) -> None:
        with pytest.raises(ValidationError):
            Transaction(
                payment_type=PaymentType.CASH, product_name="Coffee", duration="", price=price
            )


class TestItemTransaction:
    def test_items_total(self) -> None:
        tx = Transaction(
            payment_type=PaymentType.CARD,
            items=[
                ReceiptItem(name="Coffee", quantity=2, price=5.0),
                ReceiptItem(name="Cake", price=7.5),
            ],
        )
        assert not tx.is_legacy
        assert tx.total == pytest.approx(17.5)

    def test_neither_shape_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Either items array"):
            Transaction(payment_type=PaymentType.CASH)

    def test_both_shapes_rejected(self) -> None:
        with pytest.raises(ValidationError, match="not both"):
            Transaction(
                payment_type=PaymentType.CASH,
                product_name="Coffee",
                duration="",
                price=5.0,
                items=[ReceiptItem(name="Cake", price=7.5)],
            )

    def test_item_quantity_must_be_positive(self) -> None:
        with pytest.raises(ValidationError, match="Quantity must be a positive number"):
            ReceiptItem(name="Coffee", quantity=0, price=5.0)

    @pytest.mark.parametrize("quantity", [0.0001, 0.0004])
    def test_quantity_that_renders_as_zero_rejected(self, quantity: float) -> None:
        with pytest.raises(ValidationError, match="Quantity must be at least 0.001"):
            ReceiptItem(name="x", quantity=quantity, price=5.0)

    def test_smallest_renderable_quantity_accepted(self) -> None:
        assert ReceiptItem(name="x", quantity=0.001, price=5.0).quantity == 0.001

    def test_price_that_renders_as_zero_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Price must be at least 0.01"):
            ReceiptItem(name="x", price=0.001)

    def test_transaction_is_frozen(self) -> None:
        tx = Transaction(payment_type=PaymentType.CASH, items=[ReceiptItem(name="A", price=1)])
        with pytest.raises(ValidationError):
            tx.payment_type = PaymentType.CARD  # type: ignore[misc]


def test_z_report_command_literal() -> None:
    assert ZReport().command == "Z;1"


class TestProtocolTokens:
    @pytest.mark.parametrize("name", ["Coffee\nZ;1", "Coffee\r\nZ;1", "Coffee;2"])
    def test_item_name_must_be_single_token(self, name: str) -> None:
        with pytest.raises(ValidationError, match="Name must not contain"):
            ReceiptItem(name=name, price=5.0)

    def test_product_name_must_be_single_token(self) -> None:
        with pytest.raises(ValidationError, match="Product name must not contain"):
            Transaction(
                payment_type=PaymentType.CASH,
                product_name="Coffee\nZ;1",
                duration="",
                price=5.0,
            )

    def test_duration_must_be_single_token(self) -> None:
        with pytest.raises(ValidationError, match="Duration must not contain"):
            Transaction(
                payment_type=PaymentType.CASH,
                product_name="Coffee",
                duration="1h;Z",
                price=5.0,
            )

    def test_other_punctuation_allowed(self) -> None:
        tx = Transaction(
            payment_type=PaymentType.CASH,
            product_name="Ora: joaca, (mare)",
            duration="1h 15m",
            price=60,
        )

        assert tx.product_name == "Ora: joaca, (mare)"
