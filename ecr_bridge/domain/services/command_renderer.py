"""Rendering of transactions into ECR Bridge command artifacts."""

from dataclasses import dataclass, field

from ecr_bridge.domain.entities.transaction import ReceiptItem, Transaction, ZReport
from ecr_bridge.domain.value_objects.bridge_mode import BridgeMode
from ecr_bridge.domain.value_objects.payment_type import PaymentType

TEST_SEPARATOR = "T;" + "-" * 20
TEST_FOOTER = "T;Bon NON-FISCAL - TEST"


@dataclass(frozen=True)
class RenderOptions:
    """Device-specific protocol settings.

    Payment codes must match the driver documentation of the installed
    printer: Datecs assigns 1 to cash and 2 to card.
    """

    fiscal_code: str | None = None
    vat_code: str = "1"
    payment_codes: dict[PaymentType, str] = field(
        default_factory=lambda: {PaymentType.CASH: "1", PaymentType.CARD: "2"}
    )


@dataclass(frozen=True)
class RenderedCommand:
    content: str
    echo: str

    @property
    def payload(self) -> bytes:
        return self.content.encode("utf-8")


def format_amount(value: float) -> str:
    return f"{value:.2f}"


def format_quantity(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.3f}".rstrip("0").rstrip(".")


def _legacy_description(transaction: Transaction) -> str:
    return f"{transaction.product_name} ({transaction.duration})"


def _render_live(transaction: Transaction, options: RenderOptions) -> list[str]:
    header = f"FISCAL;{options.fiscal_code}" if options.fiscal_code else "FISCAL"
    lines = [header]

    if transaction.is_legacy:
        price = format_amount(transaction.price or 0.0)
        lines.append(f"I;{_legacy_description(transaction)};1;{price};{options.vat_code}")
    else:
        for item in transaction.items:
            lines.append(
                f"I;{item.name};{format_quantity(item.quantity)};"
                f"{format_amount(item.price)};{options.vat_code}"
            )

    # 0 = pay the whole receipt total
    lines.append(f"P;{options.payment_codes[transaction.payment_type]};0")
    return lines


def _test_item_line(item: ReceiptItem) -> str:
    if item.quantity == 1:
        return f"T;{item.name}     {format_amount(item.price)}"
    return (
        f"T;{item.name} {format_quantity(item.quantity)} x {format_amount(item.price)}"
        f"     {format_amount(item.quantity * item.price)}"
    )


def _render_test(transaction: Transaction) -> list[str]:
    lines = ["TEXT"]

    if transaction.is_legacy:
        lines.append(
            f"T;{_legacy_description(transaction)}     {format_amount(transaction.price or 0.0)}"
        )
    else:
        lines.extend(_test_item_line(item) for item in transaction.items)

    lines.append(TEST_SEPARATOR)
    lines.append(f"T;TOTAL: {format_amount(transaction.total)}")
    lines.append(f"T;Plata: {transaction.payment_type.value}")
    lines.append(TEST_FOOTER)
    return lines


def render_command(
    transaction: Transaction | ZReport,
    mode: BridgeMode,
    options: RenderOptions | None = None,
) -> RenderedCommand:
    """Render a transaction into artifact content plus its expected echo."""
    if isinstance(transaction, ZReport):
        return RenderedCommand(content=transaction.command, echo=transaction.command)

    options = options or RenderOptions()
    match mode:
        case BridgeMode.LIVE:
            lines = _render_live(transaction, options)
        case BridgeMode.TEST:
            lines = _render_test(transaction)

    content = "\n".join(lines)
    return RenderedCommand(content=content, echo=content)
