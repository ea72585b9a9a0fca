from ecr_bridge.domain.entities.outcome import CorrelationOutcome, Failed, Succeeded, TimedOut
from ecr_bridge.domain.entities.parsed_error import UNKNOWN_ERROR, ParsedError
from ecr_bridge.domain.entities.transaction import (
    Z_REPORT_COMMAND,
    ReceiptItem,
    Transaction,
    ZReport,
)

__all__ = [
    "CorrelationOutcome",
    "Failed",
    "ParsedError",
    "ReceiptItem",
    "Succeeded",
    "TimedOut",
    "Transaction",
    "UNKNOWN_ERROR",
    "Z_REPORT_COMMAND",
    "ZReport",
]
