from ecr_bridge.application.dto.bridge_response import BridgeResponse
from ecr_bridge.application.dto.print_request import (
    PrintRequest,
    ReceiptItemInput,
    format_validation_error,
    parse_print_request,
)

__all__ = [
    "BridgeResponse",
    "PrintRequest",
    "ReceiptItemInput",
    "format_validation_error",
    "parse_print_request",
]
