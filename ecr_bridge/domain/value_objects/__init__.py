from ecr_bridge.domain.value_objects.bridge_mode import BridgeMode
from ecr_bridge.domain.value_objects.correlation_state import CorrelationState, is_terminal
from ecr_bridge.domain.value_objects.payment_type import PaymentType

__all__ = [
    "BridgeMode",
    "CorrelationState",
    "PaymentType",
    "is_terminal",
]
