from enum import Enum


class CorrelationState(str, Enum):
    WAITING = "waiting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


def is_terminal(state: CorrelationState) -> bool:
    return state is not CorrelationState.WAITING
