from enum import Enum


class BridgeMode(str, Enum):
    """Rendering mode for command artifacts.

    LIVE emits fiscal commands (FISCAL / I; / P;), TEST emits a non-fiscal
    text slip (TEXT / T;) that the printer does not register.
    """

    LIVE = "live"
    TEST = "test"
