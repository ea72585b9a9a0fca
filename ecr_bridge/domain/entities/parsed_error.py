from pydantic import BaseModel

UNKNOWN_ERROR = "Unknown error"


class ParsedError(BaseModel, frozen=True):
    original_command: str
    error_message: str
    raw_content: str
    timestamp: str | None = None
