from pydantic import BaseModel

from ecr_bridge.domain.entities.outcome import CorrelationOutcome, Failed, Succeeded, TimedOut


class BridgeResponse(BaseModel):
    """Transport-neutral result of a bridge request."""

    status: str
    message: str
    http_status: int
    file: str | None = None
    details: str | None = None

    @classmethod
    def from_outcome(
        cls,
        outcome: CorrelationOutcome,
        success_message: str,
        failure_message: str = "Printing failed",
    ) -> "BridgeResponse":
        match outcome:
            case Succeeded(artifact_name=name):
                return cls(status="success", message=success_message, file=name, http_status=200)
            case Failed(artifact_name=name, details=details):
                return cls(
                    status="error",
                    message=failure_message,
                    details=details,
                    file=name,
                    http_status=500,
                )
            case TimedOut(artifact_name=name, timeout_ms=timeout_ms):
                return cls(
                    status="error",
                    message="Timeout waiting for ECR Bridge response",
                    details=f"Timeout waiting for response after {timeout_ms}ms. File: {name}",
                    file=name,
                    http_status=504,
                )
        raise TypeError(f"Unknown outcome: {outcome!r}")

    @classmethod
    def write_failed(cls) -> "BridgeResponse":
        return cls(
            status="error",
            message="Failed to create the receipt file",
            details="Could not write the command file for ECR Bridge",
            http_status=500,
        )

    @classmethod
    def invalid_request(cls, details: str) -> "BridgeResponse":
        return cls(
            status="error",
            message="Invalid request data",
            details=details,
            http_status=400,
        )

    def body(self) -> dict[str, str]:
        return self.model_dump(exclude={"http_status"}, exclude_none=True)
