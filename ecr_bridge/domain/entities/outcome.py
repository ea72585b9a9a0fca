from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator

from ecr_bridge.domain.entities.parsed_error import UNKNOWN_ERROR
from ecr_bridge.domain.value_objects.correlation_state import CorrelationState


class Succeeded(BaseModel, frozen=True):
    kind: Literal["succeeded"] = "succeeded"
    artifact_name: str

    @property
    def state(self) -> CorrelationState:
        return CorrelationState.SUCCEEDED


class Failed(BaseModel, frozen=True):
    """The driver moved the artifact to the error outbox."""

    kind: Literal["failed"] = "failed"
    artifact_name: str
    details: str = UNKNOWN_ERROR

    @field_validator("details")
    @classmethod
    def never_empty(cls, v: str) -> str:
        return v.strip() or UNKNOWN_ERROR

    @property
    def state(self) -> CorrelationState:
        return CorrelationState.FAILED


class TimedOut(BaseModel, frozen=True):
    """Neither outbox received the artifact before the deadline.

    The command's fate is unknown: the driver may still print it later.
    """

    kind: Literal["timed_out"] = "timed_out"
    artifact_name: str
    timeout_ms: int

    @property
    def state(self) -> CorrelationState:
        return CorrelationState.TIMED_OUT


CorrelationOutcome = Annotated[Succeeded | Failed | TimedOut, Field(discriminator="kind")]
