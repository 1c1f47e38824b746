"""Domain models for scheduled function events."""

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator


class ScheduleEvent(BaseModel):
    """A `schedule` event attached to a function in the service definition.

    `rate` may be written as a single expression or a list of them; it is
    always stored as a list.
    """

    rate: list[str] = Field(description="Rate or cron expressions (e.g., 'rate(5 minutes)')")
    input: Any = Field(default_factory=dict, description="Static payload passed to the function")
    enabled: bool = Field(default=True, description="Whether the event is active")

    @model_validator(mode="before")
    @classmethod
    def accept_shorthand(cls, data: Any) -> Any:
        """Accept `schedule: rate(5 minutes)` as shorthand for `schedule: {rate: ...}`."""
        if isinstance(data, str):
            return {"rate": data}
        return data

    @field_validator("rate", mode="before")
    @classmethod
    def coerce_rate_list(cls, v: Any) -> Any:
        """Wrap a single expression into a one-element list."""
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("rate")
    @classmethod
    def validate_rate_not_empty(cls, v: list[str]) -> list[str]:
        """A schedule event must yield at least one trigger."""
        if not v:
            raise ValueError("Schedule rate must contain at least one expression")
        return v


@dataclass
class FunctionConfiguration:
    """One schedule event of one function, with its rates converted to cron."""

    function_name: str
    cron: list[str] = field(default_factory=list)
    input: Any = field(default_factory=dict)
