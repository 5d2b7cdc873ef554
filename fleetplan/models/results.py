"""
Outcome of a scheduling check.

Conflicts are reported as values carrying a reason code rather than raised,
so callers can show the user which rule refused the flight.
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field

from .enums import RejectionReason
from .flight import FlightModel


class ValidationResult(BaseModel):
    """Accepted or rejected, with the first failing rule when rejected."""

    ok: bool
    reason: Optional[RejectionReason] = None
    message: str = ""
    details: Dict[str, Any] = Field(default_factory=dict)
    flight: Optional[FlightModel] = Field(None, description="Derived candidate when accepted")

    @classmethod
    def accepted(cls, flight: Optional[FlightModel] = None, message: str = "") -> "ValidationResult":
        return cls(ok=True, flight=flight, message=message)

    @classmethod
    def rejected(cls, reason: RejectionReason, message: str, **details: Any) -> "ValidationResult":
        return cls(ok=False, reason=reason, message=message, details=details)

    def __bool__(self) -> bool:
        return self.ok
