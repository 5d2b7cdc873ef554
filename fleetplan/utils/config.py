"""
Environment configuration loader with validation for the scheduling engine.

Scheduling policy values (margins, turnaround bounds, pricing rates) live in
SchedulingPolicy and are passed explicitly to every service; nothing in the
engine reads a global configuration.
"""

import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from ..models.airport import AirlineModel


TRUTHY = ("true", "1", "yes", "on")


class SchedulingPolicy(BaseModel):
    """Tunable scheduling and pricing rules."""

    # Block time
    boarding_minutes: int = Field(default=30, ge=0, description="Boarding margin before departure")
    deboarding_minutes: int = Field(default=20, ge=0, description="Margin after arrival")

    # Turnaround
    min_turnaround_minutes: int = Field(default=60, ge=0)
    max_turnaround_minutes: int = Field(default=24 * 60, ge=1)
    default_turnaround_minutes: int = Field(default=60, ge=0)

    # Creation rules
    min_lead_time_minutes: int = Field(default=45, ge=0, description="Earliest departure after now")
    range_buffer_factor: float = Field(default=1.1, gt=1.0, description="Required range margin")

    # Pricing
    base_price_per_km: float = Field(default=0.10, ge=0.0)
    domestic_fee: float = Field(default=25.0, ge=0.0)
    international_fee: float = Field(default=75.0, ge=0.0)
    economy_factor: float = Field(default=1.0, ge=0.0)
    business_factor: float = Field(default=3.5, ge=0.0)
    first_factor: float = Field(default=6.0, ge=0.0)

    # Route synthesis
    default_cruise_speed_kmh: float = Field(default=800.0, gt=0.0)

    # Flight numbers
    flight_number_base: int = Field(default=100, ge=100, le=9999)
    flight_number_step: int = Field(default=10, ge=2)
    flight_number_ceiling: int = Field(default=9999, ge=100, le=9999)

    @model_validator(mode="after")
    def check_turnaround_bounds(self) -> "SchedulingPolicy":
        """
        Default turnaround must sit inside [min, max], and the minimum must
        cover deboarding plus boarding so a return leg clears its outbound.
        """
        ground_margin = self.boarding_minutes + self.deboarding_minutes
        if self.min_turnaround_minutes < ground_margin:
            raise ValueError(
                f"Minimum turnaround must be at least boarding plus deboarding ({ground_margin} min)"
            )
        if self.min_turnaround_minutes > self.max_turnaround_minutes:
            raise ValueError("Minimum turnaround must not exceed maximum turnaround")
        if not (self.min_turnaround_minutes
                <= self.default_turnaround_minutes
                <= self.max_turnaround_minutes):
            raise ValueError("Default turnaround must lie between minimum and maximum turnaround")
        return self

    def clamp_turnaround(self, minutes: Optional[int]) -> int:
        """Clamp a requested turnaround into the configured bounds."""
        if minutes is None:
            minutes = self.default_turnaround_minutes
        return max(self.min_turnaround_minutes, min(self.max_turnaround_minutes, int(minutes)))


class AppConfig(BaseModel):
    """Configuration model for the scheduling service with validation."""

    # Database Configuration
    database_url: str = Field(
        default="sqlite:///fleetplan.db", description="Database connection URL"
    )

    # Valkey lock store
    valkey_host: str = Field(default="localhost", description="Valkey server host")
    valkey_port: int = Field(default=6379, ge=1, le=65535, description="Valkey server port")
    valkey_password: Optional[str] = Field(default=None, description="Valkey server password")
    valkey_database: int = Field(default=0, ge=0, le=15, description="Valkey database number")
    lock_ttl_seconds: int = Field(default=30, ge=1, description="Aircraft lock TTL")
    lock_timeout_seconds: float = Field(default=5.0, gt=0.0, description="Wait for an aircraft lock")

    # Operator
    operator_code: str = Field(default="SNX", description="ICAO code of the operating airline")
    operator_name: Optional[str] = Field(default=None)

    # Service
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    policy: SchedulingPolicy = Field(default_factory=SchedulingPolicy)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("operator_code")
    @classmethod
    def validate_operator_code(cls, v: str) -> str:
        v = v.strip().upper()
        if len(v) != 3 or not v.isalpha():
            raise ValueError("Operator code must be a 3-letter ICAO airline code")
        return v

    @property
    def operator(self) -> AirlineModel:
        return AirlineModel(icao=self.operator_code, name=self.operator_name)


@dataclass
class SchedulingContext:
    """
    Everything an orchestrating service needs besides its repositories:
    the operator it schedules for, the policy and a clock.
    """
    operator: AirlineModel
    policy: SchedulingPolicy = field(default_factory=SchedulingPolicy)
    clock: Callable[[], datetime] = datetime.now

    def now(self) -> datetime:
        return self.clock()

    @classmethod
    def from_config(cls, config: AppConfig) -> "SchedulingContext":
        return cls(operator=config.operator, policy=config.policy)


def _policy_from_env() -> Dict[str, Any]:
    """Collect FLEETPLAN_<FIELD> overrides for SchedulingPolicy."""
    overrides: Dict[str, Any] = {}
    for name in SchedulingPolicy.model_fields:
        value = os.getenv(f"FLEETPLAN_{name.upper()}")
        if value is not None and value != "":
            overrides[name] = value
    return overrides


def load_config(env_file: Optional[str] = None) -> AppConfig:
    """
    Load configuration from environment variables and .env file.

    Args:
        env_file: Optional path to .env file. If None, looks for .env in current directory.

    Returns:
        AppConfig: Validated configuration object

    Raises:
        ValueError: If configuration is missing or invalid
    """
    if env_file is None:
        env_file = ".env"

    if os.path.exists(env_file):
        load_dotenv(env_file)

    config_data: Dict[str, Any] = {
        "database_url": os.getenv("DATABASE_URL", "sqlite:///fleetplan.db"),
        "valkey_host": os.getenv("VALKEY_HOST", "localhost"),
        "valkey_port": os.getenv("VALKEY_PORT", "6379"),
        "valkey_password": os.getenv("VALKEY_PASSWORD") or None,
        "valkey_database": os.getenv("VALKEY_DATABASE", "0"),
        "lock_ttl_seconds": os.getenv("FLEETPLAN_LOCK_TTL_SECONDS", "30"),
        "lock_timeout_seconds": os.getenv("FLEETPLAN_LOCK_TIMEOUT_SECONDS", "5.0"),
        "operator_code": os.getenv("FLEETPLAN_OPERATOR_CODE", "SNX"),
        "operator_name": os.getenv("FLEETPLAN_OPERATOR_NAME") or None,
        "debug": os.getenv("FLEETPLAN_DEBUG", "false").lower() in TRUTHY,
        "log_level": os.getenv("FLEETPLAN_LOG_LEVEL", "INFO"),
        "policy": _policy_from_env(),
    }

    try:
        return AppConfig(**config_data)
    except ValidationError as e:
        raise ValueError(f"Configuration validation failed: {e}") from e
