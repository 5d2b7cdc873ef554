"""
Main entry point for the fleetplan scheduling engine.
"""

import logging
import sys
from typing import Optional

from fleetplan.database.config import initialize_database
from fleetplan.models.route import format_minutes
from fleetplan.utils.config import AppConfig, load_config


def setup_logging(config: AppConfig) -> None:
    """Configure root logging from the application config."""
    logging.basicConfig(
        level=logging.DEBUG if config.debug else getattr(logging, config.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(env_file: Optional[str] = None) -> int:
    """Load configuration, prepare the database and print the active policy."""
    print("✈️  fleetplan scheduling engine")
    print("=" * 50)

    try:
        config = load_config(env_file)
        setup_logging(config)
        print(f"✓ Configuration loaded for operator {config.operator_code}")

        db_config = initialize_database(config.database_url)
        print(f"✓ Database ready ({db_config.db_type})")
        db_config.close()

        policy = config.policy
        print(f"   Boarding / deboarding: {policy.boarding_minutes} / {policy.deboarding_minutes} min")
        print(
            f"   Turnaround: {format_minutes(policy.min_turnaround_minutes)} to "
            f"{format_minutes(policy.max_turnaround_minutes)} "
            f"(default {format_minutes(policy.default_turnaround_minutes)})"
        )
        print(f"   Minimum lead time: {policy.min_lead_time_minutes} min")
        print(
            f"   Fare factors: economy {policy.economy_factor}, "
            f"business {policy.business_factor}, first {policy.first_factor}"
        )

    except Exception as e:
        print(f"❌ Failed to start: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
