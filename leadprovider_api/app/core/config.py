"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from environment
variables.  Defaults are provided for all fields so the API can be
started locally without any setup.  In a production deployment you
should at least override ``SECRET_KEY`` and ``DATABASE_URL``.
"""

import os
from dataclasses import dataclass, field
from typing import List


POLICY_LENIENT = "lenient"
POLICY_STRICT = "strict"
ORDER_STATUS_POLICIES = (POLICY_LENIENT, POLICY_STRICT)


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Lead Provider API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")
    secret_key: str = os.getenv("SECRET_KEY", "your-super-secret-key-that-is-long")
    # Session tokens live for one day unless overridden.
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))
    algorithm: str = os.getenv("ALGORITHM", "HS256")

    # Path to the SQLite database file.  Relative paths are resolved
    # against the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "leadprovider.db")

    # How admin status changes are validated:
    #   ``lenient`` - any order may be set to approved/rejected (legacy behaviour)
    #   ``strict``  - only pending orders may change status
    order_status_policy: str = os.getenv("ORDER_STATUS_POLICY", POLICY_LENIENT)

    # Origins allowed to call the API from a browser.  ``*`` allows all.
    cors_origins: List[str] = field(
        default_factory=lambda: _split_csv(os.getenv("CORS_ORIGINS", "*"))
    )

    def __post_init__(self) -> None:
        policy = self.order_status_policy.strip().lower()
        if policy not in ORDER_STATUS_POLICIES:
            raise ValueError(
                f"ORDER_STATUS_POLICY must be one of {', '.join(ORDER_STATUS_POLICIES)}, "
                f"got {self.order_status_policy!r}"
            )
        self.order_status_policy = policy


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
