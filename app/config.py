"""Environment configuration for the event registry.

Values come from the process environment. A local ``.env`` file is loaded
first when present; in deployed environments the variables are set directly.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    backend: str
    dynamodb_endpoint_url: str
    table_name: str
    region_name: str
    aws_access_key_id: str
    aws_secret_access_key: str
    caller_id_header: str
    create_table_on_startup: bool
    log_level: str


def get_settings() -> Settings:
    """Read settings from the environment"""
    backend = os.getenv("EVENT_STORE_BACKEND", "dynamodb").lower()
    if backend not in ("dynamodb", "memory"):
        raise ValueError(
            f"Unknown EVENT_STORE_BACKEND '{backend}', expected 'dynamodb' or 'memory'"
        )

    return Settings(
        backend=backend,
        dynamodb_endpoint_url=os.getenv(
            "DYNAMODB_ENDPOINT_URL", "http://dynamodb-local:8000"
        ),
        table_name=os.getenv("DYNAMODB_TABLE_NAME", "EventRegistry"),
        region_name=os.getenv("AWS_DEFAULT_REGION", "us-east-1"),
        aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID", "fake"),
        aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY", "fake"),
        caller_id_header=os.getenv("CALLER_ID_HEADER", "X-Caller-Id"),
        create_table_on_startup=_as_bool(os.getenv("CREATE_TABLE_ON_STARTUP", "false")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
