"""Logging configuration for the application."""

import logging
import sys


def setup_logging(level: str = "INFO"):
    """Configure logging for the application."""
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Avoid stacking handlers when the app is created more than once
    if not any(getattr(h, "_event_registry", False) for h in root_logger.handlers):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler._event_registry = True
        root_logger.addHandler(console_handler)

    # Set higher log levels for noisy components
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("boto3").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
