"""
Logger factory and utility functions for the LOQATR finder service.

Provides:
- get_logger(): Get a configured logger instance
- should_sample(): Determine if an event should be logged based on sampling rate
- hash_ip(): Hash IP addresses for privacy
"""

import random
from typing import Optional

import structlog
from structlog.stdlib import BoundLogger

from shared.logging_config import (
    SAMPLING_RATES,
    configure_structlog,
    hash_ip as _hash_ip,
    setup_logging,
)

__all__ = [
    "get_logger",
    "hash_ip",
    "should_sample",
    "SAMPLING_RATES",
    "configure_structlog",
    "setup_logging",
]


def get_logger(name: str) -> BoundLogger:
    """
    Get a configured logger instance.

    Example:
        >>> log = get_logger(__name__)
        >>> log.info("contact_revealed", scan_id=42)
    """
    return structlog.get_logger(name)


def should_sample(event_type: str) -> bool:
    """
    Determine if an event should be logged based on sampling rate.

    Events without a configured rate are always logged.
    """
    sample_rate = SAMPLING_RATES.get(event_type, 1.0)

    if sample_rate >= 1.0:
        return True
    if sample_rate <= 0.0:
        return False

    return random.random() < sample_rate


def hash_ip(ip_address: Optional[str]) -> Optional[str]:
    """
    Hash IP address for privacy in production.

    Convenience wrapper around logging_config.hash_ip() that passes None
    through untouched.
    """
    if ip_address is None:
        return None
    return _hash_ip(ip_address)
