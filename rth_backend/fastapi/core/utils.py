"""
Utility functions for normalization, time and duration handling.

This module provides small helpers shared by the credential store,
the token issuer and the district RTH endpoints.
"""

import re
from datetime import datetime, timedelta, timezone


_DURATION_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([smhdw]?)\s*$", re.IGNORECASE)

_DURATION_UNITS = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
    "w": "weeks",
}


def normalize_username(username: str) -> str:
    """
    Normalize username by trimming surrounding whitespace and lowercasing.

    Examples:
        "  Admin " -> "admin"
        "SuperAdmin" -> "superadmin"

    Args:
        username: Raw username string

    Returns:
        Normalized username
    """
    if not username:
        return ""
    return username.strip().lower()


def parse_duration(value) -> timedelta:
    """
    Parse a token lifetime such as "24h", "30m", "7d" or "3600".

    Bare numbers are seconds.

    Args:
        value: Duration string, int seconds or timedelta

    Returns:
        The duration as a timedelta

    Raises:
        ValueError: If the value cannot be parsed or is not positive
    """
    if isinstance(value, timedelta):
        delta = value
    elif isinstance(value, (int, float)):
        delta = timedelta(seconds=value)
    else:
        match = _DURATION_RE.match(str(value))
        if not match:
            raise ValueError(f"Invalid duration: {value!r}")
        amount, unit = match.groups()
        delta = timedelta(**{_DURATION_UNITS[unit.lower()]: float(amount)})

    if delta <= timedelta(0):
        raise ValueError(f"Duration must be positive: {value!r}")
    return delta


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored in every DateTime column."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
