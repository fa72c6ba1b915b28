import re
from datetime import datetime, timezone
from typing import Optional

UTC_OFFSET_SUFFIX = "+00:00"
FRACTION_PATTERN = re.compile(r"\.(\d+)")
MAX_FRACTION_DIGITS = 6


def format_timestamp(value: datetime) -> str:
    """Format a datetime as RFC 3339 text.

    Naive datetimes are treated as UTC. UTC offsets are rendered as ``Z`` and
    fractional seconds only appear when present.

    Args:
        value: The datetime to format.

    Returns:
        The RFC 3339 representation of the datetime.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    serialised = value.isoformat()
    if serialised.endswith(UTC_OFFSET_SUFFIX):
        serialised = serialised[: -len(UTC_OFFSET_SUFFIX)] + "Z"
    return serialised


def parse_timestamp(value: str) -> datetime:
    """Parse RFC 3339 text into a timezone-aware datetime.

    Accepts the ``Z`` suffix and fractional seconds with more than six digits,
    which are truncated to microseconds.

    Args:
        value: The text to parse.

    Returns:
        The parsed datetime.

    Raises:
        ValueError: If the text is not a valid timestamp.
    """
    if not isinstance(value, str):
        raise ValueError(f"Expected timestamp text, got {type(value).__name__}")
    normalised = value.strip()
    if normalised.endswith(("Z", "z")):
        normalised = normalised[:-1] + UTC_OFFSET_SUFFIX
    normalised = FRACTION_PATTERN.sub(_trim_fraction, normalised, count=1)
    parsed = datetime.fromisoformat(normalised)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def encode_optional_timestamp(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return format_timestamp(value)


def _trim_fraction(match: re.Match) -> str:
    digits = match.group(1)[:MAX_FRACTION_DIGITS]
    return "." + digits.ljust(MAX_FRACTION_DIGITS, "0")
