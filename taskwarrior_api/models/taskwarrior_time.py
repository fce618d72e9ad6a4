"""Taskwarrior datetime encoding.

Taskwarrior exports instants as compact ``20260101T131042Z`` tokens (UTC).
Some versions emit the same token with a numeric offset instead of ``Z``.
Responses narrow every instant to a calendar date (``YYYY-MM-DD``).
"""

from datetime import datetime, timezone
from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer

UTC_FORMAT = "%Y%m%dT%H%M%SZ"
OFFSET_FORMAT = "%Y%m%dT%H%M%S%z"
DATE_FORMAT = "%Y-%m-%d"
COMMAND_LINE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def parse_taskwarrior_time(value: Any) -> datetime | None:
    """Decode a Taskwarrior timestamp.

    Args:
        value: Raw JSON value (string, None or an already parsed datetime).

    Returns:
        Aware datetime, or None when the value is absent.

    Raises:
        ValueError: If the token matches neither supported form.
    """
    if value is None or isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Unsupported timestamp value: {value!r}")

    token = value.strip()
    if token in ("", "null"):
        return None

    try:
        return datetime.strptime(token, UTC_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError:
        pass

    try:
        return datetime.strptime(token, OFFSET_FORMAT)
    except ValueError:
        raise ValueError(f"Invalid Taskwarrior timestamp: {token!r}") from None


def parse_input_time(value: Any) -> Any:
    """Accept Taskwarrior tokens on input models, leaving ISO strings to pydantic.

    Empty strings become None so that ``"due": ""`` can mean "clear".
    """
    if isinstance(value, str):
        token = value.strip()
        if token == "":
            return None
        if "T" in token and "-" not in token[:8]:
            return parse_taskwarrior_time(token)
        return token
    return value


def format_date(value: datetime | None) -> str | None:
    """Encode an instant as a calendar date, dropping the time of day."""
    if value is None:
        return None
    return value.strftime(DATE_FORMAT)


def format_command_time(value: datetime) -> str:
    """Encode an instant for a ``key:value`` command line attribute.

    Naive values are passed as local wall-clock time. Aware values are
    converted to UTC and marked with ``Z``.
    """
    if value.tzinfo is None:
        return value.strftime(COMMAND_LINE_FORMAT)
    return value.astimezone(timezone.utc).strftime(COMMAND_LINE_FORMAT) + "Z"


TaskwarriorTime = Annotated[
    datetime | None,
    BeforeValidator(parse_taskwarrior_time),
    PlainSerializer(format_date, when_used="json"),
]
"""Timestamp field as exported by Taskwarrior."""

InputTime = Annotated[datetime | None, BeforeValidator(parse_input_time)]
"""Timestamp field supplied by API callers."""
