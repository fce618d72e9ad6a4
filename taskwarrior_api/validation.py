"""Input validation and sanitization for values passed to Taskwarrior.

Arguments are always handed to the subprocess as a token list, so nothing
here guards against a shell. These checks protect Taskwarrior's own argument
grammar: a value must never turn into an option, a second attribute or a
filter operator.
"""

import re
import unicodedata

UUID_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)

# Tags become "+tag"/"-tag" tokens and must stay a single word.
TAG_PATTERN = re.compile(r"^\w[\w.@-]*$")

REPORT_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")

RECUR_PATTERN = re.compile(r"^[A-Za-z0-9_.]+$")

# Characters stripped from free text before it reaches the command line.
UNSAFE_CHARACTERS = frozenset(";|&$`<>\\")


def validate_task_uuid(value: str | None) -> bool:
    """Check that a value is a canonical 8-4-4-4-12 hex UUID."""
    if not value:
        return False
    return UUID_PATTERN.match(value) is not None


def sanitize_input(value: str) -> str:
    """Strip characters Taskwarrior could misread from free text.

    Removes control characters and shell-significant punctuation, trims
    surrounding whitespace and drops leading dashes so the value can never
    be parsed as an option.

    Args:
        value: Raw text from a caller (description, project name).

    Returns:
        The sanitized text. May be empty.
    """
    cleaned = "".join(
        ch
        for ch in value
        if ch not in UNSAFE_CHARACTERS and unicodedata.category(ch) != "Cc"
    )
    return cleaned.strip().lstrip("-").strip()


def is_valid_tag(value: str) -> bool:
    """Check that a tag is a single word usable as ``+tag``."""
    return TAG_PATTERN.match(value) is not None


def is_valid_report_name(value: str) -> bool:
    """Check that a report name is a plain identifier."""
    return REPORT_NAME_PATTERN.match(value) is not None


def is_valid_recur(value: str) -> bool:
    """Check that a recurrence period is a single duration word (e.g. ``weekly``, ``2d``)."""
    return RECUR_PATTERN.match(value) is not None
