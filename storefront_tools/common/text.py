"""Text helpers shared by page objects."""

import re
from typing import Pattern


def escape_regex(value: str) -> str:
    """Escape ``value`` so it matches literally inside a regular expression."""
    return re.escape(value)


def literal_pattern(value: str, ignore_case: bool = True) -> Pattern[str]:
    """Compile a pattern that finds ``value`` (trimmed) as a literal substring."""
    flags = re.IGNORECASE if ignore_case else 0
    return re.compile(escape_regex(value.strip()), flags)


def exact_pattern(value: str, ignore_case: bool = True) -> Pattern[str]:
    """Compile a pattern matching exactly ``value`` and nothing else."""
    flags = re.IGNORECASE if ignore_case else 0
    return re.compile(rf"^{escape_regex(value)}$", flags)


__all__ = [
    "escape_regex",
    "exact_pattern",
    "literal_pattern",
]
