"""Identifier and numeric validation for shell command arguments."""

import math
import re
import string
from typing import Any, Final


class ShellSafetyError(ValueError):
    """Input cannot be safely placed into a shell command."""

    pass


class InvalidCharacterError(ShellSafetyError):
    """Input contains characters outside the permitted set."""

    pass


class InvalidArgumentError(ShellSafetyError):
    """Input has the wrong type or is empty."""

    pass


class TooLongError(ShellSafetyError):
    """Input exceeds the identifier length bound."""

    pass


class LeadingHyphenError(ShellSafetyError):
    """Input would be read as a command-line option."""

    pass


class InvalidLimitError(ShellSafetyError):
    """Numeric input is not a positive integer."""

    pass


class ExceedsMaximumError(ShellSafetyError):
    """Numeric input is above the configured ceiling."""

    pass


MAX_IDENTIFIER_LENGTH: Final[int] = 255
DEFAULT_MAX_LIMIT: Final[int] = 1000

# Allow-list grammars
BRANCH_NAME_CHARS: Final[frozenset[str]] = frozenset(
    string.ascii_letters + string.digits + "-_./"
)
GIT_REF_CHARS: Final[frozenset[str]] = BRANCH_NAME_CHARS | frozenset("~^")

# Whole-string integer literal, ASCII digits only
_INTEGER_LITERAL: Final[re.Pattern[str]] = re.compile(r"-?[0-9]+")


def _validate_identifier(value: Any, allowed: frozenset[str], kind: str) -> str:
    if not isinstance(value, str) or not value:
        raise InvalidArgumentError(f"{kind} must be a non-empty string")

    if len(value) > MAX_IDENTIFIER_LENGTH:
        raise TooLongError(
            f"{kind} too long: {len(value)} chars "
            f"(max {MAX_IDENTIFIER_LENGTH})"
        )

    if not allowed.issuperset(value):
        raise InvalidCharacterError(f"{kind} contains invalid characters: {value!r}")

    if value.startswith("-"):
        raise LeadingHyphenError(f"{kind} cannot start with hyphen: {value!r}")

    return value


def validate_branch_name(value: Any) -> str:
    """Validate a git branch name for use as a command argument.

    Accepts letters, digits, ``-``, ``_``, ``.`` and ``/`` only, and never
    a leading hyphen, so the value can neither inject shell syntax nor be
    parsed as a git option.

    Args:
        value: Candidate branch name

    Returns:
        The branch name, unchanged

    Raises:
        InvalidArgumentError: If value is not a non-empty string
        TooLongError: If value is longer than 255 characters
        InvalidCharacterError: If value contains a character outside the allow-list
        LeadingHyphenError: If value starts with ``-``
    """
    return _validate_identifier(value, BRANCH_NAME_CHARS, "Branch name")


def validate_git_ref(value: Any) -> str:
    """Validate a git reference (branch, tag, hash, ``HEAD~5``, ``HEAD^^``).

    Same rules as :func:`validate_branch_name` with ``~`` and ``^`` added
    to the allow-list for relative-ref syntax.

    Args:
        value: Candidate git reference

    Returns:
        The reference, unchanged

    Raises:
        InvalidArgumentError: If value is not a non-empty string
        TooLongError: If value is longer than 255 characters
        InvalidCharacterError: If value contains a character outside the allow-list
        LeadingHyphenError: If value starts with ``-``
    """
    return _validate_identifier(value, GIT_REF_CHARS, "Git ref")


def _parse_integer(value: Any) -> int | None:
    """Strictly parse value as an integer, or return None."""
    # bool is an int subclass but never a meaningful count
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return int(value)
        return None
    if isinstance(value, str) and _INTEGER_LITERAL.fullmatch(value):
        number = int(value.lstrip("-").lstrip("0") or "0")
        return -number if value.startswith("-") else number
    return None


def _preview(value: Any) -> str:
    """Short repr of value for error messages."""
    if isinstance(value, int) and value.bit_length() > 64:
        return f"<{value.bit_length()}-bit integer>"
    text = repr(value)
    if len(text) > 40:
        return f"{text[:40]}... ({len(text)} chars)"
    return text


def validate_limit(
    value: Any,
    max_value: int = DEFAULT_MAX_LIMIT,
    name: str = "Limit",
) -> int:
    """Validate a count/limit destined for a command flag such as ``-N``.

    Parsing is strict: a string must be an integer literal in its entirety,
    so ``"10; rm"`` is rejected rather than read as 10.

    Args:
        value: Number or numeric string
        max_value: Largest accepted value (default: 1000)
        name: Subject used in error messages

    Returns:
        The parsed integer

    Raises:
        InvalidLimitError: If value is not a positive integer
        ExceedsMaximumError: If value is greater than max_value
    """
    # Bound digit strings before int(), which refuses very long literals
    if isinstance(value, str) and _INTEGER_LITERAL.fullmatch(value):
        digits = value.lstrip("-").lstrip("0")
        if len(digits) > len(str(max_value)):
            if value.startswith("-"):
                raise InvalidLimitError(
                    f"{name} must be a positive integer, got {_preview(value)}"
                )
            raise ExceedsMaximumError(
                f"{name} cannot exceed {max_value}, got {_preview(value)}"
            )

    number = _parse_integer(value)
    if number is None or number < 1:
        raise InvalidLimitError(f"{name} must be a positive integer, got {_preview(value)}")

    if number > max_value:
        raise ExceedsMaximumError(f"{name} cannot exceed {max_value}, got {_preview(number)}")

    return number
