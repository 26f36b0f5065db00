"""Shell command safety utilities."""

import string
from typing import Any, Final

from gitctx_mcp.utils.validation import InvalidCharacterError

# Characters prefixed with a backslash by escape_double_quoted.
SHELL_ESCAPE_CHARS: Final[frozenset[str]] = frozenset("\"$`\\!;|&><(){}[]*?~#' \t")

# Cannot be neutralized inside a single-line argument
FORBIDDEN_CHARS: Final[frozenset[str]] = frozenset("\x00\n\r")

EXTENSION_CHARS: Final[frozenset[str]] = frozenset(string.ascii_letters + string.digits)
DEFAULT_EXTENSION: Final[str] = "ts"


def escape_double_quoted(value: Any) -> str:
    """Backslash-escape a string so it can be spliced as one bare shell word.

    Every shell metacharacter, quote, space and tab is prefixed with a
    backslash in a single pass. The result must not be wrapped in double
    quotes, where a backslash before a space or ``'`` stays literal.
    Non-string input yields an empty string.

    Args:
        value: Untrusted text (file path, author name, ...)

    Returns:
        Escaped text

    Raises:
        InvalidCharacterError: If value contains a null byte, newline,
            or carriage return
    """
    if not isinstance(value, str):
        return ""

    if not FORBIDDEN_CHARS.isdisjoint(value):
        raise InvalidCharacterError(
            f"Value contains invalid characters (null byte or line break): {value!r}"
        )

    return "".join(f"\\{char}" if char in SHELL_ESCAPE_CHARS else char for char in value)


def escape_single_quoted(value: Any) -> str:
    """Escape a string for use inside a single-quoted shell argument.

    Each ``'`` becomes ``'\\''``: close the quote, emit a literal quote,
    reopen. Nothing else needs escaping inside single quotes.

    Args:
        value: Untrusted text

    Returns:
        Escaped text, or empty string for non-string input
    """
    if not isinstance(value, str):
        return ""
    return value.replace("'", "'\\''")


def sanitize_extension(value: Any, default: str = DEFAULT_EXTENSION) -> str:
    """Reduce a file extension to ASCII letters and digits.

    Unsafe characters are deleted rather than escaped, so ``"ts; rm -rf /"``
    becomes ``"tsrmrf"``.

    Args:
        value: User-supplied extension such as ``".py"``
        default: Returned for non-string input or an empty result

    Returns:
        Alphanumeric extension token
    """
    if not isinstance(value, str):
        return default
    cleaned = "".join(char for char in value if char in EXTENSION_CHARS)
    return cleaned or default
