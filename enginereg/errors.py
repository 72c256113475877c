"""Error types and message formatting for enginereg.

Style guide for user-facing messages:
- Prefix with 'Error: '
- Use present tense: 'is not registered', 'must be'
- Add a hint when the user can fix the problem themselves
"""


class CorruptedVersionDataError(Exception):
    """Raised when no stable version can be resolved from the candidates.

    A well-formed catalog always lists at least one stable release, so this
    is never retried.
    """
    pass


def format_error(message: str) -> str:
    """Format an error message with consistent prefix.

    Examples:
        >>> format_error("no local build at /tmp/x")
        'Error: no local build at /tmp/x'
    """
    return f"Error: {message}"


def format_suggestion(message: str, suggestion: str) -> str:
    """Format an error message with a helpful suggestion.

    Examples:
        >>> format_suggestion("version '99.0.0' is unknown", "run 'enginereg refresh'")
        "Error: version '99.0.0' is unknown. Hint: run 'enginereg refresh'"
    """
    return f"{format_error(message)}. Hint: {suggestion}"


__all__ = [
    "CorruptedVersionDataError",
    "format_error",
    "format_suggestion",
]
