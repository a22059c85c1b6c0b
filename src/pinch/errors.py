# region Docstring
"""
pinch.errors

Exceptions raised by the history store, the clipboard adapter and the CLI
argument parsing. Every one of them is caught at the command boundary in
pinch.cli and turned into a printed message.
"""

# endregion
# region Exceptions


class PinchError(Exception):
    """Base class for all pinch errors."""

    pass


class NotFoundError(PinchError):
    """No clip exists at the requested index or id."""

    pass


class InvalidInputError(PinchError):
    """A user supplied value (index, capacity) could not be accepted."""

    pass


class ClipboardError(PinchError):
    """Reading from or writing to the system clipboard failed."""

    pass


class StorageError(PinchError):
    """The persisted history could not be read or written."""

    pass


def parse_index(value: str) -> int:
    """
    Parse a clip position given on the command line.

    Args:
        value (str): The raw argument.

    Returns:
        int: The parsed position. Range checking is left to the store.

    Raises:
        InvalidInputError: If the value is not an integer.

    Example:
        >>> parse_index("3")
        3
        >>> parse_index("abc")
        Traceback (most recent call last):
        ...
        pinch.errors.InvalidInputError: Invalid index: abc
    """
    try:
        return int(value.strip())
    except ValueError:
        raise InvalidInputError(f"Invalid index: {value}") from None


def parse_positive(value: str) -> int:
    """Parse a strictly positive integer, raising InvalidInputError otherwise."""
    try:
        number = int(value.strip())
    except ValueError:
        raise InvalidInputError("Max must be a positive number") from None
    if number < 1:
        raise InvalidInputError("Max must be a positive number")
    return number


# endregion

__all__ = [
    "ClipboardError",
    "InvalidInputError",
    "NotFoundError",
    "PinchError",
    "StorageError",
    "parse_index",
    "parse_positive",
]
