"""Exceptions for mimedir library."""


class MimeDirError(Exception):
    """Base exception for all mimedir errors."""


class MimeDirParseError(MimeDirError):
    """Exception raised when reading a property from an external representation.

    The 'message' attribute contains a human-readable message about the
    error that occurred. The 'detailed_error' attribute can provide additional
    information about the error, such as the underlying validation errors,
    useful for debugging purposes.
    """

    def __init__(self, message: str, *, detailed_error: str | None = None) -> None:
        """Initialize the MimeDirParseError with a message."""
        super().__init__(message)
        self.message = message
        self.detailed_error = detailed_error


class NodeAccessError(MimeDirError):
    """Exception raised on structural misuse of a node.

    A node can be viewed as a single element sequence, but that view is
    read-only: it does not support adding, replacing or removing elements.
    """
