"""Custom exceptions for Quick Class Selector services."""


class QuickClassError(Exception):
    """Base class for all expected failures in the class list services."""


class ValidationError(QuickClassError):
    """Raised when input holds no usable class entries.

    Invalid entries inside an otherwise valid list are dropped silently
    by the sanitizers; this is only raised when nothing survives, e.g. a
    batch import whose every line is blank or malformed.
    """


class BackendError(QuickClassError):
    """Raised when the backend rejects or cannot complete a request.

    Attributes:
        message: Human-readable error message
    """

    def __init__(self, message: str = "Backend request failed"):
        """Initialize BackendError.

        Args:
            message: Human-readable error message
        """
        self.message = message
        super().__init__(message)


class TransportError(BackendError):
    """Raised when the backend is unreachable or answers with garbage."""


class AuthorizationError(BackendError):
    """Raised when the backend refuses the caller (bad nonce, missing capability)."""
