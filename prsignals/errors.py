class PullContextError(Exception):
    """Raised when pull request data needed by a signal cannot be retrieved.

    ``reason`` carries the human-readable explanation; the failing accessor's
    exception is chained as ``__cause__``.
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class SignalConfigError(ValueError):
    """Raised when a signal configuration mapping is invalid."""
