"""Error taxonomy shared across catalog, analysis, account and cart code."""


class ThriftCartError(Exception):
    """Base class for all application errors."""


class LoadError(ThriftCartError):
    """A catalog dataset could not be fetched or parsed."""

    def __init__(self, ref: str, reason: str):
        super().__init__(f"Failed to load dataset {ref}: {reason}")
        self.ref = ref
        self.reason = reason


class AnalysisError(ThriftCartError):
    """The analysis backend failed or returned an unusable answer."""


class SessionError(ThriftCartError):
    """Sign-in or sign-out failed. The message is safe to show to the user."""


class CartError(ThriftCartError):
    """Invalid cart operation."""
