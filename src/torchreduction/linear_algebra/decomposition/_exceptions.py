"""Exception classes for the decomposition module."""


class DecompositionError(RuntimeError):
    """Base exception for decomposition errors."""

    pass


class NotComputedError(DecompositionError):
    """Raised when a derived view is requested without a valid decomposition."""

    pass
