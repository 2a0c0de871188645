"""Errors raised by the food lookup layer."""


class FoodLookupError(LookupError):
    """A lookup against the nutrition database failed.

    The message is always generic and safe to show to end users; the
    original cause is logged and chained, never included in ``str(exc)``.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class FdcTransportError(FoodLookupError):
    """Network failure or non-success HTTP status from FDC."""


class FdcPayloadError(FoodLookupError):
    """FDC answered, but the body does not match the expected shape."""
