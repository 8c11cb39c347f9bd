class TimeServerError(Exception):
    """Base error for the time server."""


class UnknownTimezoneError(TimeServerError):
    """Raised when a timezone name cannot be resolved."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown time zone {name}")


class DatetimeLayoutError(TimeServerError):
    """Raised when a datetime string does not match the fixed layout."""


class ConversionRequestError(TimeServerError):
    """Raised when a conversion request body cannot be decoded."""
