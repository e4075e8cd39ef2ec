
class BookingNotFoundError(LookupError):
    """Raised when a booking id is not present in the booking store."""
    pass


class InvalidConfigurationError(ValueError):
    """Raised when the assistant configuration is unusable (empty catalog, duplicate ids, bad hours)."""
    pass
