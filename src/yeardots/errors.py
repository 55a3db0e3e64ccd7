"""Error types shared across the core."""


class InvalidDay(ValueError):
    """Raised when a day-of-year is outside its year or cannot be resolved."""

    def __init__(self, year: object, day_of_year: object, reason: str = ""):
        self.year = year
        self.day_of_year = day_of_year
        message = f"Invalid day {day_of_year!r} for year {year!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class DecodeError(ValueError):
    """Raised when a persisted marker snapshot cannot be decoded."""

    pass


class StorageError(Exception):
    """Raised by storage adapters when a read, write or delete fails."""

    pass
