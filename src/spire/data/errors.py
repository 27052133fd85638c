"""Custom exceptions for definition loading and validation."""


class DataError(Exception):
    """Base exception for the data layer."""


class DataLoadError(DataError):
    """Raised when definition JSON files are missing or unreadable."""


class DataValidationError(DataError):
    """Raised when definition JSON content fails structural validation."""


class DataReferenceError(DataError):
    """Raised when definitions reference stats, slots or enemies that do not exist."""
