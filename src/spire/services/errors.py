"""Service-layer exceptions."""


class FactoryError(Exception):
    """Raised when a runtime entity cannot be created."""


class SaveLoadError(Exception):
    """Raised when profile data cannot be read, validated or written."""
