"""Data layer utilities for loading JSON definitions and persisted profiles."""

from .errors import DataError, DataLoadError, DataReferenceError, DataValidationError
from .paths import get_definitions_path, get_package_root
from .profile_store import InMemoryProfileStore, JsonFileProfileStore, ProfileStore

__all__ = [
    "DataError",
    "DataLoadError",
    "DataReferenceError",
    "DataValidationError",
    "InMemoryProfileStore",
    "JsonFileProfileStore",
    "ProfileStore",
    "get_definitions_path",
    "get_package_root",
]
