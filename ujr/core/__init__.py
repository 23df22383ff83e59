"""Core constants, errors and logging setup."""

from ujr.core.exceptions import RegistryError, UserAlreadyExistsError, UserNotFoundError
from ujr.core.logging import configure_logging

__all__ = [
    "RegistryError",
    "UserAlreadyExistsError",
    "UserNotFoundError",
    "configure_logging",
]
