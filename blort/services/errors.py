# services/errors.py
from typing import Optional

from sqlalchemy import exc as sa_exc


class RegistryError(Exception):
    """Base class for visit registry failures; str(error) is shown to callers."""

    retryable = False

    def __init__(self, message: str, original: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.original = original


class StoreUnavailable(RegistryError):
    """The durable store could not be reached or timed out."""

    retryable = True


class ConstraintViolation(RegistryError):
    """The store rejected a write because an integrity constraint failed."""


class InvalidInput(RegistryError, ValueError):
    """A name or argument that the registry refuses to store."""


def translate_db_error(error: Exception) -> RegistryError:
    """
    Maps a SQLAlchemy exception onto the registry error taxonomy.

    Args:
        error: Exception raised by the engine or session

    Returns:
        RegistryError: ConstraintViolation for integrity errors,
        StoreUnavailable for everything else
    """
    if isinstance(error, sa_exc.IntegrityError):
        return ConstraintViolation(f"Database error: {_describe(error)}", error)
    return StoreUnavailable(f"Database error: {_describe(error)}", error)


def _describe(error: Exception) -> str:
    if isinstance(error, sa_exc.DBAPIError) and error.orig is not None:
        return str(error.orig).strip()
    return str(error).strip()
