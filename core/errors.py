# core/errors.py

class LibraryError(Exception):
    """Base class for errors raised by library operations.

    Each error is scoped to a single request; none are retried internally.
    """
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(LibraryError):
    """Entry, review, favourite, book or user does not exist"""
    status_code = 404


class Conflict(LibraryError):
    """Duplicate record for a (user, book) pair"""
    status_code = 409


class Forbidden(LibraryError):
    """Caller tried to mutate a record owned by another user"""
    status_code = 403


class InvalidArgument(LibraryError, ValueError):
    """Rating, content, notes or progress outside the allowed range"""
    status_code = 400
