# app/errors.py


class TypesprintError(Exception):
    """Base class for application errors."""


class InvalidConfiguration(TypesprintError):
    """Session cannot start with the given settings or word pool."""


class FailedPrecondition(TypesprintError):
    """An engine or clock operation was called in the wrong state."""


class DatabaseError(TypesprintError):
    pass
