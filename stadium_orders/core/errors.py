class DomainError(Exception):
    """Base class for errors raised by the ordering services.

    Each subclass carries the HTTP status the API layer renders it with, so
    services never import FastAPI.
    """

    status_code = 500

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.message = message
        self.field = field


class ValidationError(DomainError):
    """Malformed or semantically invalid request (empty cart, missing seat...)."""

    status_code = 400


class NotFoundError(DomainError):
    status_code = 404


class InvalidTransitionError(DomainError):
    """Requested status change is not in the order transition table."""

    status_code = 409
