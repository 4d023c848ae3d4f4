"""Typed failures raised by the wellness services.

Each error carries the HTTP status the API layer maps it to, so routes
never need to translate domain errors themselves.
"""


class WellnessError(Exception):
    """Base class for domain errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def kind(self) -> str:
        return type(self).__name__.removesuffix("Error")


class NotFoundError(WellnessError):
    """Entry does not exist or belongs to another user."""

    status_code = 404


class ConflictError(WellnessError):
    """A record with the same natural key already exists."""

    status_code = 409


class NoDataError(WellnessError):
    """An aggregate, narrative or export was requested over zero entries."""

    status_code = 404


class UnauthorizedError(WellnessError):
    """Missing, invalid or expired credentials."""

    status_code = 401
