"""Error taxonomy for the company verification subsystem.

Every error is recoverable and surfaced to the caller; the HTTP layer maps
``status_code`` to the response status.
"""

from typing import Any


class CompanyReviewError(Exception):
    """Base class for all company review errors."""

    status_code = 500

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context = context


class ValidationError(CompanyReviewError):
    """Input rejected before reaching the repository."""

    status_code = 400


class AuthorizationError(CompanyReviewError):
    """Caller role is not allowed to perform the operation."""

    status_code = 403


class NotFoundError(CompanyReviewError):
    """Unknown company id."""

    status_code = 404


class PersistenceError(CompanyReviewError):
    """Repository failure (database, network, storage)."""

    status_code = 503
