"""Application exceptions."""

from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""


class BackendError(AppError):
    """Raised when a call to the school REST backend fails.

    Covers network failures, non-2xx responses and bodies that are not
    valid JSON.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        retryable: bool = False,
    ):
        """Initialize BackendError.

        Args:
            message: Human-readable error description.
            status_code: HTTP status returned by the backend, if any.
            retryable: Whether the failure looks transient (network error).
        """
        self.status_code = status_code
        self.retryable = retryable
        super().__init__(message)


class SubmissionInProgressError(AppError):
    """Raised when a form is submitted again while its request is in flight."""

    def __init__(self, form_id: str):
        self.form_id = form_id
        super().__init__(f"Form {form_id} is already being submitted")
