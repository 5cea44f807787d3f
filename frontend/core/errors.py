from typing import Optional


# ---------------------------
# Base
# ---------------------------

class JournalError(Exception):
    """Base class for every error surfaced to the UI layer."""
    pass


# ---------------------------
# Input
# ---------------------------

class ValidationError(JournalError):
    """Raised when input fails a precondition (e.g., entry too short)."""
    pass


class SubmissionInProgressError(ValidationError):
    """Raised when a submission is already running for the session."""

    def __init__(self, message: str = "A submission is already in progress"):
        super().__init__(message)


# ---------------------------
# Session
# ---------------------------

class AuthenticationError(JournalError):
    """Raised when the journal service rejects credentials."""

    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message)


class RegistrationError(JournalError):
    """Raised when the journal service refuses to create an account."""
    pass


class SessionInvalidError(JournalError):
    """Raised when a protected operation runs without an authenticated session."""

    def __init__(self, message: str = "You must be logged in to do that"):
        super().__init__(message)


# ---------------------------
# Submission phases
# ---------------------------

class CreationError(JournalError):
    """Raised when the entry could not be saved. Nothing was persisted."""
    pass


class AnalysisError(JournalError):
    """
    Raised when a saved entry could not be analyzed.

    ``entry`` is the entry left persisted without analysis.
    """

    def __init__(self, message: str, entry=None):
        super().__init__(message)
        self.entry = entry


# ---------------------------
# Transport
# ---------------------------

class APIError(JournalError):
    """Raised by the API client on connection failures and non-2xx responses."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_connection_error(self) -> bool:
        return self.status_code is None
