"""
Core Module
Business logic for journal submission and the error taxonomy.

Exports:
    Errors: JournalError and its subclasses
    Ports: AuthGateway, TokenVerifier, EntryGateway
    Orchestrator: EntrySubmissionOrchestrator
    Loader: EntryLoader
"""

from .errors import (
    JournalError,
    ValidationError,
    SubmissionInProgressError,
    AuthenticationError,
    RegistrationError,
    SessionInvalidError,
    CreationError,
    AnalysisError,
    APIError,
)
from .ports import AuthGateway, TokenVerifier, EntryGateway
from .orchestrator import EntrySubmissionOrchestrator
from .entries import EntryLoader

__all__ = [
    # Errors
    "JournalError",
    "ValidationError",
    "SubmissionInProgressError",
    "AuthenticationError",
    "RegistrationError",
    "SessionInvalidError",
    "CreationError",
    "AnalysisError",
    "APIError",
    # Ports
    "AuthGateway",
    "TokenVerifier",
    "EntryGateway",
    # Orchestrator
    "EntrySubmissionOrchestrator",
    # Loader
    "EntryLoader",
]
