"""
Core Exceptions
================

Custom exceptions for the application following clean architecture principles.

These exceptions define domain-specific errors that can be caught and handled
appropriately at the application boundaries.
"""

from typing import Optional, Any


class ApplicationException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DomainException(ApplicationException):
    """Base exception for domain logic violations."""


class ConfigurationException(ApplicationException):
    """Exception for configuration errors."""

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        details: Optional[dict] = None
    ):
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message, details)


class SLAExtensionLimitExceeded(DomainException):
    """Raised when a deadline extension would exceed the tier's allowance."""

    def __init__(
        self,
        priority: str,
        max_extensions: int,
        extensions_used: int,
        details: Optional[dict] = None
    ):
        self.priority = priority
        self.max_extensions = max_extensions
        self.extensions_used = extensions_used
        super().__init__(
            f"Priority '{priority}' allows {max_extensions} extension(s), "
            f"{extensions_used} already used",
            details or {
                "priority": priority,
                "max_extensions": max_extensions,
                "extensions_used": extensions_used,
            }
        )


class SnapshotUnavailableException(ApplicationException):
    """Raised when a snapshot collaborator cannot supply data for a run."""

    def __init__(self, collaborator: str, message: str, details: Optional[Any] = None):
        self.collaborator = collaborator
        super().__init__(f"{collaborator}: {message}", details)
