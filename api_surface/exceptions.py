"""Exception hierarchy for API Surface.

This module defines the exception hierarchy used throughout the API Surface library.
All exceptions inherit from ApiSurfaceError, providing a consistent error handling interface.
"""


class ApiSurfaceError(Exception):
    """Base exception for all API Surface errors."""


class DeclarationKindMismatch(ApiSurfaceError):
    """Raised when a signature formatter receives a declaration of another kind.

    This indicates a wiring defect in the classifier, not bad input, and is
    never recovered locally.
    """

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(f"Expected a {expected} declaration, got {actual}")
        self.expected = expected
        self.actual = actual


class SourceParseError(ApiSurfaceError):
    """Raised when a source file cannot be read or parsed."""


class OutputFormatError(ApiSurfaceError):
    """Raised when the external code formatter rejects a signature or payload."""
