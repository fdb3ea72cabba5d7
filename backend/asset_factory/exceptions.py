"""Exceptions for the Brand Asset Factory."""

from typing import List, Optional


class BrandConfigError(Exception):
    """Raised when a brand configuration cannot be parsed or is rejected."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        """
        Initialize BrandConfigError.

        Args:
            message: Human-readable error message
            errors: Individual validation messages, when validation failed
        """
        super().__init__(message)
        self.errors = errors or []

    def __str__(self) -> str:
        msg = super().__str__()
        if self.errors:
            msg = f"{msg}: {', '.join(self.errors)}"
        return msg
