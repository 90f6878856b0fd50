"""
Custom exception classes for axiom conversion.

Exception Hierarchy:
    AxiomToolkitError (base)
    ├── ConfigurationError
    └── ConversionError
        └── DeserialisationError

Only structural problems are errors. Axiom types that are well formed but
not convertible to relationships are reported by returning ``None``.
"""

from typing import Optional, Dict, Any


class AxiomToolkitError(Exception):
    """Base exception for axiom toolkit errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        msg = self.message
        if self.details:
            msg += f" | Details: {self.details}"
        if self.cause:
            msg += f" | Caused by: {self.cause}"
        return msg


class ConfigurationError(AxiomToolkitError):
    """Raised when configuration is invalid or missing."""

    pass


class ConversionError(AxiomToolkitError):
    """Raised when an axiom or relationship set has an unexpected structure."""

    def __init__(
        self,
        message: str,
        axiom: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.axiom = axiom

    def __str__(self) -> str:
        msg = super().__str__()
        if self.axiom and self.axiom not in self.message:
            msg += f" | Axiom: {self.axiom}"
        return msg


class DeserialisationError(ConversionError):
    """Raised when axiom expression text cannot be parsed."""

    pass
