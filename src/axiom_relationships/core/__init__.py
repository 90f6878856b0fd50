"""
Core module for axiom conversion.

Contains configuration, errors, and well-known concept identifiers.
"""

from .config import AttributeConfiguration, LoggingConfig
from .errors import (
    AxiomToolkitError,
    ConfigurationError,
    ConversionError,
    DeserialisationError,
)

__all__ = [
    "AttributeConfiguration",
    "LoggingConfig",
    "AxiomToolkitError",
    "ConfigurationError",
    "ConversionError",
    "DeserialisationError",
]
