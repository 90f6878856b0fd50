"""
Configuration management for axiom conversion.

Supports YAML configuration files with environment variable interpolation.
The attribute sets decide which property axiom shapes can be generated
from relationships; an omitted set disables the matching shape.
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Set, Dict, Any, Iterable

import yaml
from dotenv import load_dotenv

from .errors import ConfigurationError


# Load .env file if present
load_dotenv()


def _interpolate_env_vars(value: str) -> str:
    """Replace ${VAR} or $VAR patterns with environment variable values."""
    if not isinstance(value, str):
        return value

    pattern = r"\$\{([^}]+)\}|\$([A-Z_][A-Z0-9_]*)"

    def replace(match):
        var_name = match.group(1) or match.group(2)
        env_value = os.environ.get(var_name)
        if env_value is None:
            raise ConfigurationError(
                f"Environment variable '{var_name}' is not set",
                details={"variable": var_name},
            )
        return env_value

    return re.sub(pattern, replace, value)


def _interpolate_dict(d: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively interpolate environment variables in a dictionary."""
    result = {}
    for key, value in d.items():
        if isinstance(value, dict):
            result[key] = _interpolate_dict(value)
        elif isinstance(value, list):
            result[key] = [
                _interpolate_dict(v) if isinstance(v, dict) else _interpolate_env_vars(v)
                for v in value
            ]
        elif isinstance(value, str):
            result[key] = _interpolate_env_vars(value)
        else:
            result[key] = value
    return result


def _parse_concept_ids(values: Any, section: str) -> Set[int]:
    """Convert a YAML list (or comma separated string) of identifiers to a set of ints."""
    if values is None:
        return set()
    if isinstance(values, str):
        values = [v for v in re.split(r"[,\s]+", values) if v]
    if not isinstance(values, (list, tuple, set)):
        raise ConfigurationError(
            f"Attribute section '{section}' must be a list of concept identifiers",
            details={"section": section},
        )

    ids = set()
    for value in values:
        if isinstance(value, bool):
            raise ConfigurationError(
                f"Invalid concept identifier {value!r} in '{section}'",
                details={"section": section},
            )
        if isinstance(value, int):
            ids.add(value)
        elif isinstance(value, str) and value.strip().isdigit():
            ids.add(int(value.strip()))
        else:
            raise ConfigurationError(
                f"Invalid concept identifier {value!r} in '{section}'",
                details={"section": section},
            )
    return ids


def _optional_concept_ids(data: Dict[str, Any], section: str) -> Optional[Set[int]]:
    if section not in data or data[section] is None:
        return None
    return _parse_concept_ids(data[section], section)


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"


@dataclass
class AttributeConfiguration:
    """Attribute classification sets used by the conversion service."""

    ungrouped_attributes: Set[int] = field(default_factory=set)
    object_attributes: Optional[Set[int]] = None
    data_attributes: Optional[Set[int]] = None
    annotation_attributes: Optional[Set[int]] = None

    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AttributeConfiguration":
        """
        Create configuration from a parsed YAML document.

        Args:
            data: Mapping with an ``attributes`` section and optional ``logging`` section

        Returns:
            AttributeConfiguration instance

        Raises:
            ConfigurationError: If an identifier is invalid or an environment variable is unset
        """
        config = _interpolate_dict(data or {})
        attributes = config.get("attributes") or {}
        logging_config = config.get("logging") or {}

        if not isinstance(attributes, dict):
            raise ConfigurationError("'attributes' section must be a mapping")

        return cls(
            ungrouped_attributes=_parse_concept_ids(attributes.get("ungrouped"), "ungrouped"),
            object_attributes=_optional_concept_ids(attributes, "object"),
            data_attributes=_optional_concept_ids(attributes, "data"),
            annotation_attributes=_optional_concept_ids(attributes, "annotation"),
            logging=LoggingConfig(
                level=str(logging_config.get("level", "INFO")).upper(),
            ),
        )

    @classmethod
    def from_yaml_file(cls, config_path: Path) -> "AttributeConfiguration":
        """Load configuration from a YAML file."""
        config_path = Path(config_path)
        if not config_path.is_file():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                details={"path": str(config_path)},
            )

        with open(config_path, "r", encoding="utf-8") as f:
            try:
                raw_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(
                    f"Invalid YAML in configuration file: {config_path}",
                    cause=e,
                )

        if not isinstance(raw_config, dict):
            raise ConfigurationError(
                f"Configuration file must contain a mapping: {config_path}"
            )
        return cls.from_dict(raw_config)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""

        def as_list(values: Optional[Iterable[int]]):
            return sorted(values) if values is not None else None

        return {
            "attributes": {
                "ungrouped": as_list(self.ungrouped_attributes),
                "object": as_list(self.object_attributes),
                "data": as_list(self.data_attributes),
                "annotation": as_list(self.annotation_attributes),
            },
            "logging": {
                "level": self.logging.level,
            },
        }
