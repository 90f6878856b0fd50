"""
Tests for configuration module.
"""

import os
from unittest.mock import patch

import pytest

from axiom_relationships.core.config import (
    AttributeConfiguration,
    LoggingConfig,
    _interpolate_env_vars,
    _parse_concept_ids,
)
from axiom_relationships.core.errors import ConfigurationError


# =============================================================================
# Environment Interpolation Tests
# =============================================================================

class TestEnvInterpolation:
    """Test environment variable interpolation."""

    def test_interpolate_braces(self):
        with patch.dict(os.environ, {"UNGROUPED": "272741003"}):
            assert _interpolate_env_vars("${UNGROUPED}") == "272741003"

    def test_interpolate_dollar(self):
        with patch.dict(os.environ, {"UNGROUPED": "272741003"}):
            assert _interpolate_env_vars("$UNGROUPED") == "272741003"

    def test_non_string_passthrough(self):
        assert _interpolate_env_vars(123) == 123

    def test_missing_variable(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ConfigurationError, match="MISSING_VAR"):
                _interpolate_env_vars("${MISSING_VAR}")


# =============================================================================
# Concept Id Parsing Tests
# =============================================================================

class TestParseConceptIds:
    """Test attribute identifier lists."""

    def test_list(self):
        assert _parse_concept_ids([1, "2", " 3 "], "ungrouped") == {1, 2, 3}

    def test_separated_string(self):
        assert _parse_concept_ids("1, 2 3", "ungrouped") == {1, 2, 3}

    def test_none(self):
        assert _parse_concept_ids(None, "ungrouped") == set()

    @pytest.mark.parametrize("value", [["abc"], [True], [1.5]])
    def test_invalid_identifier(self, value):
        with pytest.raises(ConfigurationError, match="Invalid concept identifier"):
            _parse_concept_ids(value, "object")

    def test_not_a_list(self):
        with pytest.raises(ConfigurationError, match="must be a list"):
            _parse_concept_ids({"a": 1}, "object")


# =============================================================================
# Attribute Configuration Tests
# =============================================================================

class TestAttributeConfiguration:
    """Test attribute configuration loading."""

    def test_defaults(self):
        config = AttributeConfiguration()
        assert config.ungrouped_attributes == set()
        assert config.object_attributes is None
        assert config.data_attributes is None
        assert config.annotation_attributes is None
        assert config.logging == LoggingConfig()

    def test_from_dict(self):
        config = AttributeConfiguration.from_dict({
            "attributes": {
                "ungrouped": [272741003],
                "object": [762705008],
                "annotation": [],
            },
        })
        assert config.ungrouped_attributes == {272741003}
        assert config.object_attributes == {762705008}
        assert config.data_attributes is None
        assert config.annotation_attributes == set()

    def test_from_dict_with_env_vars(self):
        with patch.dict(os.environ, {"OBJECT_ATTRIBUTES": "762705008,363698007"}):
            config = AttributeConfiguration.from_dict({
                "attributes": {"object": "${OBJECT_ATTRIBUTES}"},
            })
        assert config.object_attributes == {762705008, 363698007}

    def test_from_empty_dict(self):
        assert AttributeConfiguration.from_dict({}) == AttributeConfiguration()

    def test_attributes_not_mapping(self):
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            AttributeConfiguration.from_dict({"attributes": [1, 2]})

    def test_from_yaml_file(self, attributes_yaml):
        config = AttributeConfiguration.from_yaml_file(attributes_yaml)
        assert config.ungrouped_attributes == {272741003, 411116001}
        assert config.object_attributes == {762705008}
        assert config.data_attributes == {762706009}
        assert config.annotation_attributes is None
        assert config.logging.level == "DEBUG"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            AttributeConfiguration.from_yaml_file(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "broken.yaml"
        config_file.write_text("attributes: [unclosed")
        with pytest.raises(ConfigurationError, match="Invalid YAML") as exc_info:
            AttributeConfiguration.from_yaml_file(config_file)
        assert exc_info.value.cause is not None

    def test_not_a_mapping(self, tmp_path):
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            AttributeConfiguration.from_yaml_file(config_file)

    def test_to_dict(self):
        config = AttributeConfiguration(ungrouped_attributes={3, 1, 2}, data_attributes={5})
        data = config.to_dict()
        assert data["attributes"] == {
            "ungrouped": [1, 2, 3],
            "object": None,
            "data": [5],
            "annotation": None,
        }
        assert data["logging"] == {"level": "INFO"}

    def test_to_dict_round_trip(self, attributes_yaml):
        config = AttributeConfiguration.from_yaml_file(attributes_yaml)
        assert AttributeConfiguration.from_dict(config.to_dict()) == config
