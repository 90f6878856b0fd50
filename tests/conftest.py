"""
Pytest configuration and fixtures.
"""

import pytest

from axiom_relationships.conversion import AxiomRelationshipConversionService


@pytest.fixture
def ungrouped_attributes():
    """272741003 |Laterality| is never role grouped."""
    return {272741003}


@pytest.fixture
def service(ungrouped_attributes) -> AxiomRelationshipConversionService:
    """Conversion service with all attribute sets configured."""
    return AxiomRelationshipConversionService(
        ungrouped_attributes,
        object_attributes={762705008},
        data_attributes={762706009},
        annotation_attributes={1295447006},
    )


@pytest.fixture
def attributes_yaml(tmp_path):
    """Write an attribute configuration file."""
    config_file = tmp_path / "attributes.yaml"
    config_file.write_text(
        """
attributes:
  ungrouped:
    - 272741003
    - "411116001"
  object:
    - 762705008
  data: [762706009]

logging:
  level: debug
"""
    )
    return config_file
