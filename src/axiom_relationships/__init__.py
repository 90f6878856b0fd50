"""
SNOMED CT Axiom Relationship Conversion

Converts SNOMED CT OWL axioms to relationship groups and back.
"""

__version__ = "0.1.0"

from .core.config import AttributeConfiguration
from .core.errors import (
    AxiomToolkitError,
    ConfigurationError,
    ConversionError,
    DeserialisationError,
)
from .domain import (
    AxiomRepresentation,
    ConcreteValue,
    ConcreteValueType,
    GroupCounter,
    ObjectPropertyAxiomRepresentation,
    Relationship,
)
from .ontology import parse_axiom, render_axiom, axiom_to_string
from .conversion import AxiomRelationshipConversionService

__all__ = [
    "__version__",
    # Core
    "AttributeConfiguration",
    "AxiomToolkitError",
    "ConfigurationError",
    "ConversionError",
    "DeserialisationError",
    # Domain
    "AxiomRepresentation",
    "ConcreteValue",
    "ConcreteValueType",
    "GroupCounter",
    "ObjectPropertyAxiomRepresentation",
    "Relationship",
    # Codec
    "parse_axiom",
    "render_axiom",
    "axiom_to_string",
    # Service
    "AxiomRelationshipConversionService",
]
