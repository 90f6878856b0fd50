"""
Ontology module.

Axiom tree model, OWL functional syntax codec, identifier resolution and
axiom construction.

Components:
- model: Immutable axiom and class expression nodes
- codec: Parse and render single axioms
- identifiers: Map entities to SNOMED CT concept identifiers
- builder: Create axioms from relationships
"""

from .model import (
    AnnotationProperty,
    Axiom,
    DataHasValue,
    DataProperty,
    DisjointClasses,
    EquivalentClasses,
    NamedClass,
    ObjectAllValuesFrom,
    ObjectComplementOf,
    ObjectIntersectionOf,
    ObjectProperty,
    ObjectSomeValuesFrom,
    ObjectUnionOf,
    ReflexiveObjectProperty,
    SubAnnotationPropertyOf,
    SubClassOf,
    SubDataPropertyOf,
    SubObjectPropertyOf,
    SubPropertyChainOf,
    TransitiveObjectProperty,
    TypedLiteral,
)
from .codec import parse_axiom, render_axiom, normalize_axiom_text, axiom_to_string
from .identifiers import concept_id_of, concept_iri, is_named_concept, is_role_group

__all__ = [
    # Model
    "AnnotationProperty",
    "Axiom",
    "DataHasValue",
    "DataProperty",
    "DisjointClasses",
    "EquivalentClasses",
    "NamedClass",
    "ObjectAllValuesFrom",
    "ObjectComplementOf",
    "ObjectIntersectionOf",
    "ObjectProperty",
    "ObjectSomeValuesFrom",
    "ObjectUnionOf",
    "ReflexiveObjectProperty",
    "SubAnnotationPropertyOf",
    "SubClassOf",
    "SubDataPropertyOf",
    "SubObjectPropertyOf",
    "SubPropertyChainOf",
    "TransitiveObjectProperty",
    "TypedLiteral",

    # Codec
    "parse_axiom",
    "render_axiom",
    "normalize_axiom_text",
    "axiom_to_string",

    # Identifiers
    "concept_id_of",
    "concept_iri",
    "is_named_concept",
    "is_role_group",
]
