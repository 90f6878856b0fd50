"""
Conversion module.

Components:
- decomposer: Axioms to relationship groups
- composer: Relationship groups to axioms
- service: Facade with batch conversion and auxiliary extractors
"""

from .decomposer import AxiomDecomposer
from .composer import RelationshipComposer
from .service import AxiomRelationshipConversionService

__all__ = [
    "AxiomDecomposer",
    "RelationshipComposer",
    "AxiomRelationshipConversionService",
]
