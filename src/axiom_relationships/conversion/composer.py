"""
Relationship to axiom composition.
"""

import logging
from typing import Collection, Iterable, Optional

from ..core.concepts import IS_A
from ..core.errors import ConversionError
from ..domain import AxiomRepresentation
from ..ontology.builder import AxiomBuilder
from ..ontology.model import Axiom

logger = logging.getLogger(__name__)


class RelationshipComposer:
    """
    Rebuilds axioms from relationship representations.

    A named concept whose first IS-A parent is a configured attribute is
    written as a property subsumption axiom. Annotation attributes are
    checked first, then object attributes, then data attributes; a missing
    attribute set disables that axiom shape.
    """

    def __init__(
        self,
        ungrouped_attributes: Optional[Iterable[int]] = None,
        object_attributes: Optional[Collection[int]] = None,
        data_attributes: Optional[Collection[int]] = None,
        annotation_attributes: Optional[Collection[int]] = None,
    ):
        self.builder = AxiomBuilder(ungrouped_attributes)
        self.object_attributes = object_attributes
        self.data_attributes = data_attributes
        self.annotation_attributes = annotation_attributes

    def compose(self, representation: AxiomRepresentation) -> Axiom:
        """
        Convert a representation to an axiom tree.

        Raises:
            ConversionError: If group 0 or its IS-A relationship is missing, or the shape is invalid
        """
        if (representation.left_hand_side_named_concept is not None
                and representation.right_hand_side_relationships is not None):
            property_axiom = self._property_axiom(representation)
            if property_axiom is not None:
                return property_axiom

        # Normal axioms and GCI axioms
        return self.builder.class_axiom(representation)

    def _property_axiom(self, representation: AxiomRepresentation) -> Optional[Axiom]:
        relationship_groups = representation.right_hand_side_relationships
        if 0 not in relationship_groups:
            raise ConversionError("At least one relationship is required in group 0.")

        group_zero = relationship_groups[0]
        if not any(relationship.type_id == IS_A for relationship in group_zero):
            raise ConversionError(
                "At least one relationship with type '116680003 | Is a (attribute) |' is required in group 0."
            )

        concept_id = representation.left_hand_side_named_concept
        parent = next(relationship for relationship in group_zero if relationship.type_id == IS_A)
        parent_id = parent.destination

        # Attribute concepts only have one parent
        if self.annotation_attributes is not None and parent_id in self.annotation_attributes:
            logger.debug(f"Concept {concept_id} is an annotation attribute")
            return self.builder.sub_annotation_property_of(concept_id, parent_id)
        if self.object_attributes is not None and parent_id in self.object_attributes:
            logger.debug(f"Concept {concept_id} is an object attribute")
            return self.builder.sub_object_property_of(concept_id, parent_id)
        if self.data_attributes is not None and parent_id in self.data_attributes:
            logger.debug(f"Concept {concept_id} is a data attribute")
            return self.builder.sub_data_property_of(concept_id, parent_id)
        return None
