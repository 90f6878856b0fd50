"""
Axiom construction from SNOMED CT relationships.

Builds axiom trees for property subsumption and rebuilds class axioms,
including role group nesting and concrete values, from an
:class:`~axiom_relationships.domain.AxiomRepresentation`.
"""

import logging
from typing import Dict, Iterable, List, Optional

from rdflib import OWL, XSD

from ..domain import (
    AxiomRepresentation,
    ConcreteValueType,
    Relationship,
    RelationshipGroups,
)
from ..core.concepts import IS_A, ROLE_GROUP_IRI
from ..core.errors import ConversionError
from .identifiers import concept_iri
from .model import (
    AnnotationProperty,
    Axiom,
    DataHasValue,
    DataProperty,
    EquivalentClasses,
    NamedClass,
    ObjectIntersectionOf,
    ObjectProperty,
    ObjectSomeValuesFrom,
    OWLObject,
    SubAnnotationPropertyOf,
    SubClassOf,
    SubDataPropertyOf,
    SubObjectPropertyOf,
    TypedLiteral,
)

logger = logging.getLogger(__name__)

# Literal datatype for each concrete value type
CONCRETE_VALUE_DATATYPES = {
    ConcreteValueType.DECIMAL: XSD.decimal,
    ConcreteValueType.INTEGER: XSD.integer,
    ConcreteValueType.STRING: XSD.string,
}


def _sort_key(relationship: Relationship):
    return (relationship.type_id, relationship.is_concrete, str(relationship.destination))


def _only_value_or_intersection(expressions: List[OWLObject]) -> OWLObject:
    if len(expressions) == 1:
        return expressions[0]
    return ObjectIntersectionOf(tuple(expressions))


class AxiomBuilder:
    """
    Creates axiom trees from concept identifiers and relationship groups.

    Relationships in group 0 whose type is not an ungrouped attribute are
    written in a role group of their own.
    """

    def __init__(self, ungrouped_attributes: Optional[Iterable[int]] = None):
        self.ungrouped_attributes = set(ungrouped_attributes or ())

    # -------------------------------------------------------------------------
    # Simple axioms
    # -------------------------------------------------------------------------

    def sub_class_of(self, sub_class_id: int, super_class_id: int) -> SubClassOf:
        return SubClassOf(NamedClass(concept_iri(sub_class_id)), NamedClass(concept_iri(super_class_id)))

    def equivalent_classes(self, left: OWLObject, right: OWLObject) -> EquivalentClasses:
        return EquivalentClasses((left, right))

    def sub_object_property_of(self, sub_property_id: int, super_property_id: int) -> SubObjectPropertyOf:
        return SubObjectPropertyOf(
            ObjectProperty(concept_iri(sub_property_id)),
            ObjectProperty(concept_iri(super_property_id)),
        )

    def sub_data_property_of(self, sub_property_id: int, super_property_id: int) -> SubDataPropertyOf:
        return SubDataPropertyOf(
            DataProperty(concept_iri(sub_property_id)),
            DataProperty(concept_iri(super_property_id)),
        )

    def sub_annotation_property_of(
        self, sub_property_id: int, super_property_id: int
    ) -> SubAnnotationPropertyOf:
        return SubAnnotationPropertyOf(
            AnnotationProperty(concept_iri(sub_property_id)),
            AnnotationProperty(concept_iri(super_property_id)),
        )

    # -------------------------------------------------------------------------
    # Class axioms
    # -------------------------------------------------------------------------

    def class_axiom(self, representation: AxiomRepresentation) -> Axiom:
        """
        Rebuild a SubClassOf or EquivalentClasses axiom.

        Args:
            representation: Normal (named left, relationships right) or GCI
                (relationships left, named right) representation

        Returns:
            SubClassOf when the representation is primitive, otherwise EquivalentClasses

        Raises:
            ConversionError: If the representation does not have a valid shape
        """
        self._check_shape(representation)

        left = self._class_expression(
            representation.left_hand_side_named_concept,
            representation.left_hand_side_relationships,
        )
        right = self._class_expression(
            representation.right_hand_side_named_concept,
            representation.right_hand_side_relationships,
        )
        if representation.primitive:
            axiom = SubClassOf(left, right)
        else:
            axiom = self.equivalent_classes(left, right)
        logger.debug(f"Built {axiom.type_name} axiom from relationships")
        return axiom

    @staticmethod
    def _check_shape(representation: AxiomRepresentation) -> None:
        sides = {
            "left": (
                representation.left_hand_side_named_concept,
                representation.left_hand_side_relationships,
            ),
            "right": (
                representation.right_hand_side_named_concept,
                representation.right_hand_side_relationships,
            ),
        }
        for side, (named_concept, relationships) in sides.items():
            if named_concept is not None and relationships is not None:
                raise ConversionError(
                    f"The {side} hand side of an axiom can not have both a named concept and relationships."
                )
            if named_concept is None and relationships is None:
                raise ConversionError(
                    f"The {side} hand side of an axiom needs a named concept or relationships."
                )

        if (representation.left_hand_side_relationships is not None
                and representation.right_hand_side_relationships is not None):
            raise ConversionError("Axioms with expressions on both sides are not supported.")
        if (representation.left_hand_side_named_concept is not None
                and representation.right_hand_side_named_concept is not None
                and representation.primitive):
            raise ConversionError(
                "Named concepts on both sides are only supported for equivalence axioms."
            )

    def _class_expression(
        self,
        named_concept: Optional[int],
        relationship_groups: Optional[RelationshipGroups],
    ) -> OWLObject:
        if named_concept is not None:
            return NamedClass(concept_iri(named_concept))

        parents = []
        ungrouped = []
        self_grouped = []
        role_groups: Dict[int, List[Relationship]] = {}
        for relationships in relationship_groups.values():
            for relationship in relationships:
                if relationship.type_id == IS_A:
                    if relationship.is_concrete:
                        raise ConversionError(
                            f"IS-A relationship requires a concept destination, got {relationship.destination}."
                        )
                    parents.append(relationship.destination)
                elif relationship.group == 0:
                    if relationship.type_id in self.ungrouped_attributes:
                        ungrouped.append(relationship)
                    else:
                        self_grouped.append(relationship)
                else:
                    role_groups.setdefault(relationship.group, []).append(relationship)

        terms: List[OWLObject] = [NamedClass(concept_iri(parent)) for parent in sorted(set(parents))]
        terms.extend(self._attribute(r) for r in sorted(set(ungrouped), key=_sort_key))
        terms.extend(
            self._role_group(self._attribute(r)) for r in sorted(set(self_grouped), key=_sort_key)
        )
        for group in sorted(role_groups):
            members = [self._attribute(r) for r in sorted(set(role_groups[group]), key=_sort_key)]
            terms.append(self._role_group(_only_value_or_intersection(members)))

        if not terms:
            terms.append(NamedClass(OWL.Thing))
        return _only_value_or_intersection(terms)

    @staticmethod
    def _attribute(relationship: Relationship) -> OWLObject:
        if relationship.is_concrete:
            value = relationship.concrete_value
            return DataHasValue(
                DataProperty(concept_iri(relationship.type_id)),
                TypedLiteral(value.value, CONCRETE_VALUE_DATATYPES[value.type]),
            )
        return ObjectSomeValuesFrom(
            ObjectProperty(concept_iri(relationship.type_id)),
            NamedClass(concept_iri(relationship.destination)),
        )

    @staticmethod
    def _role_group(expression: OWLObject) -> ObjectSomeValuesFrom:
        return ObjectSomeValuesFrom(ObjectProperty(ROLE_GROUP_IRI), expression)
