"""
Axiom to relationship decomposition.

Splits SubClassOf, EquivalentClasses and property subsumption axioms into
a named concept on one side and relationship groups on the other. Role
groups are numbered from a counter that the caller can share between the
axioms of one concept.
"""

import logging
from typing import List, Optional, Tuple

from rdflib import OWL, RDF, RDFS, XSD, URIRef

from ..core.concepts import IS_A
from ..core.errors import ConversionError
from ..domain import (
    AxiomRepresentation,
    ConcreteValue,
    GroupCounter,
    Relationship,
    RelationshipGroups,
    single_is_a_relationship,
)
from ..ontology.builder import CONCRETE_VALUE_DATATYPES
from ..ontology.codec import axiom_to_string
from ..ontology.identifiers import concept_id_of, is_role_group
from ..ontology.model import (
    Axiom,
    DataHasValue,
    EquivalentClasses,
    NamedClass,
    ObjectIntersectionOf,
    ObjectSomeValuesFrom,
    OWLObject,
    SubAnnotationPropertyOf,
    SubClassOf,
    SubDataPropertyOf,
    SubObjectPropertyOf,
    datatype_to_funowl,
)

logger = logging.getLogger(__name__)

SUPPORTED_AXIOM_TYPES = (
    SubClassOf,
    EquivalentClasses,
    SubObjectPropertyOf,
    SubDataPropertyOf,
    SubAnnotationPropertyOf,
)

_SUB_PROPERTY_AXIOM_TYPES = (SubObjectPropertyOf, SubDataPropertyOf, SubAnnotationPropertyOf)

# Datatypes of the OWL 2 datatype map
OWL2_DATATYPES = frozenset(
    [
        URIRef(str(XSD) + name)
        for name in (
            "decimal", "integer", "nonNegativeInteger", "nonPositiveInteger",
            "positiveInteger", "negativeInteger", "long", "int", "short", "byte",
            "unsignedLong", "unsignedInt", "unsignedShort", "unsignedByte",
            "double", "float", "string", "normalizedString", "token", "language",
            "Name", "NCName", "NMTOKEN", "boolean", "hexBinary", "base64Binary",
            "anyURI", "dateTime", "dateTimeStamp",
        )
    ]
    + [URIRef(str(RDF) + name) for name in ("PlainLiteral", "XMLLiteral", "langString")]
    + [URIRef(str(RDFS) + "Literal")]
    + [URIRef(str(OWL) + name) for name in ("real", "rational")]
)

_VALUE_TYPES_BY_DATATYPE = {datatype: value_type for value_type, datatype in CONCRETE_VALUE_DATATYPES.items()}


class AxiomDecomposer:
    """Converts axiom trees to :class:`AxiomRepresentation` instances."""

    def decompose(
        self,
        axiom: Axiom,
        group_offset: Optional[GroupCounter] = None,
    ) -> Optional[AxiomRepresentation]:
        """
        Convert one axiom to relationships.

        Args:
            axiom: Parsed axiom
            group_offset: Counter for role group numbers, advanced once per role group

        Returns:
            The representation, or None if the axiom type can not be expressed as relationships

        Raises:
            ConversionError: If the axiom has an unexpected structure
        """
        if group_offset is None:
            group_offset = GroupCounter()

        if not isinstance(axiom, SUPPORTED_AXIOM_TYPES):
            logger.debug(
                "Only SubClassOf, EquivalentClasses, SubObjectPropertyOf, SubDataPropertyOf and "
                f"SubAnnotationPropertyOf can be converted to relationships. Axiom given is of type "
                f"\"{axiom.type_name}\". Returning None."
            )
            return None

        if isinstance(axiom, _SUB_PROPERTY_AXIOM_TYPES):
            return AxiomRepresentation(
                left_hand_side_named_concept=concept_id_of(axiom.sub_property),
                right_hand_side_relationships=single_is_a_relationship(concept_id_of(axiom.super_property)),
                primitive=True,
            )

        if isinstance(axiom, EquivalentClasses):
            if len(axiom.expressions) != 2:
                text = axiom_to_string(axiom)
                raise ConversionError(
                    "Expecting EquivalentClasses expression to contain 2 expressions, "
                    f"got {len(axiom.expressions)} - axiom '{text}'.",
                    axiom=text,
                )
            left_expression, right_expression = self._order_equivalent_expressions(axiom.expressions)
            representation = AxiomRepresentation(primitive=False)
        else:
            left_expression, right_expression = axiom.sub_class, axiom.super_class
            representation = AxiomRepresentation(primitive=True)

        left_named_concept = self.reduce_to_named_concept(left_expression)
        right_named_concept = self.reduce_to_named_concept(right_expression)
        if left_named_concept is not None:
            representation.left_hand_side_named_concept = left_named_concept
            if right_named_concept is not None:
                representation.right_hand_side_relationships = single_is_a_relationship(right_named_concept)
            else:
                representation.right_hand_side_relationships = self.decompose_intersection(
                    right_expression, group_offset
                )
        else:
            # GCI axioms do not contribute to the necessary normal form so they number their own groups
            representation.left_hand_side_relationships = self.decompose_intersection(
                left_expression, GroupCounter()
            )
            if right_named_concept is None:
                raise ConversionError(
                    "Axioms with expressions on both sides are not supported.",
                    axiom=axiom_to_string(axiom),
                )
            representation.right_hand_side_named_concept = right_named_concept

        return representation

    @staticmethod
    def _order_equivalent_expressions(expressions: Tuple[OWLObject, ...]) -> Tuple[OWLObject, OWLObject]:
        first, second = expressions
        if isinstance(second, NamedClass) and not isinstance(first, NamedClass):
            return second, first
        return first, second

    @staticmethod
    def reduce_to_named_concept(expression: OWLObject) -> Optional[int]:
        """Return the concept id of a bare named class, None for any other expression."""
        if not isinstance(expression, NamedClass):
            return None
        return concept_id_of(expression)

    def decompose_intersection(
        self,
        expression: OWLObject,
        group_offset: GroupCounter,
    ) -> RelationshipGroups:
        """Split an ObjectIntersectionOf into IS-A, ungrouped and role group relationships."""
        if not isinstance(expression, ObjectIntersectionOf):
            raise ConversionError(
                f"Expecting ObjectIntersectionOf at first level of expression, got {expression.type_name} "
                f"in expression {axiom_to_string(expression)}."
            )

        relationship_groups: RelationshipGroups = {}
        for operand in expression.operands:
            if isinstance(operand, NamedClass):
                relationship_groups.setdefault(0, []).append(Relationship(0, IS_A, concept_id_of(operand)))

            elif isinstance(operand, ObjectSomeValuesFrom):
                if is_role_group(operand.property):
                    # The counter only advances once the whole group is extracted
                    group = group_offset.value
                    members = [
                        self._relationship(member, group)
                        for member in self._role_group_members(operand.filler, expression)
                    ]
                    group_offset.allocate()
                    relationship_groups.setdefault(group, []).extend(members)
                else:
                    relationship_groups.setdefault(0, []).append(self._relationship(operand, 0))

            elif isinstance(operand, DataHasValue):
                relationship_groups.setdefault(0, []).append(self._relationship(operand, 0))

            else:
                raise ConversionError(
                    "Expecting Class or ObjectSomeValuesFrom or DataHasValue at second level of expression, "
                    f"got {operand.type_name} in expression {axiom_to_string(expression)}."
                )

        return relationship_groups

    @staticmethod
    def _role_group_members(filler: OWLObject, expression: OWLObject) -> List[OWLObject]:
        if isinstance(filler, (ObjectSomeValuesFrom, DataHasValue)):
            return [filler]
        if isinstance(filler, ObjectIntersectionOf):
            for member in filler.operands:
                if not isinstance(member, (ObjectSomeValuesFrom, DataHasValue)):
                    raise ConversionError(
                        "Expecting ObjectSomeValuesFrom or DataHasValue within ObjectIntersectionOf as part of "
                        f"role group, got {member.type_name} in expression {axiom_to_string(expression)}."
                    )
            return list(filler.operands)
        raise ConversionError(
            "Expecting ObjectSomeValuesFrom with role group to have one of ObjectSomeValuesFrom, "
            f"DataHasValue or ObjectIntersectionOf, got {filler.type_name} in expression "
            f"{axiom_to_string(expression)}."
        )

    def _relationship(self, restriction: OWLObject, group: int) -> Relationship:
        if isinstance(restriction, DataHasValue):
            return self._concrete_value_relationship(restriction, group)
        return self._existential_relationship(restriction, group)

    @staticmethod
    def _existential_relationship(some_values_from: ObjectSomeValuesFrom, group: int) -> Relationship:
        type_id = concept_id_of(some_values_from.property)
        filler = some_values_from.filler
        if not isinstance(filler, NamedClass):
            raise ConversionError(
                f"Expecting right hand side of ObjectSomeValuesFrom to be type Class, got {filler.type_name}."
            )
        return Relationship(group, type_id, concept_id_of(filler))

    @staticmethod
    def _concrete_value_relationship(data_has_value: DataHasValue, group: int) -> Relationship:
        type_id = concept_id_of(data_has_value.property)
        datatype = data_has_value.literal.datatype
        if datatype not in OWL2_DATATYPES:
            raise ConversionError(f"{datatype_to_funowl(datatype)} is not an OWL builtIn data type.")

        value_type = _VALUE_TYPES_BY_DATATYPE.get(datatype)
        if value_type is None:
            raise ConversionError(f"Unsupported OWLDataType {datatype_to_funowl(datatype)}")
        return Relationship(group, type_id, ConcreteValue(value_type, data_has_value.literal.lexical))
