"""
Axiom ⇄ relationship conversion service.

Entry point combining decomposition, composition, batch conversion of the
axioms of many concepts, and the auxiliary extractors.

Usage:
    from axiom_relationships import AxiomRelationshipConversionService

    service = AxiomRelationshipConversionService(ungrouped_attributes={...})
    representation = service.convert_axiom_to_relationships("SubClassOf(:100 :200)")
    service.convert_relationships_to_axiom(representation)  # 'SubClassOf(:100 :200)'
"""

import logging
from typing import Collection, Dict, Iterable, List, Optional, Set, Union

from ..core.config import AttributeConfiguration
from ..core.errors import ConversionError
from ..domain import AxiomRepresentation, GroupCounter, ObjectPropertyAxiomRepresentation
from ..ontology.codec import axiom_to_string, parse_axiom
from ..ontology.identifiers import concept_id_of, is_named_concept
from ..ontology.model import (
    Axiom,
    ReflexiveObjectProperty,
    SubClassOf,
    SubPropertyChainOf,
    TransitiveObjectProperty,
)
from .composer import RelationshipComposer
from .decomposer import AxiomDecomposer

logger = logging.getLogger(__name__)

AxiomInput = Union[str, Axiom]


def _as_axiom(axiom: AxiomInput) -> Axiom:
    if isinstance(axiom, str):
        return parse_axiom(axiom)
    return axiom


class AxiomRelationshipConversionService:
    """
    Converts between OWL axioms and SNOMED CT relationships.

    Passing the object, data and annotation attribute sets enables
    generating SubObjectPropertyOf, SubDataPropertyOf and
    SubAnnotationPropertyOf axioms from relationships.
    """

    def __init__(
        self,
        ungrouped_attributes: Iterable[int],
        object_attributes: Optional[Collection[int]] = None,
        data_attributes: Optional[Collection[int]] = None,
        annotation_attributes: Optional[Collection[int]] = None,
    ):
        """
        Initialize the service.

        Args:
            ungrouped_attributes: Attributes never placed in a role group (MRCM attribute domain rows with group 0)
            object_attributes: Descendants of 762705008 |Concept model object attribute|
            data_attributes: Descendants of 762706009 |Concept model data attribute|
            annotation_attributes: Descendants of 1295447006 |Annotation attribute|
        """
        self.ungrouped_attributes = set(ungrouped_attributes)
        self.decomposer = AxiomDecomposer()
        self.composer = RelationshipComposer(
            ungrouped_attributes=self.ungrouped_attributes,
            object_attributes=object_attributes,
            data_attributes=data_attributes,
            annotation_attributes=annotation_attributes,
        )

    @classmethod
    def from_configuration(cls, config: AttributeConfiguration) -> "AxiomRelationshipConversionService":
        return cls(
            config.ungrouped_attributes,
            object_attributes=config.object_attributes,
            data_attributes=config.data_attributes,
            annotation_attributes=config.annotation_attributes,
        )

    # -------------------------------------------------------------------------
    # Axioms to relationships
    # -------------------------------------------------------------------------

    def convert_axiom_to_relationships(
        self,
        axiom: AxiomInput,
        group_offset: Optional[GroupCounter] = None,
    ) -> Optional[AxiomRepresentation]:
        """
        Convert an axiom to a named concept and relationships.

        Supported axiom types are SubClassOf, EquivalentClasses, SubObjectPropertyOf,
        SubDataPropertyOf and SubAnnotationPropertyOf.

        Args:
            axiom: Axiom expression text or parsed axiom
            group_offset: Starting number for role groups; share one counter between
                the axioms of a concept to keep their groups apart

        Returns:
            AxiomRepresentation, or None if the axiom type is not supported

        Raises:
            ConversionError: If the expression is malformed or of an unexpected structure
        """
        return self.decomposer.decompose(_as_axiom(axiom), group_offset)

    def convert_axioms_to_relationships(
        self,
        concept_axiom_map: Dict[int, List[AxiomInput]],
        ignore_gci_axioms: bool,
    ) -> Dict[int, Set[AxiomRepresentation]]:
        """
        Convert the axioms of many concepts.

        Each concept gets one role group counter starting at 1, shared by its
        axioms in list order. Unsupported axiom types are skipped.

        Raises:
            ConversionError: For the first axiom that fails; no partial result is returned
        """
        concept_axiom_statements: Dict[int, Set[AxiomRepresentation]] = {}
        current_axiom = None
        try:
            for concept_id, axioms in concept_axiom_map.items():
                # Group 0 is reserved for ungrouped relationships
                group_offset = GroupCounter(1)
                for axiom in axioms:
                    current_axiom = axiom
                    owl_axiom = _as_axiom(axiom)
                    if ignore_gci_axioms and isinstance(owl_axiom, SubClassOf) and owl_axiom.is_gci:
                        logger.debug(f"Ignoring GCI axiom of concept {concept_id}")
                        continue

                    representation = self.decomposer.decompose(owl_axiom, group_offset)
                    if representation is not None:
                        concept_axiom_statements.setdefault(concept_id, set()).add(representation)
        except ConversionError as e:
            axiom_text = current_axiom if isinstance(current_axiom, str) else axiom_to_string(current_axiom)
            logger.error(f"Failed to convert axiom \"{axiom_text}\".")
            if e.axiom is None:
                e.axiom = axiom_text
            raise

        logger.info(
            f"Converted axioms of {len(concept_axiom_statements)} of {len(concept_axiom_map)} concepts"
        )
        return concept_axiom_statements

    # -------------------------------------------------------------------------
    # Relationships to axioms
    # -------------------------------------------------------------------------

    def convert_relationships_to_axiom(self, representation: AxiomRepresentation) -> str:
        """
        Convert a relationship representation to axiom expression text.

        Raises:
            ConversionError: If the representation can not be expressed as an axiom
        """
        return self.axiom_to_string(self.composer.compose(representation))

    def axiom_to_string(self, axiom: Axiom) -> str:
        return axiom_to_string(axiom)

    # -------------------------------------------------------------------------
    # Auxiliary extractors
    # -------------------------------------------------------------------------

    def as_object_property_axiom(self, axiom_expression: str) -> ObjectPropertyAxiomRepresentation:
        """Flag an object property axiom as transitive, reflexive or the head of a property chain."""
        owl_axiom = parse_axiom(axiom_expression)
        representation = ObjectPropertyAxiomRepresentation(axiom_expression)
        if isinstance(owl_axiom, TransitiveObjectProperty):
            representation.transitive = True
        elif isinstance(owl_axiom, ReflexiveObjectProperty):
            representation.reflexive = True
        elif isinstance(owl_axiom, SubPropertyChainOf):
            representation.property_chain = True
        return representation

    def get_ids_of_concepts_named_in_axiom(self, axiom_expression: str) -> Set[int]:
        """Extract the ids of all concepts named anywhere in an axiom, for validation purposes."""
        owl_axiom = parse_axiom(axiom_expression)
        return {concept_id_of(entity) for entity in owl_axiom.signature() if is_named_concept(entity)}
