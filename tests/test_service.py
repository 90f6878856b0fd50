"""
Tests for the conversion service.
"""

import logging

import pytest

from axiom_relationships.conversion import AxiomRelationshipConversionService
from axiom_relationships.core.concepts import IS_A
from axiom_relationships.core.config import AttributeConfiguration
from axiom_relationships.core.errors import ConversionError, DeserialisationError
from axiom_relationships.domain import GroupCounter, Relationship
from axiom_relationships.ontology.codec import parse_axiom


ROLE_GROUP_AXIOM_A = (
    "SubClassOf(:100 ObjectIntersectionOf(:200 "
    "ObjectSomeValuesFrom(:609096000 ObjectSomeValuesFrom(:300 :400))))"
)
ROLE_GROUP_AXIOM_B = (
    "SubClassOf(:100 ObjectIntersectionOf(:201 "
    "ObjectSomeValuesFrom(:609096000 ObjectSomeValuesFrom(:301 :401))))"
)
GCI_AXIOM = (
    "SubClassOf(ObjectIntersectionOf(:200 "
    "ObjectSomeValuesFrom(:609096000 ObjectSomeValuesFrom(:300 :400))) :100)"
)


# =============================================================================
# Single Axiom Tests
# =============================================================================

class TestConvertAxiomToRelationships:
    """Test single axiom conversion."""

    def test_text_input(self, service):
        representation = service.convert_axiom_to_relationships("SubClassOf(:100 :200)")
        assert representation.left_hand_side_named_concept == 100
        assert representation.right_hand_side_relationships == {0: [Relationship(0, IS_A, 200)]}

    def test_parsed_input(self, service):
        text = "SubClassOf(:100 :200)"
        assert service.convert_axiom_to_relationships(parse_axiom(text)) == \
            service.convert_axiom_to_relationships(text)

    def test_group_offset(self, service):
        representation = service.convert_axiom_to_relationships(ROLE_GROUP_AXIOM_A, GroupCounter(3))
        assert sorted(representation.right_hand_side_relationships) == [0, 3]

    def test_unsupported(self, service):
        assert service.convert_axiom_to_relationships("TransitiveObjectProperty(:774081006)") is None

    def test_malformed(self, service):
        with pytest.raises(DeserialisationError):
            service.convert_axiom_to_relationships("SubClassOf(:100")


# =============================================================================
# Batch Tests
# =============================================================================

class TestConvertAxiomsToRelationships:
    """Test batch conversion of the axioms of many concepts."""

    def test_shared_counter_per_concept(self, service):
        result = service.convert_axioms_to_relationships(
            {100: [ROLE_GROUP_AXIOM_A, ROLE_GROUP_AXIOM_B]}, ignore_gci_axioms=False
        )
        group_numbers = sorted(
            group
            for representation in result[100]
            for group in representation.right_hand_side_relationships
            if group != 0
        )
        assert group_numbers == [1, 2]

    def test_counter_restarts_for_each_concept(self, service):
        result = service.convert_axioms_to_relationships(
            {100: [ROLE_GROUP_AXIOM_A], 101: [ROLE_GROUP_AXIOM_B.replace(":100 ", ":101 ", 1)]},
            ignore_gci_axioms=False,
        )
        for concept_id in (100, 101):
            (representation,) = result[concept_id]
            assert sorted(representation.right_hand_side_relationships) == [0, 1]

    def test_ignore_gci_axioms(self, service):
        result = service.convert_axioms_to_relationships(
            {100: [ROLE_GROUP_AXIOM_A, GCI_AXIOM]}, ignore_gci_axioms=True
        )
        assert len(result[100]) == 1
        assert not any(representation.is_gci for representation in result[100])

    def test_keep_gci_axioms(self, service):
        result = service.convert_axioms_to_relationships(
            {100: [ROLE_GROUP_AXIOM_A, GCI_AXIOM, ROLE_GROUP_AXIOM_B]}, ignore_gci_axioms=False
        )
        assert len(result[100]) == 3
        (gci,) = [representation for representation in result[100] if representation.is_gci]
        assert sorted(gci.left_hand_side_relationships) == [0, 1]

        normal_groups = sorted(
            group
            for representation in result[100]
            if not representation.is_gci
            for group in representation.right_hand_side_relationships
            if group != 0
        )
        assert normal_groups == [1, 2]

    def test_unsupported_axioms_skipped(self, service):
        result = service.convert_axioms_to_relationships(
            {
                100: ["SubClassOf(:100 :200)"],
                774081006: ["TransitiveObjectProperty(:774081006)"],
            },
            ignore_gci_axioms=False,
        )
        assert set(result) == {100}

    def test_duplicates_collapse(self, service):
        result = service.convert_axioms_to_relationships(
            {100: ["SubClassOf(:100 :200)", "SubClassOf(:100 :200)"]}, ignore_gci_axioms=False
        )
        assert len(result[100]) == 1

    def test_empty_input(self, service):
        assert service.convert_axioms_to_relationships({}, ignore_gci_axioms=True) == {}

    def test_failure_names_axiom(self, service, caplog):
        bad_axiom = "SubClassOf(:100 ObjectSomeValuesFrom(:300 :400))"
        with caplog.at_level(logging.ERROR):
            with pytest.raises(ConversionError) as exc_info:
                service.convert_axioms_to_relationships(
                    {100: ["SubClassOf(:100 :200)", bad_axiom]}, ignore_gci_axioms=False
                )
        assert exc_info.value.axiom == bad_axiom
        assert bad_axiom in str(exc_info.value)
        assert "Failed to convert axiom" in caplog.text

    def test_failure_on_parsed_axiom(self, service):
        bad_axiom = parse_axiom("EquivalentClasses(:100 :200 :300)")
        with pytest.raises(ConversionError) as exc_info:
            service.convert_axioms_to_relationships({100: [bad_axiom]}, ignore_gci_axioms=False)
        assert exc_info.value.axiom == "EquivalentClasses(:100 :200 :300)"

    def test_malformed_text(self, service):
        with pytest.raises(DeserialisationError) as exc_info:
            service.convert_axioms_to_relationships({100: ["SubClassOf("]}, ignore_gci_axioms=False)
        assert exc_info.value.axiom == "SubClassOf("


# =============================================================================
# Round Trip Tests
# =============================================================================

class TestRoundTrip:
    """Test converting axioms to relationships and back."""

    @pytest.mark.parametrize(
        "text",
        [
            "SubClassOf(:100 :200)",
            "EquivalentClasses(:100 :200)",
            "SubClassOf(:100 ObjectIntersectionOf(:200 :300))",
            "EquivalentClasses(:100 ObjectIntersectionOf(:200 ObjectSomeValuesFrom(:272741003 :7771000) "
            "ObjectSomeValuesFrom(:609096000 ObjectSomeValuesFrom(:300 :400)) "
            "ObjectSomeValuesFrom(:609096000 ObjectIntersectionOf("
            "ObjectSomeValuesFrom(:116676008 :2000) ObjectSomeValuesFrom(:363698007 :1000)))))",
            "SubClassOf(:100 ObjectIntersectionOf(:200 ObjectSomeValuesFrom(:609096000 "
            'DataHasValue(:1142135004 "250"^^xsd:decimal))))',
            GCI_AXIOM,
            "SubObjectPropertyOf(:363698007 :762705008)",
            "SubDataPropertyOf(:3264475007 :762706009)",
            "SubAnnotationPropertyOf(:1295448001 :1295447006)",
        ],
    )
    def test_canonical_text_unchanged(self, service, text):
        representation = service.convert_axiom_to_relationships(text)
        assert service.convert_relationships_to_axiom(representation) == text

    def test_representation_stable(self, service):
        text = (
            "EquivalentClasses(:100 ObjectIntersectionOf(:300 :200 "
            "ObjectSomeValuesFrom(:609096000 ObjectIntersectionOf("
            "ObjectSomeValuesFrom(:363698007 :1000) ObjectSomeValuesFrom(:116676008 :2000)))))"
        )
        representation = service.convert_axiom_to_relationships(text)
        regenerated = service.convert_relationships_to_axiom(representation)
        assert regenerated != text
        assert service.convert_axiom_to_relationships(regenerated) == representation

    def test_axiom_to_string(self, service):
        assert service.axiom_to_string(parse_axiom("SubClassOf(<http://snomed.info/id/1> :2)")) == \
            "SubClassOf(:1 :2)"


# =============================================================================
# Auxiliary Extractor Tests
# =============================================================================

class TestAsObjectPropertyAxiom:
    """Test object property characteristics."""

    def test_transitive(self, service):
        text = "TransitiveObjectProperty(:774081006)"
        representation = service.as_object_property_axiom(text)
        assert representation.owl_expression == text
        assert representation.transitive
        assert not representation.reflexive
        assert not representation.property_chain

    def test_reflexive(self, service):
        representation = service.as_object_property_axiom("ReflexiveObjectProperty(:733930001)")
        assert representation.reflexive
        assert not representation.transitive

    def test_property_chain(self, service):
        representation = service.as_object_property_axiom(
            "SubObjectPropertyOf(ObjectPropertyChain(:246093002 :738774007) :246093002)"
        )
        assert representation.property_chain

    def test_other_axiom(self, service):
        representation = service.as_object_property_axiom("SubObjectPropertyOf(:363698007 :762705008)")
        assert not (representation.transitive or representation.reflexive or representation.property_chain)

    def test_malformed(self, service):
        with pytest.raises(DeserialisationError):
            service.as_object_property_axiom("TransitiveObjectProperty(")


class TestGetIdsOfConceptsNamedInAxiom:
    """Test collecting concept ids."""

    def test_classes_only(self, service):
        ids = service.get_ids_of_concepts_named_in_axiom(
            "EquivalentClasses(:100 ObjectIntersectionOf(:200 "
            "ObjectSomeValuesFrom(:609096000 ObjectSomeValuesFrom(:300 :400)) "
            'DataHasValue(:500 "1"^^xsd:integer)))'
        )
        assert ids == {100, 200, 400}

    def test_gci(self, service):
        assert service.get_ids_of_concepts_named_in_axiom(GCI_AXIOM) == {100, 200, 400}

    def test_property_axiom(self, service):
        assert service.get_ids_of_concepts_named_in_axiom("SubObjectPropertyOf(:363698007 :762705008)") == set()

    def test_non_snomed_classes_ignored(self, service):
        assert service.get_ids_of_concepts_named_in_axiom("SubClassOf(:100 owl:Thing)") == {100}

    def test_malformed(self, service):
        with pytest.raises(DeserialisationError):
            service.get_ids_of_concepts_named_in_axiom("SubClassOf(:100 :200")


# =============================================================================
# Configuration Tests
# =============================================================================

class TestFromConfiguration:
    """Test creating the service from configuration."""

    def test_attribute_sets_applied(self):
        config = AttributeConfiguration(
            ungrouped_attributes={272741003},
            object_attributes={762705008},
        )
        service = AxiomRelationshipConversionService.from_configuration(config)
        representation = service.convert_axiom_to_relationships("SubObjectPropertyOf(:363698007 :762705008)")
        assert service.convert_relationships_to_axiom(representation) == \
            "SubObjectPropertyOf(:363698007 :762705008)"

    def test_missing_sets_disable_property_axioms(self):
        service = AxiomRelationshipConversionService.from_configuration(AttributeConfiguration())
        representation = service.convert_axiom_to_relationships("SubDataPropertyOf(:3264475007 :762706009)")
        assert service.convert_relationships_to_axiom(representation) == "SubClassOf(:3264475007 :762706009)"
