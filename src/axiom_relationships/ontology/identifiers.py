"""
Mapping between axiom tree entities and SNOMED CT concept identifiers.
"""

import re

from rdflib import URIRef

from ..core.concepts import ROLE_GROUP_IRI, SNOMED_NAMESPACE
from ..core.errors import ConversionError
from .model import Entity, NamedClass, ObjectProperty

_CONCEPT_ID_PATTERN = re.compile(r"[0-9]+")


def _local_id(entity: Entity) -> str:
    iri = str(entity.iri)
    namespace = str(SNOMED_NAMESPACE)
    if iri.startswith(namespace):
        return iri[len(namespace):]
    return ""


def concept_id_of(entity: Entity) -> int:
    """Return the concept identifier of a SNOMED entity."""
    local_id = _local_id(entity)
    if not _CONCEPT_ID_PATTERN.fullmatch(local_id):
        raise ConversionError(
            f"Expecting a SNOMED CT concept identifier, got {entity.type_name} <{entity.iri}>.",
            details={"iri": str(entity.iri)},
        )
    return int(local_id)


def is_named_concept(entity: Entity) -> bool:
    """True for named classes that identify a SNOMED CT concept."""
    return isinstance(entity, NamedClass) and _CONCEPT_ID_PATTERN.fullmatch(_local_id(entity)) is not None


def is_role_group(property: ObjectProperty) -> bool:
    return property.iri == ROLE_GROUP_IRI


def concept_iri(concept_id: int) -> URIRef:
    return SNOMED_NAMESPACE[str(concept_id)]
