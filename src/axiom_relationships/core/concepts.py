"""
Well-known SNOMED CT identifiers and namespaces.
"""

from rdflib import Namespace

SNOMED_NAMESPACE = Namespace("http://snomed.info/id/")

# 116680003 |Is a (attribute)|
IS_A = 116680003

# 609096000 |Role group (attribute)|
ROLE_GROUP = 609096000
ROLE_GROUP_IRI = SNOMED_NAMESPACE[str(ROLE_GROUP)]

# Roots of the attribute hierarchies used to populate the attribute sets
CONCEPT_MODEL_OBJECT_ATTRIBUTE = 762705008
CONCEPT_MODEL_DATA_ATTRIBUTE = 762706009
ANNOTATION_ATTRIBUTE = 1295447006

# Full SNOMED IRIs in rendered axioms are collapsed to ":<id>"
CORE_COMPONENT_NAMESPACE_PATTERN = r"<http://snomed\.info/id/([0-9]+)>"
