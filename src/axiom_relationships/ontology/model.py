"""
Axiom tree model.

A closed set of immutable node types covering the OWL 2 functional syntax
constructs that appear in SNOMED CT axioms. Entities wrap an rdflib
``URIRef``; every node can list its signature and render itself back to
functional syntax with full IRIs.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Set, Tuple

from rdflib import OWL, RDF, RDFS, XSD, URIRef

# Prefixes used when rendering literal datatypes
_DATATYPE_PREFIXES = (
    ("xsd", str(XSD)),
    ("rdf", str(RDF)),
    ("rdfs", str(RDFS)),
    ("owl", str(OWL)),
)


def datatype_to_funowl(datatype: URIRef) -> str:
    for prefix, namespace in _DATATYPE_PREFIXES:
        if str(datatype).startswith(namespace):
            return f"{prefix}:{str(datatype)[len(namespace):]}"
    return f"<{datatype}>"


class OWLObject:
    """Base class for all nodes of an axiom tree."""

    type_name = "OWLObject"

    def signature(self) -> Iterator["Entity"]:
        """Yield every entity referenced anywhere below this node."""
        raise NotImplementedError

    def classes_in_signature(self) -> Set["NamedClass"]:
        return {entity for entity in self.signature() if isinstance(entity, NamedClass)}

    def to_funowl(self) -> str:
        return f"{self.type_name}({self.to_funowl_args()})"

    def to_funowl_args(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.to_funowl()


# =============================================================================
# Entities and literals
# =============================================================================

@dataclass(frozen=True)
class Entity(OWLObject):
    """A named entity identified by an IRI."""
    iri: URIRef

    def signature(self) -> Iterator["Entity"]:
        yield self

    def to_funowl(self) -> str:
        return f"<{self.iri}>"


class NamedClass(Entity):
    type_name = "Class"


class ObjectProperty(Entity):
    type_name = "ObjectProperty"


class DataProperty(Entity):
    type_name = "DataProperty"


class AnnotationProperty(Entity):
    type_name = "AnnotationProperty"


@dataclass(frozen=True)
class TypedLiteral(OWLObject):
    """A literal with its lexical form, datatype and optional language tag."""
    lexical: str
    datatype: URIRef = XSD.string
    language: Optional[str] = None

    type_name = "Literal"

    def signature(self) -> Iterator[Entity]:
        return iter(())

    def to_funowl(self) -> str:
        escaped = self.lexical.replace("\\", "\\\\").replace('"', '\\"')
        if self.language:
            return f'"{escaped}"@{self.language}'
        return f'"{escaped}"^^{datatype_to_funowl(self.datatype)}'


# =============================================================================
# Class expressions
# =============================================================================

class ClassExpression(OWLObject):
    """Base class for class expressions (named classes are handled separately)."""


def _unique(items: Tuple[OWLObject, ...]) -> Tuple[OWLObject, ...]:
    # Operands form a set in OWL; keep first-seen order
    unique = []
    for item in items:
        if item not in unique:
            unique.append(item)
    return tuple(unique)


@dataclass(frozen=True)
class _NaryClassExpression(ClassExpression):
    operands: Tuple[OWLObject, ...]

    def __post_init__(self):
        object.__setattr__(self, "operands", _unique(self.operands))

    def signature(self) -> Iterator[Entity]:
        for operand in self.operands:
            yield from operand.signature()

    def to_funowl_args(self) -> str:
        return " ".join(operand.to_funowl() for operand in self.operands)


class ObjectIntersectionOf(_NaryClassExpression):
    type_name = "ObjectIntersectionOf"


class ObjectUnionOf(_NaryClassExpression):
    type_name = "ObjectUnionOf"


@dataclass(frozen=True)
class ObjectComplementOf(ClassExpression):
    operand: OWLObject

    type_name = "ObjectComplementOf"

    def signature(self) -> Iterator[Entity]:
        return self.operand.signature()

    def to_funowl_args(self) -> str:
        return self.operand.to_funowl()


@dataclass(frozen=True)
class _ObjectRestriction(ClassExpression):
    property: ObjectProperty
    filler: OWLObject

    def signature(self) -> Iterator[Entity]:
        yield self.property
        yield from self.filler.signature()

    def to_funowl_args(self) -> str:
        return f"{self.property.to_funowl()} {self.filler.to_funowl()}"


class ObjectSomeValuesFrom(_ObjectRestriction):
    type_name = "ObjectSomeValuesFrom"


class ObjectAllValuesFrom(_ObjectRestriction):
    type_name = "ObjectAllValuesFrom"


@dataclass(frozen=True)
class DataHasValue(ClassExpression):
    property: DataProperty
    literal: TypedLiteral

    type_name = "DataHasValue"

    def signature(self) -> Iterator[Entity]:
        yield self.property

    def to_funowl_args(self) -> str:
        return f"{self.property.to_funowl()} {self.literal.to_funowl()}"


# =============================================================================
# Axioms
# =============================================================================

class Axiom(OWLObject):
    """Base class for axioms."""


@dataclass(frozen=True)
class SubClassOf(Axiom):
    sub_class: OWLObject
    super_class: OWLObject

    type_name = "SubClassOf"

    @property
    def is_gci(self) -> bool:
        """A general concept inclusion has an anonymous sub-class expression."""
        return not isinstance(self.sub_class, NamedClass)

    def signature(self) -> Iterator[Entity]:
        yield from self.sub_class.signature()
        yield from self.super_class.signature()

    def to_funowl_args(self) -> str:
        return f"{self.sub_class.to_funowl()} {self.super_class.to_funowl()}"


@dataclass(frozen=True)
class _NaryClassAxiom(Axiom):
    expressions: Tuple[OWLObject, ...]

    def __post_init__(self):
        object.__setattr__(self, "expressions", _unique(self.expressions))

    def signature(self) -> Iterator[Entity]:
        for expression in self.expressions:
            yield from expression.signature()

    def to_funowl_args(self) -> str:
        return " ".join(expression.to_funowl() for expression in self.expressions)


class EquivalentClasses(_NaryClassAxiom):
    type_name = "EquivalentClasses"


class DisjointClasses(_NaryClassAxiom):
    type_name = "DisjointClasses"


@dataclass(frozen=True)
class _SubPropertyAxiom(Axiom):
    sub_property: Entity
    super_property: Entity

    def signature(self) -> Iterator[Entity]:
        yield self.sub_property
        yield self.super_property

    def to_funowl_args(self) -> str:
        return f"{self.sub_property.to_funowl()} {self.super_property.to_funowl()}"


class SubObjectPropertyOf(_SubPropertyAxiom):
    type_name = "SubObjectPropertyOf"


class SubDataPropertyOf(_SubPropertyAxiom):
    type_name = "SubDataPropertyOf"


class SubAnnotationPropertyOf(_SubPropertyAxiom):
    type_name = "SubAnnotationPropertyOf"


@dataclass(frozen=True)
class SubPropertyChainOf(Axiom):
    """SubObjectPropertyOf with an ObjectPropertyChain as the sub-property."""
    chain: Tuple[ObjectProperty, ...]
    super_property: ObjectProperty

    type_name = "SubPropertyChainOf"

    def signature(self) -> Iterator[Entity]:
        yield from self.chain
        yield self.super_property

    def to_funowl(self) -> str:
        chain = " ".join(prop.to_funowl() for prop in self.chain)
        return f"SubObjectPropertyOf(ObjectPropertyChain({chain}) {self.super_property.to_funowl()})"


@dataclass(frozen=True)
class _ObjectPropertyCharacteristic(Axiom):
    property: ObjectProperty

    def signature(self) -> Iterator[Entity]:
        yield self.property

    def to_funowl_args(self) -> str:
        return self.property.to_funowl()


class TransitiveObjectProperty(_ObjectPropertyCharacteristic):
    type_name = "TransitiveObjectProperty"


class ReflexiveObjectProperty(_ObjectPropertyCharacteristic):
    type_name = "ReflexiveObjectProperty"
