"""
OWL functional syntax codec for single axioms.

Parses the subset of OWL 2 functional syntax used by SNOMED CT axioms into
the tree defined in :mod:`axiom_relationships.ontology.model` and renders
trees back to text.

Usage:
    from axiom_relationships.ontology import parse_axiom, axiom_to_string

    axiom = parse_axiom("SubClassOf(:100 :200)")
    axiom_to_string(axiom)  # 'SubClassOf(:100 :200)'
"""

import logging
import re
from typing import Dict, List, NamedTuple, Optional

from rdflib import OWL, RDF, RDFS, XSD, URIRef

from ..core.concepts import CORE_COMPONENT_NAMESPACE_PATTERN, SNOMED_NAMESPACE
from ..core.errors import DeserialisationError
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
    OWLObject,
    ReflexiveObjectProperty,
    SubAnnotationPropertyOf,
    SubClassOf,
    SubDataPropertyOf,
    SubObjectPropertyOf,
    SubPropertyChainOf,
    TransitiveObjectProperty,
    TypedLiteral,
)

logger = logging.getLogger(__name__)

DEFAULT_PREFIXES: Dict[str, str] = {
    "": str(SNOMED_NAMESPACE),
    "owl": str(OWL),
    "rdf": str(RDF),
    "rdfs": str(RDFS),
    "xsd": str(XSD),
    "xml": "http://www.w3.org/XML/1998/namespace",
}

_TOKEN_PATTERN = re.compile(
    r"""
    (?P<whitespace>\s+)
  | (?P<lparen>\()
  | (?P<rparen>\))
  | (?P<iri><[^<>"\s]*>)
  | (?P<string>"(?:[^"\\]|\\.)*")
  | (?P<datatype>\^\^)
  | (?P<language>@[A-Za-z]+(?:-[A-Za-z0-9]+)*)
  | (?P<equals>=)
  | (?P<pname>(?:[A-Za-z][\w\-.]*)?:[\w\-.]*)
  | (?P<keyword>[A-Za-z][A-Za-z0-9]*)
    """,
    re.VERBOSE,
)

_ESCAPE_PATTERN = re.compile(r"\\(.)")


class Token(NamedTuple):
    kind: str
    value: str
    position: int


def tokenize(text: str) -> List[Token]:
    """Split functional syntax text into tokens, dropping whitespace."""
    tokens = []
    position = 0
    while position < len(text):
        match = _TOKEN_PATTERN.match(text, position)
        if not match:
            raise DeserialisationError(
                f"Failed to deserialise axiom expression '{text}'.",
                axiom=text,
                details={"reason": f"unexpected character {text[position]!r}", "position": position},
            )
        kind = match.lastgroup
        if kind != "whitespace":
            tokens.append(Token(kind, match.group(), position))
        position = match.end()
    return tokens


class _AxiomParser:
    """Recursive descent parser over a token list."""

    def __init__(self, text: str):
        self.text = text
        self.tokens = tokenize(text)
        self.index = 0
        self.prefixes = dict(DEFAULT_PREFIXES)

    # -------------------------------------------------------------------------
    # Token helpers
    # -------------------------------------------------------------------------

    def _error(self, reason: str) -> DeserialisationError:
        token = self._peek()
        position = token.position if token else len(self.text)
        return DeserialisationError(
            f"Failed to deserialise axiom expression '{self.text}'.",
            axiom=self.text,
            details={"reason": reason, "position": position},
        )

    def _peek(self) -> Optional[Token]:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def _next(self) -> Token:
        token = self._peek()
        if token is None:
            raise self._error("unexpected end of expression")
        self.index += 1
        return token

    def _expect(self, kind: str) -> Token:
        token = self._peek()
        if token is None or token.kind != kind:
            found = token.value if token else "end of expression"
            raise self._error(f"expected {kind}, got {found!r}")
        self.index += 1
        return token

    def _at(self, kind: str) -> bool:
        token = self._peek()
        return token is not None and token.kind == kind

    def _at_iri(self) -> bool:
        return self._at("iri") or self._at("pname")

    # -------------------------------------------------------------------------
    # Grammar
    # -------------------------------------------------------------------------

    def parse(self) -> Axiom:
        if not self.tokens:
            raise self._error("empty expression")

        while self._at("keyword") and self._peek().value == "Prefix":
            self._prefix_declaration()

        axiom = self._axiom()
        if self._peek() is not None:
            raise self._error(f"unexpected trailing token {self._peek().value!r}")
        return axiom

    def _prefix_declaration(self) -> None:
        self._expect("keyword")
        self._expect("lparen")
        name = self._expect("pname").value
        if not name.endswith(":"):
            raise self._error(f"invalid prefix name {name!r}")
        self._expect("equals")
        iri = self._expect("iri").value[1:-1]
        self._expect("rparen")
        self.prefixes[name[:-1]] = iri

    def _iri(self) -> URIRef:
        token = self._next()
        if token.kind == "iri":
            return URIRef(token.value[1:-1])
        if token.kind == "pname":
            prefix, _, local = token.value.partition(":")
            if prefix not in self.prefixes:
                raise DeserialisationError(
                    f"Failed to deserialise axiom expression '{self.text}'.",
                    axiom=self.text,
                    details={"reason": f"unknown prefix '{prefix}:'", "position": token.position},
                )
            return URIRef(self.prefixes[prefix] + local)
        self.index -= 1
        raise self._error(f"expected an IRI, got {token.value!r}")

    def _object_property(self) -> ObjectProperty:
        return ObjectProperty(self._iri())

    def _axiom(self) -> Axiom:
        name = self._expect("keyword").value
        self._expect("lparen")

        if name == "SubClassOf":
            axiom = SubClassOf(self._class_expression(), self._class_expression())
        elif name == "EquivalentClasses":
            axiom = EquivalentClasses(tuple(self._class_expressions(minimum=2)))
        elif name == "DisjointClasses":
            axiom = DisjointClasses(tuple(self._class_expressions(minimum=2)))
        elif name == "SubObjectPropertyOf":
            if self._at("keyword") and self._peek().value == "ObjectPropertyChain":
                self._next()
                self._expect("lparen")
                chain = [self._object_property(), self._object_property()]
                while self._at_iri():
                    chain.append(self._object_property())
                self._expect("rparen")
                axiom = SubPropertyChainOf(tuple(chain), self._object_property())
            else:
                axiom = SubObjectPropertyOf(self._object_property(), self._object_property())
        elif name == "SubDataPropertyOf":
            axiom = SubDataPropertyOf(DataProperty(self._iri()), DataProperty(self._iri()))
        elif name == "SubAnnotationPropertyOf":
            axiom = SubAnnotationPropertyOf(
                AnnotationProperty(self._iri()), AnnotationProperty(self._iri())
            )
        elif name == "TransitiveObjectProperty":
            axiom = TransitiveObjectProperty(self._object_property())
        elif name == "ReflexiveObjectProperty":
            axiom = ReflexiveObjectProperty(self._object_property())
        else:
            self.index -= 2
            raise self._error(f"unsupported axiom constructor '{name}'")

        self._expect("rparen")
        return axiom

    def _class_expressions(self, minimum: int) -> List[OWLObject]:
        expressions = []
        while not self._at("rparen"):
            expressions.append(self._class_expression())
        if len(expressions) < minimum:
            raise self._error(f"expected at least {minimum} class expressions, got {len(expressions)}")
        return expressions

    def _class_expression(self) -> OWLObject:
        if self._at_iri():
            return NamedClass(self._iri())

        name = self._expect("keyword").value
        self._expect("lparen")

        if name == "ObjectIntersectionOf":
            expression = ObjectIntersectionOf(tuple(self._class_expressions(minimum=2)))
        elif name == "ObjectUnionOf":
            expression = ObjectUnionOf(tuple(self._class_expressions(minimum=2)))
        elif name == "ObjectComplementOf":
            expression = ObjectComplementOf(self._class_expression())
        elif name == "ObjectSomeValuesFrom":
            expression = ObjectSomeValuesFrom(self._object_property(), self._class_expression())
        elif name == "ObjectAllValuesFrom":
            expression = ObjectAllValuesFrom(self._object_property(), self._class_expression())
        elif name == "DataHasValue":
            expression = DataHasValue(DataProperty(self._iri()), self._literal())
        else:
            self.index -= 2
            raise self._error(f"unsupported class expression constructor '{name}'")

        self._expect("rparen")
        return expression

    def _literal(self) -> TypedLiteral:
        lexical = _ESCAPE_PATTERN.sub(r"\1", self._expect("string").value[1:-1])
        if self._at("datatype"):
            self._next()
            return TypedLiteral(lexical, self._iri())
        if self._at("language"):
            language = self._next().value[1:]
            return TypedLiteral(lexical, RDF.langString, language)
        return TypedLiteral(lexical, XSD.string)


def parse_axiom(text: str) -> Axiom:
    """
    Parse a single axiom in OWL functional syntax.

    Args:
        text: Axiom expression, optionally preceded by Prefix declarations

    Returns:
        The parsed axiom tree

    Raises:
        DeserialisationError: If the text is malformed or uses an unknown constructor
    """
    if text is None or not text.strip():
        raise DeserialisationError("Failed to deserialise axiom expression ''.", axiom=text)

    axiom = _AxiomParser(text).parse()
    logger.debug(f"Parsed {axiom.type_name} axiom")
    return axiom


def render_axiom(axiom: OWLObject) -> str:
    """Render an axiom tree in functional syntax with full IRIs."""
    return axiom.to_funowl()


def normalize_axiom_text(text: str) -> str:
    """Collapse SNOMED IRIs to ':<id>' and drop the space the renderer can leave before ')'."""
    return re.sub(CORE_COMPONENT_NAMESPACE_PATTERN, r":\1", text).replace(") )", "))")


def axiom_to_string(axiom: OWLObject) -> str:
    return normalize_axiom_text(render_axiom(axiom))
