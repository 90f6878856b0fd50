"""
Value types for the relationship side of the conversion.

A concept's definition is held as relationship groups: group 0 holds
ungrouped relationships (including IS-A), every other group number is a
role group whose members co-occur.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple, Union

from .core.concepts import IS_A
from .core.errors import ConversionError


class ConcreteValueType(Enum):
    """Datatype of a concrete value."""
    DECIMAL = "decimal"
    INTEGER = "integer"
    STRING = "string"


_INTEGER_PATTERN = re.compile(r"^[+-]?[0-9]+$")
_DECIMAL_PATTERN = re.compile(r"^[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)$")


@dataclass(frozen=True)
class ConcreteValue:
    """A typed literal used as a relationship destination."""
    type: ConcreteValueType
    value: str

    def to_rf2(self) -> str:
        """Render in RF2 notation: numbers prefixed with '#', strings quoted."""
        if self.type == ConcreteValueType.STRING:
            return f'"{self.value}"'
        return f"#{self.value}"

    @classmethod
    def from_rf2(cls, text: str) -> "ConcreteValue":
        """Parse RF2 notation ('#5', '#0.5' or '"text"')."""
        if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
            return cls(ConcreteValueType.STRING, text[1:-1])
        if text.startswith("#"):
            number = text[1:]
            if _INTEGER_PATTERN.match(number):
                return cls(ConcreteValueType.INTEGER, number)
            if _DECIMAL_PATTERN.match(number):
                return cls(ConcreteValueType.DECIMAL, number)
        raise ConversionError(f"Invalid RF2 concrete value {text!r}.")

    def __str__(self) -> str:
        return self.to_rf2()


@dataclass(frozen=True)
class Relationship:
    """A typed, optionally grouped link from a concept to a concept or concrete value."""
    group: int
    type_id: int
    destination: Union[int, ConcreteValue]

    def __post_init__(self):
        if self.group < 0:
            raise ValueError(f"Relationship group must be non-negative, got {self.group}")

    @property
    def is_concrete(self) -> bool:
        return isinstance(self.destination, ConcreteValue)

    @property
    def destination_id(self) -> Optional[int]:
        return None if self.is_concrete else self.destination

    @property
    def concrete_value(self) -> Optional[ConcreteValue]:
        return self.destination if self.is_concrete else None

    def __str__(self) -> str:
        return f"{self.group} {self.type_id} {self.destination}"


RelationshipGroups = Dict[int, List[Relationship]]


def single_is_a_relationship(destination_id: int) -> RelationshipGroups:
    return {0: [Relationship(0, IS_A, destination_id)]}


def _freeze_groups(
    groups: Optional[RelationshipGroups],
) -> Optional[FrozenSet[Tuple[int, FrozenSet[Relationship]]]]:
    if groups is None:
        return None
    return frozenset((group, frozenset(relationships)) for group, relationships in groups.items())


@dataclass(eq=False)
class AxiomRepresentation:
    """
    An axiom expressed with relationships.

    Normal axioms populate the left hand side named concept and the right
    hand side relationships. GCI axioms populate the left hand side
    relationships and the right hand side named concept. Equality compares
    relationships within each group as sets.
    """
    left_hand_side_named_concept: Optional[int] = None
    left_hand_side_relationships: Optional[RelationshipGroups] = None
    right_hand_side_named_concept: Optional[int] = None
    right_hand_side_relationships: Optional[RelationshipGroups] = None
    primitive: bool = False

    @property
    def is_gci(self) -> bool:
        return self.left_hand_side_named_concept is None and self.left_hand_side_relationships is not None

    def _key(self):
        return (
            self.left_hand_side_named_concept,
            _freeze_groups(self.left_hand_side_relationships),
            self.right_hand_side_named_concept,
            _freeze_groups(self.right_hand_side_relationships),
            self.primitive,
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, AxiomRepresentation):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())


@dataclass
class ObjectPropertyAxiomRepresentation:
    """Characteristics of an object property axiom that are not relationships."""
    owl_expression: str
    transitive: bool = False
    reflexive: bool = False
    property_chain: bool = False


@dataclass
class GroupCounter:
    """Next role group number for a concept; shared by all of its axioms in order."""
    value: int = 1

    def allocate(self) -> int:
        group = self.value
        self.value += 1
        return group
