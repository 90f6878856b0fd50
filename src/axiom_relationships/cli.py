"""
Command-line interface for axiom relationship conversion.

Provides commands for:
- decompose: Convert an axiom to relationship groups
- round-trip: Convert an axiom to relationships and back
- characteristics: Show transitive / reflexive / property chain flags
- concepts: List the concept ids named in an axiom
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .core.config import AttributeConfiguration
from .core.errors import AxiomToolkitError
from .conversion import AxiomRelationshipConversionService
from .domain import AxiomRepresentation, GroupCounter, RelationshipGroups


console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with rich handler."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the main CLI parser."""
    parser = argparse.ArgumentParser(
        prog="axiom_relationships",
        description="SNOMED CT axiom to relationship conversion",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m axiom_relationships decompose "SubClassOf(:100 :200)"
  python -m axiom_relationships round-trip "EquivalentClasses(:1 ObjectIntersectionOf(:2 :3))"
  python -m axiom_relationships decompose "SubClassOf(...)" --config attributes.yaml --offset 3
  python -m axiom_relationships characteristics "TransitiveObjectProperty(:123005000)"
  python -m axiom_relationships concepts "SubClassOf(:100 :200)"
        """,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    decompose_parser = subparsers.add_parser(
        "decompose",
        help="Convert an axiom to relationship groups",
    )
    decompose_parser.add_argument("axiom", type=str, help="Axiom in OWL functional syntax")
    decompose_parser.add_argument(
        "--config", "-c",
        type=str,
        help="YAML file with attribute sets",
    )
    decompose_parser.add_argument(
        "--offset",
        type=int,
        default=1,
        help="First role group number (default: 1)",
    )

    round_trip_parser = subparsers.add_parser(
        "round-trip",
        help="Convert an axiom to relationships and back to an axiom",
    )
    round_trip_parser.add_argument("axiom", type=str, help="Axiom in OWL functional syntax")
    round_trip_parser.add_argument(
        "--config", "-c",
        type=str,
        help="YAML file with attribute sets",
    )

    characteristics_parser = subparsers.add_parser(
        "characteristics",
        help="Show object property characteristics of an axiom",
    )
    characteristics_parser.add_argument("axiom", type=str, help="Axiom in OWL functional syntax")

    concepts_parser = subparsers.add_parser(
        "concepts",
        help="List the concept ids named in an axiom",
    )
    concepts_parser.add_argument("axiom", type=str, help="Axiom in OWL functional syntax")

    return parser


def _load_service(args: argparse.Namespace) -> AxiomRelationshipConversionService:
    config_path = getattr(args, "config", None)
    if config_path:
        config = AttributeConfiguration.from_yaml_file(Path(config_path))
        if not args.verbose:
            logging.getLogger().setLevel(config.logging.level)
    else:
        config = AttributeConfiguration()
    return AxiomRelationshipConversionService.from_configuration(config)


def _relationship_table(title: str, relationship_groups: RelationshipGroups) -> Table:
    table = Table(title=title)
    table.add_column("Group", justify="right")
    table.add_column("Type")
    table.add_column("Destination")
    for group in sorted(relationship_groups):
        for relationship in relationship_groups[group]:
            table.add_row(str(group), str(relationship.type_id), str(relationship.destination))
    return table


def print_representation(representation: AxiomRepresentation) -> None:
    """Print an axiom representation as tables."""
    if representation.left_hand_side_named_concept is not None:
        console.print(f"Left hand side concept: [bold]{representation.left_hand_side_named_concept}[/bold]")
    if representation.left_hand_side_relationships is not None:
        console.print(_relationship_table("Left hand side relationships", representation.left_hand_side_relationships))
    if representation.right_hand_side_named_concept is not None:
        console.print(f"Right hand side concept: [bold]{representation.right_hand_side_named_concept}[/bold]")
    if representation.right_hand_side_relationships is not None:
        console.print(_relationship_table("Right hand side relationships", representation.right_hand_side_relationships))
    console.print(f"Primitive: {representation.primitive}")


def run_decompose(args: argparse.Namespace) -> int:
    service = _load_service(args)
    representation = service.convert_axiom_to_relationships(args.axiom, GroupCounter(args.offset))
    if representation is None:
        console.print("[yellow]Axiom type can not be converted to relationships[/yellow]")
        return 0
    print_representation(representation)
    return 0


def run_round_trip(args: argparse.Namespace) -> int:
    service = _load_service(args)
    representation = service.convert_axiom_to_relationships(args.axiom)
    if representation is None:
        console.print("[yellow]Axiom type can not be converted to relationships[/yellow]")
        return 0
    axiom = service.convert_relationships_to_axiom(representation)
    console.print(axiom, markup=False, highlight=False, soft_wrap=True)
    return 0


def run_characteristics(args: argparse.Namespace) -> int:
    service = AxiomRelationshipConversionService(ungrouped_attributes=set())
    representation = service.as_object_property_axiom(args.axiom)

    table = Table(title="Object property characteristics")
    table.add_column("Characteristic")
    table.add_column("Value")
    table.add_row("transitive", str(representation.transitive))
    table.add_row("reflexive", str(representation.reflexive))
    table.add_row("property chain", str(representation.property_chain))
    console.print(table)
    return 0


def run_concepts(args: argparse.Namespace) -> int:
    service = AxiomRelationshipConversionService(ungrouped_attributes=set())
    for concept_id in sorted(service.get_ids_of_concepts_named_in_axiom(args.axiom)):
        console.print(str(concept_id))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    setup_logging(args.verbose)

    commands = {
        "decompose": run_decompose,
        "round-trip": run_round_trip,
        "characteristics": run_characteristics,
        "concepts": run_concepts,
    }

    handler = commands.get(args.command)
    if handler:
        try:
            return handler(args)
        except AxiomToolkitError as e:
            console.print(f"\n[red]Error:[/red] {escape(str(e))}", highlight=False)
            return 1
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
