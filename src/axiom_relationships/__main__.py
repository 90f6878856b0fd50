"""
Allow running the package as a module: python -m axiom_relationships

Usage:
    python -m axiom_relationships decompose "SubClassOf(:100 :200)"
    python -m axiom_relationships --help
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
