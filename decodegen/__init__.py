"""
Decoder synthesis for fixed-width 16-bit instruction sets.

A catalog of encoding patterns is split into a decision tree of bit-mask
tests, every variant gets an operand extraction plan, and the tree is numbered
into a ``DecodeTable`` that code emitters and runtime decoders consume.
"""

from .catalog import Catalog, Variant  # noqa: F401
from .decoder import DecodedWord, TableDecoder  # noqa: F401
from .errors import (  # noqa: F401
    AmbiguousEncodingError,
    CatalogError,
    DecodeGenError,
    MalformedPatternError,
)
from .extract import BitRun, ExtractionPlan, OperandField, plan_variant  # noqa: F401
from .formats import covered, parse  # noqa: F401
from .numbering import DecodeNode, DecodeTable, build_table, number  # noqa: F401
from .splitter import Group, split  # noqa: F401
from .subsumption import (  # noqa: F401
    DeclaredSubsumption,
    PatternSubsumption,
    SubsumptionOracle,
    find_winner,
    is_terminal,
)

__all__ = [
    "AmbiguousEncodingError",
    "BitRun",
    "Catalog",
    "CatalogError",
    "DecodeGenError",
    "DecodeNode",
    "DecodeTable",
    "DecodedWord",
    "DeclaredSubsumption",
    "ExtractionPlan",
    "Group",
    "MalformedPatternError",
    "OperandField",
    "PatternSubsumption",
    "SubsumptionOracle",
    "TableDecoder",
    "Variant",
    "build_table",
    "covered",
    "find_winner",
    "is_terminal",
    "number",
    "parse",
    "plan_variant",
    "split",
]
