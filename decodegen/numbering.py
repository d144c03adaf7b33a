from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Dict, Iterable, Iterator, Optional, Tuple

from .catalog import Catalog, Variant
from .extract import ExtractionPlan, plan_variants
from .splitter import Group, split, walk
from .subsumption import SubsumptionOracle

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DecodeNode:
    id: int
    mask: int
    entries: Tuple[Tuple[int, int], ...] = ()
    winner: Optional[str] = None
    candidates: Tuple[str, ...] = ()

    @property
    def is_terminal(self) -> bool:
        return self.winner is not None

    def child_for(self, word: int) -> Optional[int]:
        key = word & self.mask
        for value, child in self.entries:
            if value == key:
                return child
        return None


@dataclass(frozen=True)
class DecodeTable:
    """Numbered decision tree plus per-variant extraction plans.

    Node ``i`` lives at ``nodes[i]``; the root is node 0.
    """

    nodes: Tuple[DecodeNode, ...]
    plans: Dict[str, ExtractionPlan] = field(default_factory=dict)
    categories: Dict[str, str] = field(default_factory=dict)
    name: str = "catalog"

    def __post_init__(self) -> None:
        for index, node in enumerate(self.nodes):
            if node.id != index:
                raise ValueError(f"Node at position {index} has id {node.id}")

    @property
    def root(self) -> DecodeNode:
        return self.nodes[0]

    def node(self, node_id: int) -> DecodeNode:
        return self.nodes[node_id]

    def terminals(self) -> Iterator[DecodeNode]:
        return (node for node in self.nodes if node.is_terminal)


def number(group: Group) -> Dict[Group, int]:
    """Pre-order ids: the root is 0, children follow in ascending key order."""

    return {node: index for index, node in enumerate(walk(group))}


def to_nodes(group: Group, numbering: Dict[Group, int]) -> Tuple[DecodeNode, ...]:
    nodes = []
    for node in walk(group):
        if node.is_terminal:
            nodes.append(
                DecodeNode(
                    id=numbering[node],
                    mask=0,
                    winner=node.winner.name,
                    candidates=tuple(v.name for v in node.candidates),
                )
            )
        else:
            entries = tuple(
                (value, numbering[node.children[value]])
                for value in sorted(node.children)
            )
            nodes.append(DecodeNode(id=numbering[node], mask=node.mask, entries=entries))
    return tuple(nodes)


def build_table(
    variants: Iterable[Variant],
    oracle: Optional[SubsumptionOracle] = None,
    name: Optional[str] = None,
) -> DecodeTable:
    """Run the whole pipeline: split, number and plan operand extraction."""

    members = tuple(variants)
    if name is None:
        name = variants.name if isinstance(variants, Catalog) else "catalog"
    root = split(members, oracle)
    numbering = number(root)
    table = DecodeTable(
        nodes=to_nodes(root, numbering),
        plans=plan_variants(members),
        categories={v.name: v.category for v in members},
        name=name,
    )
    logger.info(
        "Built decode table '%s': %d variant(s), %d node(s), %d terminal(s)",
        name,
        len(members),
        len(table.nodes),
        sum(1 for _ in table.terminals()),
    )
    return table


__all__ = ["DecodeNode", "DecodeTable", "build_table", "number", "to_nodes"]
