from __future__ import annotations

from dataclasses import dataclass, field
from functools import reduce
import logging
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple

from .catalog import Variant
from .errors import AmbiguousEncodingError
from .formats import WORD_MASK, format_bits
from .subsumption import PatternSubsumption, SubsumptionOracle, find_winner, is_terminal

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Group:
    """A decision-tree node.

    Non-terminal groups test ``word & mask`` and dispatch on the result through
    ``children`` (keys ascending). Terminal groups have ``mask == 0`` and carry
    the elected ``winner``.
    """

    variants: Tuple[Variant, ...]
    mask: int = 0
    children: Mapping[int, "Group"] = field(default_factory=dict)
    winner: Optional[Variant] = None

    @property
    def is_terminal(self) -> bool:
        return self.winner is not None

    @property
    def candidates(self) -> Tuple[Variant, ...]:
        """Winner first, then the variants it subsumes in catalog order."""

        if self.winner is None:
            return ()
        rest = tuple(v for v in self.variants if v is not self.winner)
        return (self.winner,) + rest


def iter_subsets(mask: int) -> Iterator[int]:
    """Yield every value ``v`` with ``v & mask == v`` in ascending order."""

    sub = 0
    while True:
        yield sub
        sub = (sub - mask) & mask
        if sub == 0:
            return


def discriminating_mask(variants: Iterable[Variant]) -> int:
    """Bits fixed in every variant: the widest test meaningful for all of them."""

    return reduce(lambda acc, v: acc & v.fixed_mask, variants, WORD_MASK)


def split(
    variants: Iterable[Variant], oracle: Optional[SubsumptionOracle] = None
) -> Group:
    """Recursively split ``variants`` into a tree of groups."""

    members = tuple(variants)
    if not members:
        raise ValueError("Cannot split an empty set of variants")
    return _split(members, oracle or PatternSubsumption(), 0)


def _split(
    variants: Tuple[Variant, ...], oracle: SubsumptionOracle, depth: int
) -> Group:
    if is_terminal(variants, oracle):
        winner = find_winner(variants, oracle)
        logger.debug(
            "%sterminal %s (%d candidate(s))",
            "  " * depth,
            winner.name if winner else "?",
            len(variants),
        )
        return Group(variants=variants, winner=winner)

    mask = discriminating_mask(variants)
    buckets: Dict[int, list] = {}
    for variant in variants:
        # covered(variant, mask, key) holds for exactly this key
        buckets.setdefault(variant.fixed_value & mask, []).append(variant)

    children: Dict[int, Group] = {}
    for value in iter_subsets(mask):
        covered = buckets.get(value)
        if not covered:
            continue
        if len(covered) == len(variants):
            raise AmbiguousEncodingError(v.name for v in variants)
        children[value] = _split(tuple(covered), oracle, depth + 1)

    logger.debug(
        "%ssplit %d variant(s) on mask %s into %d bucket(s)",
        "  " * depth,
        len(variants),
        format_bits(mask),
        len(children),
    )
    return Group(variants=variants, mask=mask, children=children)


def walk(group: Group) -> Iterator[Group]:
    """Pre-order traversal, children in ascending key order."""

    yield group
    for key in sorted(group.children):
        yield from walk(group.children[key])


def terminals(group: Group) -> Iterator[Group]:
    return (node for node in walk(group) if node.is_terminal)


def resolve(group: Group, word: int) -> Optional[Group]:
    """Follow ``word`` down to its terminal group, or ``None`` on a miss."""

    node = group
    while not node.is_terminal:
        child = node.children.get(word & node.mask)
        if child is None:
            return None
        node = child
    return node


__all__ = [
    "Group",
    "discriminating_mask",
    "iter_subsets",
    "resolve",
    "split",
    "terminals",
    "walk",
]
