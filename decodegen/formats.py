"""
Encoding-pattern model for 16-bit instruction words.

A pattern spells the word from bit 15 down to bit 0: ``0``/``1`` pin a bit,
a lowercase letter marks a bit belonging to the operand of that name, and
``_`` or whitespace may be sprinkled in for readability::

    "0000_11rd_dddd_rrrr"   # ADD Rd, Rr
"""

from __future__ import annotations

from typing import FrozenSet, Protocol, Tuple

from .errors import MalformedPatternError

WORD_BITS = 16
WORD_MASK = (1 << WORD_BITS) - 1

DEFAULT_SEPARATORS: FrozenSet[str] = frozenset("_ \t")


class HasEncoding(Protocol):
    @property
    def fixed_mask(self) -> int: ...

    @property
    def fixed_value(self) -> int: ...


def normalize(
    pattern: str,
    name: str = "<pattern>",
    separators: FrozenSet[str] = DEFAULT_SEPARATORS,
) -> str:
    """Strip separators and validate; returns the 16 symbolic positions."""

    bits = "".join(ch for ch in pattern if ch not in separators)
    for ch in bits:
        if ch not in "01" and not ("a" <= ch <= "z"):
            raise MalformedPatternError(name, pattern, f"unexpected character {ch!r}")
    if len(bits) != WORD_BITS:
        raise MalformedPatternError(
            name, pattern, f"expected {WORD_BITS} bit positions, got {len(bits)}"
        )
    return bits


def parse(
    pattern: str,
    name: str = "<pattern>",
    separators: FrozenSet[str] = DEFAULT_SEPARATORS,
) -> Tuple[int, int]:
    """Return ``(mask, value)`` for the fixed bits of ``pattern``."""

    mask = 0
    value = 0
    for ch in normalize(pattern, name, separators):
        mask <<= 1
        value <<= 1
        if ch == "0" or ch == "1":
            mask |= 1
            if ch == "1":
                value |= 1
    return mask, value


def covered(variant: HasEncoding, mask: int, test_value: int) -> bool:
    """True if ``variant`` is consistent with the bit-test ``word & mask == test_value``."""

    return (variant.fixed_value & mask) == test_value


def matches(variant: HasEncoding, word: int) -> bool:
    return (word & variant.fixed_mask) == variant.fixed_value


def generalizes(a: HasEncoding, b: HasEncoding) -> bool:
    """True if every word matching ``b`` also matches ``a``."""

    if a.fixed_mask & ~b.fixed_mask:
        return False
    return (b.fixed_value & a.fixed_mask) == a.fixed_value


def format_bits(value: int) -> str:
    return f"0b{value & WORD_MASK:0{WORD_BITS}b}"


__all__ = [
    "DEFAULT_SEPARATORS",
    "HasEncoding",
    "WORD_BITS",
    "WORD_MASK",
    "covered",
    "format_bits",
    "generalizes",
    "matches",
    "normalize",
    "parse",
]
