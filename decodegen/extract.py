"""
Operand extraction plans.

An operand's bits may be scattered over the word (``ADD`` keeps one bit of
``r`` at bit 9 and the rest at bits 3-0). Each operand is described as the
contiguous runs it occupies; reassembling them low run first, each shifted down
to sit just above the bits already collected, concatenates the runs in pattern
order with the leftmost occurrence as the high-order bits.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from .catalog import Variant
from .formats import WORD_BITS


@dataclass(frozen=True, slots=True)
class BitRun:
    start: int
    width: int

    def __post_init__(self) -> None:
        if self.width <= 0 or not 0 <= self.start <= self.start + self.width <= WORD_BITS:
            raise ValueError(f"BitRun out of range: start={self.start} width={self.width}")

    @property
    def mask(self) -> int:
        return ((1 << self.width) - 1) << self.start


@dataclass(frozen=True, slots=True)
class ExtractStep:
    """``(word & mask) >> shift``, or ``<< -shift`` when ``shift`` is negative."""

    mask: int
    shift: int

    def apply(self, word: int) -> int:
        part = word & self.mask
        if self.shift >= 0:
            return part >> self.shift
        return part << -self.shift


def runs_from_mask(mask: int) -> Tuple[BitRun, ...]:
    runs: List[BitRun] = []
    start = -1
    for bit in range(WORD_BITS + 1):
        if bit < WORD_BITS and mask & (1 << bit):
            if start < 0:
                start = bit
        elif start >= 0:
            runs.append(BitRun(start, bit - start))
            start = -1
    return tuple(runs)


@dataclass(frozen=True, slots=True)
class OperandField:
    name: str
    runs: Tuple[BitRun, ...]

    @classmethod
    def from_mask(cls, name: str, mask: int) -> "OperandField":
        return cls(name, runs_from_mask(mask))

    @property
    def width(self) -> int:
        return sum(run.width for run in self.runs)

    @property
    def mask(self) -> int:
        result = 0
        for run in self.runs:
            result |= run.mask
        return result

    @property
    def steps(self) -> Tuple[ExtractStep, ...]:
        steps: List[ExtractStep] = []
        width = 0
        for run in self.runs:
            steps.append(ExtractStep(mask=run.mask, shift=run.start - width))
            width += run.width
        return tuple(steps)

    def extract(self, word: int) -> int:
        value = 0
        for step in self.steps:
            value |= step.apply(word)
        return value


@dataclass(frozen=True, slots=True)
class ExtractionPlan:
    variant: str
    fields: Tuple[OperandField, ...] = ()

    @property
    def is_niladic(self) -> bool:
        return not self.fields

    def extract(self, word: int) -> Dict[str, int]:
        return {field.name: field.extract(word) for field in self.fields}


def operand_mask(bits: str, letter: str) -> int:
    """Word mask of the positions holding ``letter``; pattern index ``i`` is bit ``15 - i``."""

    mask = 0
    for index, ch in enumerate(bits):
        if ch == letter:
            mask |= 1 << (WORD_BITS - 1 - index)
    return mask


def plan_variant(variant: Variant) -> ExtractionPlan:
    fields = tuple(
        OperandField.from_mask(letter, operand_mask(variant.bits, letter))
        for letter in variant.operands
    )
    return ExtractionPlan(variant=variant.name, fields=fields)


def plan_variants(variants: Iterable[Variant]) -> Dict[str, ExtractionPlan]:
    return {variant.name: plan_variant(variant) for variant in variants}


__all__ = [
    "BitRun",
    "ExtractStep",
    "ExtractionPlan",
    "OperandField",
    "operand_mask",
    "plan_variant",
    "plan_variants",
    "runs_from_mask",
]
