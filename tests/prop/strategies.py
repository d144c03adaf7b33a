from __future__ import annotations

from typing import Dict, List

from hypothesis import strategies as st

from decodegen.catalog import Catalog, Variant

WORD_BITS = 16
OPERAND_LETTERS = "abcdkqrs"

words = st.integers(0, 0xFFFF)


def _render(bits: Dict[int, str]) -> str:
    return "".join(bits[bit] for bit in range(WORD_BITS - 1, -1, -1))


@st.composite
def splittable_catalogs(draw, max_depth: int = 3) -> Catalog:
    """Catalogs built as a random prefix tree, so they never collide.

    Every internal node pins a few free bit positions and hands each child a
    distinct value for them; leaves fill the remaining positions with fixed
    bits or operand letters. A leaf may also grow an alias that pins one of
    its operand bits, which the pattern oracle must fold into the leaf.
    """

    variants: List[Variant] = []

    def leaf(free: List[int], fixed: Dict[int, str]) -> None:
        bits = dict(fixed)
        for bit in free:
            bits[bit] = draw(st.sampled_from("01" + OPERAND_LETTERS))
        name = f"V{len(variants)}"
        variants.append(Variant(name, _render(bits), category="leaf"))
        operand_bits = [bit for bit in free if bits[bit] not in "01"]
        if operand_bits and draw(st.booleans()):
            pinned = dict(bits)
            pinned[draw(st.sampled_from(operand_bits))] = draw(st.sampled_from("01"))
            variants.append(Variant(f"{name}_ALIAS", _render(pinned), category="alias"))

    def node(free: List[int], fixed: Dict[int, str], depth: int) -> None:
        must_branch = depth == 0
        if not must_branch and (depth >= max_depth or len(free) < 2 or draw(st.booleans())):
            leaf(free, fixed)
            return
        chosen = draw(
            st.lists(st.sampled_from(free), min_size=1, max_size=min(3, len(free)), unique=True)
        )
        space = 1 << len(chosen)
        values = draw(
            st.lists(st.integers(0, space - 1), min_size=2, max_size=min(3, space), unique=True)
        )
        rest = [bit for bit in free if bit not in chosen]
        for value in values:
            child = dict(fixed)
            for index, bit in enumerate(chosen):
                child[bit] = "1" if (value >> index) & 1 else "0"
            node(rest, child, depth + 1)

    node(list(range(WORD_BITS)), {}, 0)
    return Catalog(variants, name="generated")


@st.composite
def scattered_patterns(draw) -> str:
    """A pattern whose operands are interleaved at random positions."""

    return "".join(draw(st.lists(st.sampled_from("01kdr"), min_size=16, max_size=16)))
