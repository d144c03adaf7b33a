from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Dict, List, Optional

from .formats import WORD_MASK
from .numbering import DecodeTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DecodedWord:
    word: int
    name: str
    category: str
    node: int
    operands: Dict[str, int] = field(default_factory=dict)


def _check_word(word: int) -> None:
    if not 0 <= word <= WORD_MASK:
        raise ValueError(f"Instruction word out of range: {word:#x}")


class TableDecoder:
    """Walks a numbered decode table the way a generated decoder would."""

    def __init__(self, table: DecodeTable) -> None:
        self.table = table
        self._dispatch: List[Dict[int, int]] = [dict(node.entries) for node in table.nodes]

    def lookup(self, word: int) -> Optional[int]:
        """Return the id of the terminal node ``word`` reaches, or ``None``."""

        _check_word(word)
        node_id = 0
        node = self.table.nodes[node_id]
        while not node.is_terminal:
            child = self._dispatch[node_id].get(word & node.mask)
            if child is None:
                logger.debug(
                    "decode miss for %#06x at node %d (key %#06x)",
                    word,
                    node_id,
                    word & node.mask,
                )
                return None
            node_id = child
            node = self.table.nodes[node_id]
        return node_id

    def decode(self, word: int) -> Optional[DecodedWord]:
        node_id = self.lookup(word)
        if node_id is None:
            return None
        winner = self.table.nodes[node_id].winner
        assert winner is not None
        return self._bind(word, winner, node_id)

    def decode_as(self, name: str, word: int) -> DecodedWord:
        """Extract operands with a specific variant's plan, e.g. a subsumed alias."""

        _check_word(word)
        if name not in self.table.plans:
            raise KeyError(f"Unknown variant '{name}'")
        node_id = self.lookup(word)
        return self._bind(word, name, -1 if node_id is None else node_id)

    def _bind(self, word: int, name: str, node_id: int) -> DecodedWord:
        plan = self.table.plans[name]
        return DecodedWord(
            word=word,
            name=name,
            category=self.table.categories.get(name, ""),
            node=node_id,
            operands=plan.extract(word),
        )


__all__ = ["DecodedWord", "TableDecoder"]
