"""
Generalization order between instruction variants.

Overlapping encodings are normal: an alias such as ``BREQ k`` occupies a strict
sub-pattern of ``BRBS s,k``. Rather than reporting such a pair as ambiguous,
the splitter asks an oracle whether one variant subsumes the other and elects
the most general one as the decode winner. The relation is a partial order and
need not be total; the splitter never looks past this interface.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .catalog import Catalog, Variant
from .config import GeneratorConfig
from .errors import CatalogError
from .formats import generalizes


class SubsumptionOracle(Protocol):
    def subsumes(self, a: Variant, b: Variant) -> bool:
        """True if every word matching ``b`` also matches ``a``."""
        ...


class PatternSubsumption:
    """Derive the order from the patterns: ``a`` must strictly generalize ``b``.

    Two distinct variants with identical patterns are incomparable, so a
    catalog carrying both is ambiguous.
    """

    def subsumes(self, a: Variant, b: Variant) -> bool:
        if a is b:
            return True
        return generalizes(a, b) and not generalizes(b, a)


class DeclaredSubsumption:
    """Use the ``subsumes`` lists the catalog declares on each variant."""

    def __init__(self, catalog: Catalog, strict: bool = True) -> None:
        self._declared = {
            variant.name: frozenset(variant.subsumes) for variant in catalog
        }
        if strict:
            for variant in catalog:
                for target in variant.subsumes:
                    if not generalizes(variant, catalog[target]):
                        raise CatalogError(
                            f"{variant.name} declares it subsumes {target}, "
                            "but its pattern does not cover it"
                        )

    def subsumes(self, a: Variant, b: Variant) -> bool:
        if a is b:
            return True
        return b.name in self._declared.get(a.name, ())


def oracle_for(config: GeneratorConfig, catalog: Catalog) -> SubsumptionOracle:
    if config.subsumption == "declared":
        return DeclaredSubsumption(catalog, strict=config.strict_declarations)
    return PatternSubsumption()


def find_winner(
    variants: Sequence[Variant], oracle: SubsumptionOracle
) -> Optional[Variant]:
    matched: Optional[Variant] = None
    for variant in variants:
        if matched is None or oracle.subsumes(variant, matched):
            matched = variant
    return matched


def is_terminal(variants: Sequence[Variant], oracle: SubsumptionOracle) -> bool:
    """A set is terminal if one variant subsumes all the others.

    A singleton trivially is; a general instruction plus its specialisations
    is too.
    """

    matched = find_winner(variants, oracle)
    if matched is None:
        return False
    return all(v is matched or oracle.subsumes(matched, v) for v in variants)


__all__ = [
    "DeclaredSubsumption",
    "PatternSubsumption",
    "SubsumptionOracle",
    "find_winner",
    "is_terminal",
    "oracle_for",
]
