from __future__ import annotations

from dataclasses import dataclass, field
import json
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from .errors import CatalogError
from .formats import normalize, parse


@dataclass(frozen=True, eq=False)
class Variant:
    """One instruction encoding. Compared by identity; names are unique per catalog."""

    name: str
    pattern: str
    category: str = ""
    subsumes: Tuple[str, ...] = ()
    bits: str = field(init=False, repr=False)
    fixed_mask: int = field(init=False, repr=False)
    fixed_value: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        bits = normalize(self.pattern, self.name)
        mask, value = parse(bits, self.name)
        object.__setattr__(self, "subsumes", tuple(self.subsumes))
        object.__setattr__(self, "bits", bits)
        object.__setattr__(self, "fixed_mask", mask)
        object.__setattr__(self, "fixed_value", value)

    @property
    def operands(self) -> Tuple[str, ...]:
        """Operand letters in order of first appearance."""

        seen: List[str] = []
        for ch in self.bits:
            if ch not in "01" and ch not in seen:
                seen.append(ch)
        return tuple(seen)

    @property
    def is_niladic(self) -> bool:
        return not self.operands


class Catalog:
    """Ordered, immutable collection of variants with unique names."""

    def __init__(self, variants: Iterable[Variant], name: str = "catalog") -> None:
        self.name = name
        self._variants: Tuple[Variant, ...] = tuple(variants)
        self._by_name: Dict[str, Variant] = {}
        for variant in self._variants:
            if variant.name in self._by_name:
                raise CatalogError(f"Duplicate variant name '{variant.name}'")
            self._by_name[variant.name] = variant
        for variant in self._variants:
            for target in variant.subsumes:
                if target not in self._by_name:
                    raise CatalogError(
                        f"{variant.name}: declares unknown subsumed variant '{target}'"
                    )

    def __iter__(self) -> Iterator[Variant]:
        return iter(self._variants)

    def __len__(self) -> int:
        return len(self._variants)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __getitem__(self, name: str) -> Variant:
        try:
            return self._by_name[name]
        except KeyError:
            raise KeyError(f"Unknown variant '{name}'") from None

    @property
    def variants(self) -> Tuple[Variant, ...]:
        return self._variants

    def get(self, name: str) -> Optional[Variant]:
        return self._by_name.get(name)

    @classmethod
    def from_entries(
        cls, entries: Iterable[Mapping[str, Any]], name: str = "catalog"
    ) -> "Catalog":
        variants = []
        for index, entry in enumerate(entries):
            if not isinstance(entry, Mapping):
                raise CatalogError(
                    f"Catalog entry #{index} must be an object, got {type(entry).__name__}"
                )
            subsumes = entry.get("subsumes", ())
            if not isinstance(subsumes, (list, tuple)) or not all(
                isinstance(target, str) for target in subsumes
            ):
                raise CatalogError(
                    f"Catalog entry #{index}: 'subsumes' must be a list of variant names"
                )
            try:
                variants.append(
                    Variant(
                        name=str(entry["name"]),
                        pattern=str(entry["pattern"]),
                        category=str(entry.get("category", "")),
                        subsumes=tuple(subsumes),
                    )
                )
            except KeyError as exc:
                raise CatalogError(f"Catalog entry #{index} is missing {exc}") from exc
        return cls(variants, name=name)

    @classmethod
    def load(cls, path: str | Path) -> "Catalog":
        """Load a JSON catalog: either a list of entries or ``{"name", "variants"}``."""

        path = Path(path)
        with open(path, "r", encoding="utf-8") as fh:
            try:
                data = json.load(fh)
            except (json.JSONDecodeError, UnicodeDecodeError) as exc:
                raise CatalogError(f"{path}: invalid JSON ({exc})") from exc
        if isinstance(data, list):
            return cls.from_entries(data, name=path.stem)
        if isinstance(data, dict) and isinstance(data.get("variants"), list):
            return cls.from_entries(data["variants"], name=str(data.get("name", path.stem)))
        raise CatalogError(f"{path}: expected a list of variants or a 'variants' key")

    def to_entries(self) -> List[Dict[str, Any]]:
        entries = []
        for variant in self._variants:
            entry: Dict[str, Any] = {
                "name": variant.name,
                "pattern": variant.pattern,
                "category": variant.category,
            }
            if variant.subsumes:
                entry["subsumes"] = list(variant.subsumes)
            entries.append(entry)
        return entries


__all__ = ["Catalog", "Variant"]
