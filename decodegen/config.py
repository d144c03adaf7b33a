from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Literal, Optional

SubsumptionMode = Literal["pattern", "declared"]

_MODES = ("pattern", "declared")


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    normalized = raw.strip().casefold()
    return normalized not in {"0", "false", "off", ""}


def _env_mode(name: str, default: SubsumptionMode) -> SubsumptionMode:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    normalized = raw.strip().casefold()
    if normalized not in _MODES:
        raise ValueError(
            f"Unknown subsumption mode '{raw}' (expected one of: {list(_MODES)})"
        )
    return normalized  # type: ignore[return-value]


@dataclass(frozen=True)
class GeneratorConfig:
    subsumption: SubsumptionMode = "pattern"
    strict_declarations: bool = True
    trace: bool = False


def load_generator_config(subsumption: Optional[SubsumptionMode] = None) -> GeneratorConfig:
    """Read the environment; an explicit ``subsumption`` wins over DECODEGEN_SUBSUMPTION."""

    return GeneratorConfig(
        subsumption=subsumption or _env_mode("DECODEGEN_SUBSUMPTION", default="pattern"),
        strict_declarations=_env_flag("DECODEGEN_STRICT_DECLARATIONS", default=True),
        trace=_env_flag("DECODEGEN_TRACE", default=False),
    )


__all__ = ["GeneratorConfig", "SubsumptionMode", "load_generator_config"]
