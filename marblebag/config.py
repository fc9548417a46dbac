from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional

import yaml

from marblebag.bags import BitsetMarbleBag, MarbleBag, WordMarbleBag, restore_bag

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}
STRATEGIES = {
    "bitset": BitsetMarbleBag,
    "words": WordMarbleBag,
}


@dataclass
class BagConfig:
    size: int = 100
    auto_reset: bool = True
    seed: Optional[int] = None
    strategy: str = "bitset"

    def __post_init__(self) -> None:
        self.strategy = self.strategy.strip().lower()
        if self.strategy not in STRATEGIES:
            raise ValueError(f"strategy must be one of {sorted(STRATEGIES)}, got '{self.strategy}'")
        if self.size < 1:
            raise ValueError("size must be at least 1")


def _parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUTHY


def _parse_seed(value: object) -> Optional[int]:
    if value is None or str(value).strip() == "":
        return None
    return int(value)


def load_bag_config(env: Dict[str, str] | None = None) -> BagConfig:
    env = env if env is not None else os.environ
    config = BagConfig(
        size=int(env.get("MARBLEBAG_SIZE", "100")),
        auto_reset=_parse_bool(env.get("MARBLEBAG_AUTO_RESET", "true")),
        seed=_parse_seed(env.get("MARBLEBAG_SEED")),
        strategy=env.get("MARBLEBAG_STRATEGY", "bitset"),
    )
    logger.info("marblebag.config.loaded", extra={"size": config.size, "strategy": config.strategy})
    return config


def load_bag_presets(path: Path) -> Dict[str, BagConfig]:
    """Read named bag presets from a YAML list of mappings."""
    if not path.exists():
        raise FileNotFoundError(f"Expected YAML preset file at {path}")
    with path.open("r", encoding="utf-8") as handle:
        payload = yaml.safe_load(handle) or []
    if not isinstance(payload, list):
        raise ValueError(f"Expected list at {path}, got {type(payload).__name__}")
    presets: Dict[str, BagConfig] = {}
    for row in payload:
        name = str(row["name"])
        if name in presets:
            raise ValueError(f"Duplicate bag preset '{name}' in {path}")
        presets[name] = BagConfig(
            size=int(row["size"]),
            auto_reset=_parse_bool(row.get("auto_reset", True)),
            seed=_parse_seed(row.get("seed")),
            strategy=str(row.get("strategy", "bitset")),
        )
    logger.info("marblebag.config.presets_loaded", extra={"path": str(path), "count": len(presets)})
    return presets


def build_bag(config: BagConfig, usage: Optional[Iterable[int]] = None) -> MarbleBag:
    bag_cls = STRATEGIES[config.strategy]
    bag = bag_cls(config.size, config.seed, auto_reset=config.auto_reset)
    return restore_bag(bag, usage)


__all__ = ["BagConfig", "STRATEGIES", "build_bag", "load_bag_config", "load_bag_presets"]
