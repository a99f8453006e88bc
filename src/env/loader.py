# src/env/loader.py
"""
Configuration loader for the navigation orchestrator.

Reads config/navigation.yaml (or an explicit path) into a tree of
dataclasses. Every section and key is optional; anything left out keeps
the default declared below, so callers can construct NavigationConfig()
directly and never touch the filesystem.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from spec.movement import MovementProfile


log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Dataclasses for configuration representation
# ---------------------------------------------------------------------------


@dataclass
class CacheConfig:
    ttl_s: float = 300.0
    max_entries: int = 100


@dataclass
class TimingConfig:
    window: int = 10
    initial_average_ms: float = 5000.0
    long_distance: float = 200.0
    max_timeouts: int = 3
    distance_unit: float = 50.0
    max_predicted_ms: float = 30000.0


@dataclass
class ChunkConfig:
    chunk_size: int = 16
    waypoint_spacing: float = 32.0
    hop_timeout_s: float = 15.0
    hop_tolerance: float = 5.0
    final_timeout_s: float = 10.0
    final_tolerance: float = 2.0


@dataclass
class ReplayConfig:
    hop_timeout_s: float = 10.0
    hop_tolerance: float = 3.0


@dataclass
class GotoConfig:
    default_timeout_s: float = 20.0
    waypoint_tolerance: float = 2.0


@dataclass
class NavigationConfig:
    """Top-level resolved navigation configuration."""
    cache: CacheConfig = field(default_factory=CacheConfig)
    timing: TimingConfig = field(default_factory=TimingConfig)
    chunks: ChunkConfig = field(default_factory=ChunkConfig)
    replay: ReplayConfig = field(default_factory=ReplayConfig)
    goto: GotoConfig = field(default_factory=GotoConfig)
    movement: MovementProfile = field(default_factory=MovementProfile)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_ROOT = PROJECT_ROOT / "config"
DEFAULT_CONFIG_PATH = CONFIG_ROOT / "navigation.yaml"

_SECTIONS = {
    "cache": CacheConfig,
    "timing": TimingConfig,
    "chunks": ChunkConfig,
    "replay": ReplayConfig,
    "goto": GotoConfig,
    "movement": MovementProfile,
}


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML mapping from `path`."""
    if not path.exists():
        raise FileNotFoundError(f"Missing config file: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at top of {path}, got {type(data)}")
    return data


def _build_section(name: str, raw: Any) -> Any:
    """Instantiate one section dataclass, rejecting unknown keys."""
    cls = _SECTIONS[name]
    if raw is None:
        return cls()
    if not isinstance(raw, dict):
        raise ValueError(f"Section '{name}' must be a mapping, got {type(raw)}")

    known = {f.name for f in fields(cls)}
    unknown = set(raw) - known
    if unknown:
        raise ValueError(f"Unknown keys in section '{name}': {sorted(unknown)}")

    kwargs = dict(raw)
    if name == "movement" and "scaffolding_blocks" in kwargs:
        kwargs["scaffolding_blocks"] = tuple(kwargs["scaffolding_blocks"] or ())
    return cls(**kwargs)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_navigation_config(path: Optional[Path] = None) -> NavigationConfig:
    """Main entry point: returns a validated NavigationConfig."""
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    raw = _load_yaml(config_path)

    unknown = set(raw) - set(_SECTIONS)
    if unknown:
        raise ValueError(f"Unknown sections in {config_path}: {sorted(unknown)}")

    cfg = NavigationConfig(
        **{name: _build_section(name, raw.get(name)) for name in _SECTIONS}
    )

    _validate_config(cfg)
    log.debug("Loaded navigation config from %s", config_path)
    return cfg


def _validate_config(cfg: NavigationConfig) -> None:
    """Minimal sanity checks for the navigation config."""
    if cfg.cache.ttl_s <= 0:
        raise ValueError(f"cache.ttl_s must be > 0, got {cfg.cache.ttl_s}")
    if cfg.cache.max_entries < 1:
        raise ValueError(f"cache.max_entries must be >= 1, got {cfg.cache.max_entries}")
    if cfg.timing.window < 1:
        raise ValueError(f"timing.window must be >= 1, got {cfg.timing.window}")
    if cfg.timing.distance_unit <= 0:
        raise ValueError(f"timing.distance_unit must be > 0, got {cfg.timing.distance_unit}")
    if cfg.chunks.chunk_size <= 0:
        raise ValueError(f"chunks.chunk_size must be > 0, got {cfg.chunks.chunk_size}")
    if cfg.chunks.waypoint_spacing <= 0:
        raise ValueError(
            f"chunks.waypoint_spacing must be > 0, got {cfg.chunks.waypoint_spacing}"
        )
    for label, value in (
        ("chunks.hop_timeout_s", cfg.chunks.hop_timeout_s),
        ("chunks.final_timeout_s", cfg.chunks.final_timeout_s),
        ("replay.hop_timeout_s", cfg.replay.hop_timeout_s),
        ("goto.default_timeout_s", cfg.goto.default_timeout_s),
    ):
        if value <= 0:
            raise ValueError(f"{label} must be > 0, got {value}")
