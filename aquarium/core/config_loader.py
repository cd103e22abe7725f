"""
Configuration Loader
====================

Loads and validates aquarium_config.yaml, providing typed access to all parameters.

The YAML file carries a `defaults` block and a set of named `profiles`. A profile
only lists the parameters it changes; loading deep-merges defaults, the selected
profile and any caller overrides before parsing.
"""

from __future__ import annotations

import copy
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

BOUNDARY_POLICIES = ("clamp", "reflect")
SPAWN_MODES = ("pointer", "random")


@dataclass(frozen=True)
class BoundsConfig:
    """Tank geometry."""
    width: int
    height: int
    seabed_height: float      # Fish floor sits this far above the bottom edge
    agent_right_inset: float  # Fish stops this far short of the right edge


@dataclass(frozen=True)
class AgentConfig:
    """Fish start position and sprite geometry (used for the hitbox)."""
    start_x: Optional[float]
    start_y: Optional[float]
    sprite_width: float
    sprite_height: float
    render_scale: float


@dataclass(frozen=True)
class KinematicsConfig:
    """Integrator and boundary handling parameters."""
    velocity_cap_enabled: bool
    max_velocity: float
    boundary_policy: str
    restitution: float
    flip_threshold: float
    flip_min_dwell_ticks: int

    @property
    def bounce_factor(self) -> float:
        """Velocity multiplier applied on a wall hit (before inversion)."""
        if self.boundary_policy == "reflect":
            return 1.0
        return self.restitution


@dataclass(frozen=True)
class BehaviorConfig:
    """Wander and lunge acceleration parameters."""
    lunge_probability: float
    lunge_x_bias: float
    lunge_x_scale: float
    lunge_y_bias: float
    lunge_y_scale: float
    lunge_duration_min: int
    lunge_duration_max: int
    wander_x_scale: float
    wander_y_scale: float


@dataclass(frozen=True)
class PlannerConfig:
    """Seek/intercept steering parameters."""
    enabled: bool
    prediction_horizon: float
    lead_x_with_vertical_velocity: bool
    gain: float
    fallback_x_scale: float
    fallback_y_scale: float


@dataclass(frozen=True)
class SpawnerConfig:
    """Bubble spawning parameters."""
    mode: str
    spawn_probability: float
    cooldown_ticks: int
    bubble_velocity: float
    scale_min: float
    scale_max: float
    bottom_inset: float


@dataclass(frozen=True)
class DecorationConfig:
    """Seaweed placement parameters."""
    count_min: int
    count_max: int
    sprite_height: float


@dataclass(frozen=True)
class CollisionConfig:
    """Fish/bubble contact parameters."""
    enabled: bool
    padding: float


@dataclass(frozen=True)
class EffectConfig:
    """Pop effect lifetime parameters."""
    frame_budget: int
    fade_step: float
    initial_scale: float
    initial_alpha: float


@dataclass(frozen=True)
class CullingConfig:
    """Removal of bubbles that floated out of the top of the tank."""
    enabled: bool
    margin: float


@dataclass(frozen=True)
class AquariumConfig:
    """
    Complete aquarium configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    profile: str
    bounds: BoundsConfig
    agent: AgentConfig
    kinematics: KinematicsConfig
    behavior: BehaviorConfig
    planner: PlannerConfig
    spawner: SpawnerConfig
    decoration: DecorationConfig
    collision: CollisionConfig
    effects: EffectConfig
    culling: CullingConfig

    @property
    def start_position(self) -> Tuple[float, float]:
        """Fish start position, defaulting to the centre of the tank."""
        x = self.agent.start_x
        y = self.agent.start_y
        if x is None:
            x = self.bounds.width / 2
        if y is None:
            y = self.bounds.height / 2
        return (float(x), float(y))

    @property
    def agent_limits(self) -> Tuple[float, float, float, float]:
        """(min_x, max_x, min_y, max_y) the fish position is kept within."""
        return (
            0.0,
            self.bounds.width - self.bounds.agent_right_inset,
            0.0,
            self.bounds.height - self.bounds.seabed_height,
        )


def _default_config_path() -> str:
    return os.path.join(
        os.path.dirname(os.path.dirname(__file__)),
        "aquarium_config.yaml"
    )


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of base with override merged in, recursing into dicts."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _optional_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


def _parse(profile: str, raw: Dict[str, Any]) -> AquariumConfig:
    """Parse a fully merged parameter dict into typed config sections."""
    b = raw["bounds"]
    bounds = BoundsConfig(
        width=int(b["width"]),
        height=int(b["height"]),
        seabed_height=float(b.get("seabed_height", 0.0)),
        agent_right_inset=float(b.get("agent_right_inset", 0.0))
    )

    a = raw["agent"]
    agent = AgentConfig(
        start_x=_optional_float(a.get("start_x")),
        start_y=_optional_float(a.get("start_y")),
        sprite_width=float(a["sprite_width"]),
        sprite_height=float(a["sprite_height"]),
        render_scale=float(a.get("render_scale", 1.0))
    )

    k = raw["kinematics"]
    kinematics = KinematicsConfig(
        velocity_cap_enabled=bool(k.get("velocity_cap_enabled", True)),
        max_velocity=float(k["max_velocity"]),
        boundary_policy=str(k.get("boundary_policy", "clamp")),
        restitution=float(k.get("restitution", 1.0)),
        flip_threshold=float(k["flip_threshold"]),
        flip_min_dwell_ticks=int(k.get("flip_min_dwell_ticks", 0))
    )

    bh = raw["behavior"]
    behavior = BehaviorConfig(
        lunge_probability=float(bh["lunge_probability"]),
        lunge_x_bias=float(bh["lunge_x_bias"]),
        lunge_x_scale=float(bh["lunge_x_scale"]),
        lunge_y_bias=float(bh["lunge_y_bias"]),
        lunge_y_scale=float(bh["lunge_y_scale"]),
        lunge_duration_min=int(bh["lunge_duration_min"]),
        lunge_duration_max=int(bh["lunge_duration_max"]),
        wander_x_scale=float(bh["wander_x_scale"]),
        wander_y_scale=float(bh["wander_y_scale"])
    )

    p = raw["planner"]
    planner = PlannerConfig(
        enabled=bool(p.get("enabled", True)),
        prediction_horizon=float(p.get("prediction_horizon", 0.0)),
        lead_x_with_vertical_velocity=bool(p.get("lead_x_with_vertical_velocity", False)),
        gain=float(p["gain"]),
        fallback_x_scale=float(p["fallback_x_scale"]),
        fallback_y_scale=float(p["fallback_y_scale"])
    )

    s = raw["spawner"]
    spawner = SpawnerConfig(
        mode=str(s.get("mode", "pointer")),
        spawn_probability=float(s.get("spawn_probability", 0.0)),
        cooldown_ticks=int(s.get("cooldown_ticks", 0)),
        bubble_velocity=float(s["bubble_velocity"]),
        scale_min=float(s.get("scale_min", 1.0)),
        scale_max=float(s.get("scale_max", 1.0)),
        bottom_inset=float(s.get("bottom_inset", 0.0))
    )

    d = raw["decoration"]
    decoration = DecorationConfig(
        count_min=int(d["count_min"]),
        count_max=int(d["count_max"]),
        sprite_height=float(d.get("sprite_height", 0.0))
    )

    c = raw["collision"]
    collision = CollisionConfig(
        enabled=bool(c.get("enabled", True)),
        padding=float(c.get("padding", 0.0))
    )

    e = raw["effects"]
    effects = EffectConfig(
        frame_budget=int(e["frame_budget"]),
        fade_step=float(e["fade_step"]),
        initial_scale=float(e.get("initial_scale", 1.0)),
        initial_alpha=float(e.get("initial_alpha", 1.0))
    )

    cl = raw.get("culling", {})
    culling = CullingConfig(
        enabled=bool(cl.get("enabled", True)),
        margin=float(cl.get("margin", 0.0))
    )

    return AquariumConfig(
        profile=profile,
        bounds=bounds,
        agent=agent,
        kinematics=kinematics,
        behavior=behavior,
        planner=planner,
        spawner=spawner,
        decoration=decoration,
        collision=collision,
        effects=effects,
        culling=culling
    )


def _validate_config(config: AquariumConfig) -> None:
    """Validate configuration consistency."""
    if config.bounds.width <= 0 or config.bounds.height <= 0:
        raise ValueError(
            f"Tank bounds must be positive, got {config.bounds.width}x{config.bounds.height}"
        )

    min_x, max_x, min_y, max_y = config.agent_limits
    if max_x <= min_x or max_y <= min_y:
        raise ValueError(f"Insets leave no room for the fish: limits {config.agent_limits}")

    if config.kinematics.boundary_policy not in BOUNDARY_POLICIES:
        raise ValueError(
            f"boundary_policy must be one of {BOUNDARY_POLICIES}, "
            f"got '{config.kinematics.boundary_policy}'"
        )
    if config.kinematics.max_velocity <= 0:
        raise ValueError(f"max_velocity must be positive, got {config.kinematics.max_velocity}")
    if config.kinematics.flip_min_dwell_ticks < 0:
        raise ValueError("flip_min_dwell_ticks cannot be negative")

    for name, value in (
        ("behavior.lunge_probability", config.behavior.lunge_probability),
        ("spawner.spawn_probability", config.spawner.spawn_probability),
    ):
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"{name} must be in [0, 1], got {value}")

    for name, low, high in (
        ("behavior.lunge_duration", config.behavior.lunge_duration_min,
         config.behavior.lunge_duration_max),
        ("spawner.scale", config.spawner.scale_min, config.spawner.scale_max),
        ("decoration.count", config.decoration.count_min, config.decoration.count_max),
    ):
        if low > high:
            raise ValueError(f"{name}_min ({low}) exceeds {name}_max ({high})")

    if config.behavior.lunge_duration_min < 1:
        raise ValueError("lunge_duration_min must be at least 1 tick")
    if config.decoration.count_min < 0:
        raise ValueError("decoration.count_min cannot be negative")

    if config.spawner.mode not in SPAWN_MODES:
        raise ValueError(f"spawner.mode must be one of {SPAWN_MODES}, got '{config.spawner.mode}'")
    if config.spawner.bubble_velocity >= 0:
        raise ValueError(
            f"bubble_velocity must be negative (upward), got {config.spawner.bubble_velocity}"
        )
    if config.spawner.cooldown_ticks < 0:
        raise ValueError("cooldown_ticks cannot be negative")

    if config.effects.frame_budget <= 0:
        raise ValueError(f"effects.frame_budget must be positive, got {config.effects.frame_budget}")
    if config.effects.fade_step <= 0:
        raise ValueError(f"effects.fade_step must be positive, got {config.effects.fade_step}")


def _read_yaml(config_path: Optional[str]) -> Dict[str, Any]:
    if config_path is None:
        config_path = _default_config_path()

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        return yaml.safe_load(f)


def list_profiles(config_path: Optional[str] = None) -> List[str]:
    """Names of the profiles defined in the config file."""
    raw = _read_yaml(config_path)
    return sorted(raw.get("profiles", {}))


def load_config(
    config_path: Optional[str] = None,
    profile: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None
) -> AquariumConfig:
    """
    Load and validate aquarium configuration from YAML.

    Args:
        config_path: Path to aquarium_config.yaml. If None, uses default location.
        profile: Profile name. If None, uses the file's default_profile.
        overrides: Nested dict merged on top of the profile, e.g.
            {"spawner": {"mode": "random"}}.

    Returns:
        Validated AquariumConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If the profile is unknown or validation fails.
    """
    raw = _read_yaml(config_path)

    profiles = raw.get("profiles", {})
    if profile is None:
        profile = raw.get("default_profile")
    if profile is None:
        merged = copy.deepcopy(raw["defaults"])
        profile = "defaults"
    elif profile not in profiles:
        raise ValueError(f"Unknown profile '{profile}', available: {sorted(profiles)}")
    else:
        merged = _deep_merge(raw["defaults"], profiles[profile] or {})

    if overrides:
        merged = _deep_merge(merged, overrides)

    config = _parse(profile, merged)
    _validate_config(config)
    logger.debug("Loaded aquarium config profile '%s'", profile)
    return config


# Module-level singleton for convenience
_cached_config: Optional[AquariumConfig] = None


def get_config() -> AquariumConfig:
    """Get the cached aquarium configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(
    config_path: Optional[str] = None,
    profile: Optional[str] = None
) -> AquariumConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path, profile)
    return _cached_config
