"""
Aquarium Core - the per-tick simulation.

Main exports:
- Aquarium: the simulation (one step() per rendered frame)
- AquariumConfig: configuration loaded from aquarium_config.yaml
- AquariumSnapshot: read-only state handed to renderers
- NullAudio, NullInput, ScriptedInput: capability stand-ins for headless runs
"""

from aquarium.core.config_loader import AquariumConfig, load_config, list_profiles
from aquarium.core.entities import Fish, Bubble, Seaweed, PopEffect
from aquarium.core.behavior import BehaviorMode, BehaviorSelector
from aquarium.core.capabilities import (
    AudioSink,
    InputSource,
    NullAudio,
    NullInput,
    PointerState,
    ScriptedInput,
)
from aquarium.core.state_snapshot import AquariumSnapshot
from aquarium.core.simulation import Aquarium, StepResult

__all__ = [
    "AquariumConfig",
    "load_config",
    "list_profiles",
    "Fish",
    "Bubble",
    "Seaweed",
    "PopEffect",
    "BehaviorMode",
    "BehaviorSelector",
    "AudioSink",
    "InputSource",
    "NullAudio",
    "NullInput",
    "PointerState",
    "ScriptedInput",
    "AquariumSnapshot",
    "Aquarium",
    "StepResult",
]
