"""
Capabilities
============

Structural protocols for the collaborators the simulation calls into but does
not implement: a sound player and a pointer input source. Any object with the
right methods satisfies them; the simulation only holds the handles it is
given at construction.

Null and scripted implementations are provided for headless runs and tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol, Tuple, runtime_checkable


@runtime_checkable
class AudioSink(Protocol):
    """Fire-and-forget sound playback."""

    def play_pop(self) -> None:
        """Play the bubble pop sound from the start."""
        ...


@runtime_checkable
class InputSource(Protocol):
    """Pointer input, polled once per tick."""

    def is_trigger_pressed(self) -> bool:
        ...

    def pointer_position(self) -> Tuple[float, float]:
        ...


class NullAudio:
    """Silent audio sink that counts how often it was asked to play."""

    def __init__(self) -> None:
        self.play_count = 0

    def play_pop(self) -> None:
        self.play_count += 1


class NullInput:
    """Input source whose trigger is never pressed."""

    def is_trigger_pressed(self) -> bool:
        return False

    def pointer_position(self) -> Tuple[float, float]:
        return (0.0, 0.0)


@dataclass
class PointerState:
    """Pointer state for one tick."""
    pressed: bool
    x: float = 0.0
    y: float = 0.0


class ScriptedInput:
    """
    Replays a fixed sequence of pointer states, one per poll.

    After the script runs out the trigger reads as released at the last
    known position. Each tick must call is_trigger_pressed() before
    pointer_position(), which is how the spawner polls.
    """

    def __init__(self, states: Iterable[PointerState]):
        self._states: List[PointerState] = list(states)
        self._index = -1
        self._last: Optional[PointerState] = None

    @classmethod
    def hold(cls, x: float, y: float, ticks: int) -> "ScriptedInput":
        """Trigger held down at a fixed position for the given number of ticks."""
        return cls(PointerState(True, x, y) for _ in range(ticks))

    def is_trigger_pressed(self) -> bool:
        self._index += 1
        if self._index < len(self._states):
            self._last = self._states[self._index]
            return self._last.pressed
        if self._last is not None:
            self._last = PointerState(False, self._last.x, self._last.y)
        return False

    def pointer_position(self) -> Tuple[float, float]:
        if self._last is None:
            return (0.0, 0.0)
        return (self._last.x, self._last.y)
