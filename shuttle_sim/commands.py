"""
Shuttle Ascent Simulation - Input Commands

External input (keyboard, UI, tests) is decoupled from the simulation core
through a small command queue. Commands are queued at any time and drained
by the orchestrator once, at the start of the next tick.
"""

from collections import deque
from dataclasses import dataclass
from typing import Any, Iterator, Union


@dataclass(frozen=True)
class BeginAscent:
    """Manual launch: IDLE -> LIFTOFF."""
    pass


@dataclass(frozen=True)
class SetStage:
    """Force the flight stage (manual testing / control)."""
    stage: Any


@dataclass(frozen=True)
class RequestDetach:
    """Debug: detach a component immediately."""
    component: Any


@dataclass(frozen=True)
class SetManeuveringEngines:
    """Command the orbital maneuvering engines on or off."""
    on: bool


Command = Union[BeginAscent, SetStage, RequestDetach, SetManeuveringEngines]


class CommandQueue:
    """FIFO of pending commands, polled once per tick."""

    def __init__(self):
        self._pending = deque()

    def push(self, command: Command):
        self._pending.append(command)

    def drain(self) -> Iterator[Command]:
        """Yield and remove every pending command in arrival order."""
        while self._pending:
            yield self._pending.popleft()

    def __len__(self) -> int:
        return len(self._pending)
