"""Clock interface for simulation timing and two-phase tick propagation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable


@runtime_checkable
class ClockSubscriber(Protocol):
    """Anything that advances on clock edges.

    A clock edge is split in two so that every subscriber sees the same
    pre-edge state: evaluate() computes next values from current state and
    inputs, commit() makes them current. The clock calls evaluate() on all
    subscribers before it calls commit() on any.
    """

    def evaluate(self) -> None:
        """Compute next state from the current state and driven inputs."""
        ...

    def commit(self) -> None:
        """Apply the state computed by the last evaluate()."""
        ...


class IClock(ABC):
    """Clock interface used by models and the simulation engine."""

    @property
    @abstractmethod
    def cycle_count(self) -> int:
        """Total number of cycles elapsed."""
        ...

    @abstractmethod
    def subscribe(self, subscriber: ClockSubscriber) -> None:
        """Subscribe a component to clock edges."""
        ...

    @abstractmethod
    def unsubscribe(self, subscriber: ClockSubscriber) -> None:
        """Unsubscribe a component from clock edges."""
        ...

    @abstractmethod
    def tick(self, cycles: int = 1) -> None:
        """Advance the clock and step subscribers once per cycle."""
        ...

    @abstractmethod
    def reset(self) -> None:
        """Reset cycle count to zero."""
        ...
