"""Simulation engine for driving models tick by tick."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, TypeVar

from periphsim.core.clock import Clock
from periphsim.interfaces.clock import ClockSubscriber

logger = logging.getLogger(__name__)

V = TypeVar("V")
S = TypeVar("S")


class SimulationEngine:
    """Minimal simulation engine.

    Owns a Clock, attaches models to it and runs stimulus through them:
    for every vector, drive() sets the inputs, the clock takes one edge and
    sample() records what the models present afterwards.
    """

    def __init__(self, clock: Optional[Clock] = None):
        self.clock = clock or Clock()

    def attach(self, model: ClockSubscriber) -> None:
        self.clock.subscribe(model)

    def step(self, cycles: int = 1) -> None:
        """Advance every attached model by a number of cycles."""
        self.clock.tick(cycles)

    def run(
        self,
        stimulus: Iterable[V],
        drive: Callable[[V], None],
        sample: Callable[[], S],
    ) -> list[S]:
        """Apply each stimulus vector for one tick and collect samples."""
        trace: list[S] = []
        for vector in stimulus:
            drive(vector)
            self.clock.tick()
            trace.append(sample())
        logger.debug("Ran %d ticks (cycle=%d)", len(trace), self.clock.cycle_count)
        return trace

    def reset(self) -> None:
        """Reset the clock and every attached model that supports reset()."""
        self.clock.reset()
        for model in self.clock.subscribers:
            reset_fn = getattr(model, "reset", None)
            if callable(reset_fn):
                reset_fn()
