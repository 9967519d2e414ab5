"""Clock implementation for simulation timing."""

from __future__ import annotations

from typing import List

from periphsim.interfaces.clock import ClockSubscriber, IClock


class Clock(IClock):
    """Pub/sub clock that steps subscribers in lock-step on tick().

    Each cycle runs evaluate() on every subscriber, then commit() on every
    subscriber, so no subscriber observes another's post-edge state while
    computing its own.
    """

    def __init__(self):
        self._cycle_count = 0
        self._subscribers: List[ClockSubscriber] = []

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    @property
    def subscribers(self) -> tuple[ClockSubscriber, ...]:
        return tuple(self._subscribers)

    def subscribe(self, subscriber: ClockSubscriber) -> None:
        if not isinstance(subscriber, ClockSubscriber):
            raise TypeError(
                f"{type(subscriber).__name__} must provide evaluate() and commit()"
            )
        if subscriber not in self._subscribers:
            self._subscribers.append(subscriber)

    def unsubscribe(self, subscriber: ClockSubscriber) -> None:
        if subscriber in self._subscribers:
            self._subscribers.remove(subscriber)

    def _validate_cycles(self, cycles: int) -> None:
        if cycles < 0:
            raise ValueError("cycles must be >= 0")

    def _edge(self) -> None:
        subscribers = list(self._subscribers)
        for subscriber in subscribers:
            subscriber.evaluate()
        for subscriber in subscribers:
            subscriber.commit()
        self._cycle_count += 1

    def tick(self, cycles: int = 1) -> None:
        self._validate_cycles(cycles)
        for _ in range(cycles):
            self._edge()

    def reset(self) -> None:
        self._cycle_count = 0
