import pytest

from periphsim.core.clock import Clock
from periphsim.core.register import ClockedRegister


class Recorder:
    def __init__(self, log, name):
        self.log = log
        self.name = name

    def evaluate(self) -> None:
        self.log.append(("evaluate", self.name))

    def commit(self) -> None:
        self.log.append(("commit", self.name))


class ShiftStage:
    """Register that loads another register's value on each edge."""

    def __init__(self, source: ClockedRegister):
        self.source = source
        self.reg = ClockedRegister(8)

    def evaluate(self) -> None:
        self.reg.stage(self.source.value)

    def commit(self) -> None:
        self.reg.commit()


class Counter:
    def __init__(self):
        self.reg = ClockedRegister(8)

    def evaluate(self) -> None:
        self.reg.stage(self.reg.value + 1)

    def commit(self) -> None:
        self.reg.commit()


def test_clock_evaluates_all_before_committing_any():
    log = []
    clock = Clock()
    clock.subscribe(Recorder(log, "a"))
    clock.subscribe(Recorder(log, "b"))

    clock.tick()

    assert log == [
        ("evaluate", "a"),
        ("evaluate", "b"),
        ("commit", "a"),
        ("commit", "b"),
    ]


def test_subscription_order_does_not_change_results():
    # The shift stage is subscribed first, so a stepwise update would let
    # it see the counter's post-edge value.
    counter = Counter()
    shift = ShiftStage(counter.reg)
    clock = Clock()
    clock.subscribe(shift)
    clock.subscribe(counter)

    clock.tick(3)

    assert counter.reg.value == 3
    assert shift.reg.value == 2


def test_clock_subscribe_unsubscribe_and_tick():
    log = []
    clock = Clock()
    sub = Recorder(log, "a")

    clock.subscribe(sub)
    clock.subscribe(sub)  # should not duplicate
    clock.tick(2)

    assert clock.cycle_count == 2
    assert len(log) == 4

    clock.unsubscribe(sub)
    clock.tick(2)
    assert len(log) == 4  # no new calls after unsubscribe
    assert clock.cycle_count == 4


def test_clock_rejects_non_clocked_subscriber():
    clock = Clock()
    with pytest.raises(TypeError):
        clock.subscribe(object())


def test_clock_reset():
    clock = Clock()
    clock.tick(4)
    clock.reset()
    assert clock.cycle_count == 0


def test_clock_negative_cycles():
    clock = Clock()
    with pytest.raises(ValueError):
        clock.tick(-1)


def test_clock_zero_cycles_is_noop():
    log = []
    clock = Clock()
    clock.subscribe(Recorder(log, "a"))
    clock.tick(0)
    assert log == []
    assert clock.cycle_count == 0
