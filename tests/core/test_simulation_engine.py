from periphsim.core.clock import Clock
from periphsim.core.register import ClockedRegister
from periphsim.core.simulation_engine import SimulationEngine


class Latch:
    """Registers whatever input was driven before the edge."""

    def __init__(self):
        self.input = 0
        self.reg = ClockedRegister(8)
        self.resets = 0

    def evaluate(self) -> None:
        self.reg.stage(self.input)

    def commit(self) -> None:
        self.reg.commit()

    def reset(self) -> None:
        self.resets += 1
        self.reg.reset()


def test_simulation_engine_run_collects_one_sample_per_vector():
    latch = Latch()
    engine = SimulationEngine()
    engine.attach(latch)

    def drive(value):
        latch.input = value

    trace = engine.run([3, 1, 4], drive, lambda: latch.reg.value)

    assert trace == [3, 1, 4]
    assert engine.clock.cycle_count == 3


def test_simulation_engine_step_and_reset():
    latch = Latch()
    engine = SimulationEngine(Clock())
    engine.attach(latch)

    latch.input = 9
    engine.step(2)
    assert latch.reg.value == 9

    engine.reset()
    assert engine.clock.cycle_count == 0
    assert latch.resets == 1
    assert latch.reg.value == 0
