import random

import pytest

from periphsim.core.exceptions import WidthMismatch
from periphsim.gpio.synchronizer import InputSynchronizer


def test_sampled_lags_raw_by_two_ticks_and_previous_by_three():
    rng = random.Random(2024)
    sequence = [rng.getrandbits(32) for _ in range(50)]
    sync = InputSynchronizer(width=32)

    for n, raw in enumerate(sequence):
        expected_sampled = sequence[n - 2] if n >= 2 else 0
        expected_previous = sequence[n - 3] if n >= 3 else 0
        assert sync.sampled() == expected_sampled
        assert sync.previous() == expected_previous
        sync.tick(raw)


def test_stages_shift_on_each_tick():
    sync = InputSynchronizer(width=8)
    sync.tick(0x11)
    assert sync.stages == (0x11, 0x00, 0x00)
    sync.tick(0x22)
    assert sync.stages == (0x22, 0x11, 0x00)
    sync.tick(0x33)
    assert sync.stages == (0x33, 0x22, 0x11)


def test_driven_input_persists_across_edges():
    sync = InputSynchronizer(width=4)
    sync.drive(0x5)
    for _ in range(3):
        sync.evaluate()
        sync.commit()
    assert sync.stages == (0x5, 0x5, 0x5)
    assert sync.raw == 0x5


def test_reset_clears_all_stages():
    sync = InputSynchronizer(width=8)
    for value in (1, 2, 3):
        sync.tick(value)

    sync.set_reset(True)
    assert sync.stages == (0, 0, 0)
    sync.tick(0xFF)
    assert sync.stages == (0, 0, 0)

    sync.set_reset(False)
    sync.tick(0xFF)
    assert sync.stages == (0xFF, 0xFF, 0)

    sync.reset()
    assert sync.stages == (0, 0, 0)


def test_raw_input_wider_than_width_raises():
    sync = InputSynchronizer(width=8)
    with pytest.raises(WidthMismatch):
        sync.tick(0x100)
