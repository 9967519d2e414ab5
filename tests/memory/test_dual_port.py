import logging

import pytest

from periphsim.core.exceptions import InvalidConfig, OutOfRange, WidthMismatch
from periphsim.memory.dual_port import Collision, DualPortMemoryCore


@pytest.fixture
def core():
    init = [0] * 16
    init[5] = 0x1111
    return DualPortMemoryCore(depth=16, word_width=16, initializer=init)


class TestReadFirst:
    def test_write_returns_old_value_then_new(self, core):
        assert core.access("a", 5, write_enable=True, write_data=0x2222) == 0x1111
        assert core.peek(5) == 0x2222
        assert core.access("a", 5) == 0x2222

    def test_other_port_sees_write_from_next_edge(self, core):
        core.drive("a", 5, write_enable=True, write_data=0x2222)
        core.drive("b", 5)
        core.tick()
        # both ports read the pre-edge array; this edge is a collision
        assert core.read_data("b") == 0x1111

        core.drive("a", 0)
        core.tick()
        assert core.read_data("b") == 0x2222

    def test_ports_are_independent_on_distinct_addresses(self, core):
        core.drive("a", 1, write_enable=True, write_data=0xAAAA)
        core.drive("b", 2, write_enable=True, write_data=0xBBBB)
        core.tick()
        assert (core.peek(1), core.peek(2)) == (0xAAAA, 0xBBBB)
        assert core.collisions == []


class TestEnable:
    def test_disabled_port_holds_and_does_not_write(self, core):
        assert core.access("a", 5) == 0x1111
        value = core.access("a", 3, write_enable=True, write_data=0xFFFF, enable=False)
        assert value == 0x1111
        assert core.peek(3) == 0

    def test_disabled_port_takes_part_in_no_collision(self, core):
        core.drive("a", 4, write_enable=True, write_data=0x1)
        core.drive("b", 4, write_enable=True, write_data=0x2, enable=False)
        core.tick()
        assert core.collisions == []
        assert core.peek(4) == 0x1


class TestCollisions:
    def test_same_address_writes_are_recorded(self, core, caplog):
        core.drive("a", 7, write_enable=True, write_data=0x00AA)
        core.drive("b", 7, write_enable=True, write_data=0x00BB)
        with caplog.at_level(logging.WARNING, logger="periphsim.memory.dual_port"):
            core.tick()

        assert core.collisions == [Collision(cycle=0, address=7, writers=("a", "b"))]
        assert core.peek(7) in (0x00AA, 0x00BB)
        assert "collision" in caplog.text

    def test_collision_does_not_corrupt_other_cells(self, core):
        before = core.cells
        core.drive("a", 7, write_enable=True, write_data=0x00AA)
        core.drive("b", 7, write_data=0)
        core.tick()
        after = core.cells
        assert [i for i in range(core.depth) if before[i] != after[i]] == [7]
        assert core.collisions[0].writers == ("a",)

    def test_same_address_reads_are_not_collisions(self, core):
        core.drive("a", 5)
        core.drive("b", 5)
        core.tick()
        assert core.collisions == []
        assert core.read_data("a") == core.read_data("b") == 0x1111


class TestIdle:
    def test_idle_reads_change_nothing(self, core):
        core.drive("a", 5)
        core.drive("b", 6)
        core.tick()
        cells = core.cells
        outputs = (core.read_data("a"), core.read_data("b"))
        for _ in range(20):
            core.tick()
        assert core.cells == cells
        assert (core.read_data("a"), core.read_data("b")) == outputs


class TestPerPortClock:
    def test_tick_port_only_clocks_one_port(self, core):
        core.drive("a", 5)
        core.drive("b", 5)
        core.tick_port("a")
        assert core.read_data("a") == 0x1111
        assert core.read_data("b") == 0
        assert core.ports["a"].cycles == 1
        assert core.ports["b"].cycles == 0

    def test_port_names_are_case_insensitive(self, core):
        assert core.access("A", 5) == 0x1111

    def test_unknown_port_rejected(self, core):
        with pytest.raises(ValueError):
            core.drive("c", 0)


class TestValidation:
    @pytest.mark.parametrize("address", [-1, 16, 1000])
    def test_out_of_range_address(self, core, address):
        with pytest.raises(OutOfRange) as exc_info:
            core.drive("a", address)
        assert exc_info.value.details == {"address": address, "depth": 16}

    def test_peek_out_of_range(self, core):
        with pytest.raises(OutOfRange):
            core.peek(16)

    def test_write_data_too_wide(self, core):
        with pytest.raises(WidthMismatch):
            core.drive("a", 0, write_enable=True, write_data=0x1_0000)

    @pytest.mark.parametrize("depth, width", [(0, 8), (-4, 8), (8, 0)])
    def test_bad_geometry(self, depth, width):
        with pytest.raises(InvalidConfig):
            DualPortMemoryCore(depth=depth, word_width=width)

    def test_initializer_too_long(self):
        with pytest.raises(InvalidConfig):
            DualPortMemoryCore(depth=2, word_width=8, initializer=[1, 2, 3])

    def test_initializer_word_too_wide(self):
        with pytest.raises(WidthMismatch):
            DualPortMemoryCore(depth=2, word_width=8, initializer=[0x100])

    def test_short_initializer_zero_fills(self):
        core = DualPortMemoryCore(depth=4, word_width=8, initializer=[9])
        assert core.cells == (9, 0, 0, 0)


def test_reset_restores_initial_contents(core):
    core.access("a", 5, write_enable=True, write_data=0x0)
    core.reset()
    assert core.peek(5) == 0x1111
    assert core.read_data("a") == 0
    assert core.cycle == 0
    assert core.collisions == []
