import pytest

from periphsim.core.exceptions import WidthMismatch
from periphsim.gpio.edge_detect import EdgeVectors
from periphsim.gpio.interrupts import (
    InterruptController,
    InterruptEnables,
    detect_interrupts,
    next_status,
)

NO_EDGES = EdgeVectors(rising=0, falling=0)


def _edge(ctrl, edges=NO_EDGES, level=0):
    ctrl.evaluate(edges, level)
    ctrl.commit()


class TestDetectInterrupts:
    def test_each_source_is_gated_by_its_enable(self):
        enables = InterruptEnables(rising=0x1, falling=0x2, level_high=0x4, level_low=0x8)
        edges = EdgeVectors(rising=0xF, falling=0xF)
        # level bit2 high, bit3 low
        assert detect_interrupts(enables, edges, level=0b0100, width=4) == 0xF

    def test_disabled_sources_detect_nothing(self):
        edges = EdgeVectors(rising=0xFFFF_FFFF, falling=0xFFFF_FFFF)
        assert detect_interrupts(InterruptEnables(), edges, level=0xFFFF_FFFF) == 0

    def test_level_low_uses_inverted_level_within_width(self):
        enables = InterruptEnables(level_low=0xFF)
        assert detect_interrupts(enables, NO_EDGES, level=0xF0, width=8) == 0x0F

    def test_next_status_clear_after_set(self):
        assert next_status(status=0b0001, detected=0b0110, clear_mask=0b0010) == 0b0101


class TestInterruptController:
    def test_status_is_sticky_until_cleared(self):
        ctrl = InterruptController(InterruptEnables(rising=0x1))
        _edge(ctrl, EdgeVectors(rising=0x1, falling=0))
        assert ctrl.status == 0x1

        for _ in range(5):
            _edge(ctrl)
        assert ctrl.status == 0x1

        ctrl.clear(0x1)
        assert ctrl.status == 0x1  # clear lands at the edge
        _edge(ctrl)
        assert ctrl.status == 0x0

    def test_detect_and_clear_in_same_tick_ends_cleared(self):
        ctrl = InterruptController(InterruptEnables(rising=0x1))
        ctrl.clear(0x1)
        _edge(ctrl, EdgeVectors(rising=0x1, falling=0))
        assert ctrl.status == 0x0
        assert ctrl.last_detected == 0x1

    def test_clear_only_touches_selected_bits(self):
        ctrl = InterruptController(InterruptEnables(level_high=0xF), width=4)
        _edge(ctrl, level=0xF)
        ctrl.clear(0x3)
        _edge(ctrl, level=0x0)
        assert ctrl.status == 0xC

    def test_clears_before_one_edge_accumulate(self):
        ctrl = InterruptController(InterruptEnables(level_high=0xF), width=4)
        _edge(ctrl, level=0xF)
        ctrl.clear(0x1)
        ctrl.clear(0x8)
        _edge(ctrl)
        assert ctrl.status == 0x6

    def test_clear_is_one_shot(self):
        ctrl = InterruptController(InterruptEnables(rising=0x1))
        ctrl.clear(0x1)
        _edge(ctrl)
        _edge(ctrl, EdgeVectors(rising=0x1, falling=0))
        assert ctrl.status == 0x1

    def test_level_interrupt_reasserts_while_level_holds(self):
        ctrl = InterruptController(InterruptEnables(level_high=0x1))
        _edge(ctrl, level=0x1)
        ctrl.clear(0x1)
        _edge(ctrl, level=0x1)
        assert ctrl.status == 0x0
        _edge(ctrl, level=0x1)
        assert ctrl.status == 0x1

    def test_intr_out_follows_status(self):
        ctrl = InterruptController(InterruptEnables(falling=0x2))
        _edge(ctrl, EdgeVectors(rising=0, falling=0x2))
        assert ctrl.intr_out == ctrl.status == 0x2

    def test_reset_clears_status_and_pending_clear(self):
        ctrl = InterruptController(InterruptEnables(level_high=0x1))
        _edge(ctrl, level=0x1)
        ctrl.set_reset(True)
        assert ctrl.status == 0
        _edge(ctrl, level=0x1)
        assert ctrl.status == 0
        ctrl.set_reset(False)
        _edge(ctrl, level=0x1)
        assert ctrl.status == 1

    def test_enables_must_fit_width(self):
        with pytest.raises(WidthMismatch):
            InterruptController(InterruptEnables(rising=0x100), width=8)

    def test_clear_mask_must_fit_width(self):
        ctrl = InterruptController(width=8)
        with pytest.raises(WidthMismatch):
            ctrl.clear(0x100)

    def test_any_reports_enabled_lines(self):
        enables = InterruptEnables(rising=0x1, falling=0x2, level_high=0x10)
        assert enables.any == 0x13
