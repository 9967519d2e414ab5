"""Two-flop input synchronizer with a third stage for edge comparison."""

from __future__ import annotations

from periphsim.core.bitvec import check_width
from periphsim.core.register import ClockedRegister


class InputSynchronizer:
    """Delay raw pad inputs through a double-flop synchronizer.

    Each clock edge shifts raw -> stage1 -> stage2 -> stage3. stage2 is the
    metastability-safe sample, stage3 the sample from one edge earlier.
    While the raw value for edge N is being driven, sampled() holds the raw
    value driven for edge N-2 and previous() the one for edge N-3.
    """

    def __init__(self, width: int = 32):
        self.width = width
        self._stage1 = ClockedRegister(width, 0, "sync1")
        self._stage2 = ClockedRegister(width, 0, "sync2")
        self._stage3 = ClockedRegister(width, 0, "sync3")
        self._raw = 0

    @property
    def raw(self) -> int:
        return self._raw

    @property
    def stages(self) -> tuple[int, int, int]:
        return (self._stage1.value, self._stage2.value, self._stage3.value)

    def drive(self, raw_input: int) -> None:
        """Set the raw pad level; it stays driven until changed."""
        self._raw = check_width(raw_input, self.width, "raw_input")

    def sampled(self) -> int:
        return self._stage2.value

    def previous(self) -> int:
        return self._stage3.value

    def evaluate(self) -> None:
        self._stage1.stage(self._raw)
        self._stage2.stage(self._stage1.value)
        self._stage3.stage(self._stage2.value)

    def commit(self) -> None:
        self._stage1.commit()
        self._stage2.commit()
        self._stage3.commit()

    def tick(self, raw_input: int) -> None:
        """Drive raw_input and take one clock edge."""
        self.drive(raw_input)
        self.evaluate()
        self.commit()

    def set_reset(self, asserted: bool) -> None:
        for stage in (self._stage1, self._stage2, self._stage3):
            stage.set_reset(asserted)

    def reset(self) -> None:
        for stage in (self._stage1, self._stage2, self._stage3):
            stage.reset()
