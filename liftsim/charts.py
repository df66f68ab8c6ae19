"""Statistics panel: idle/running pies per elevator and waiting-time bars."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

CATEGORIES = ("Mean", "Maximum", "Mode", "Median")
COLUMN = 5

_DECIMAL_FORMAT = "%.1f s"
_INTEGER_FORMAT = "%d s"


@dataclass
class _Slice:
    label: str
    value: float


class Chart:
    """Per-elevator idle/running pie charts and a passenger waiting-time bar chart."""

    def __init__(self, elevator_num: int) -> None:
        self.elevator_num = elevator_num
        self.pies = [
            [_Slice("Idle: 0 s", 1), _Slice("Running: 0 s", 1)] for _ in range(elevator_num)
        ]
        self.bars = [0.0, 0.0, 0.0, 0.0]
        self.axis_max = 1.0
        self.label_format = _DECIMAL_FORMAT

    def set_elevator_statistics(self, elevator: int, elevator_statistics: Sequence[int]) -> None:
        """Update the pie of the 0-based elevator with (idle ms, running ms)."""
        slices = self.pies[elevator]
        for piece, name, value in zip(slices, ("Idle", "Running"), elevator_statistics[:2]):
            if int(piece.value) != value:
                piece.value = float(value)
                piece.label = f"{name}: {value // 1000} s"

    def set_passenger_statistics(self, passenger_statistics: Sequence[int]) -> None:
        """Update the bars with (mean, maximum, mode, median) waiting times in ms."""
        if len(passenger_statistics) != 4:
            raise ValueError("passenger statistics must have exactly 4 values")
        maximum = passenger_statistics[1] / 1000.0
        if self.bars[1] != maximum:
            if maximum * 1.1 > self.axis_max:
                if self.label_format == _DECIMAL_FORMAT and maximum * 1.1 >= 10:
                    self.label_format = _INTEGER_FORMAT
                self.axis_max = maximum * 1.1
            self.bars[1] = maximum
        for i, value in enumerate(passenger_statistics):
            if i != 1:
                self.bars[i] = value / 1000.0

    def _format_value(self, value: float) -> str:
        if self.label_format == _INTEGER_FORMAT:
            return _INTEGER_FORMAT % int(value)
        return _DECIMAL_FORMAT % value

    def render(self) -> str:
        """Text summary of the pies and bars."""
        lines = []
        for i, (idle, running) in enumerate(self.pies):
            lines.append(f"E{i + 1}: {idle.label}, {running.label}")
        lines.append("Passenger Waiting Time")
        for name, value in zip(CATEGORIES, self.bars):
            lines.append(f"  {name}: {self._format_value(value)}")
        return "\n".join(lines)