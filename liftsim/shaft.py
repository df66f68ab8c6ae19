"""Display state of one elevator shaft and its estimated-waiting-time chart."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

LINE_WIDTH = 72
LINE_HEIGHT = 25
PADDING = 0
BOTTOM_MARGIN = 40
PIC_WIDTH = LINE_HEIGHT - PADDING

LOAD_LABEL_QSS = "border:2px groove gray;border-radius:5px;"
_FLOOR_DEFAULT_STYLE = "background-color:#ECECEC;border:none;"


def format_count(n: int) -> str:
    """Text for a floor counter: blank for zero, capped at ``99+``."""
    if n == 0:
        return ""
    if n > 99:
        return "99+"
    return str(n)


@dataclass(frozen=True)
class _Rect:
    x: int
    y: int
    width: int
    height: int


class LineChart:
    """Line chart of the average waiting time per time division, in seconds."""

    def __init__(self) -> None:
        self.title = ""
        self.points: list[tuple[float, float]] = []
        self.visible = False

    def set_data(self, elevator_id: int, estimated_waiting_time: dict[int, int]) -> None:
        """Replace the plotted points with ``estimated_waiting_time`` (ms -> ms) and show the chart."""
        self.points = [
            (float(division // 1000), float(waiting // 1000))
            for division, waiting in sorted(estimated_waiting_time.items())
        ]
        self.title = f"E{elevator_id} Estimated Waiting Time"
        self.visible = True


class ElevatorShaft:
    """One elevator shaft: the car position, per-floor counters, floor colours and load."""

    def __init__(self, elevator_id: int, floor_num: int, speed: int) -> None:
        self.id = elevator_id
        self.floor_num = floor_num
        self.animation_duration = speed
        self.monitor: Any = None
        self.line_chart = LineChart()
        self.width = PIC_WIDTH + LINE_WIDTH
        self.height = LINE_HEIGHT * floor_num - PADDING + BOTTOM_MARGIN
        self.elevator_floor = 0
        self.geometry = _Rect(0, (floor_num - 1) * LINE_HEIGHT, PIC_WIDTH, PIC_WIDTH)
        self.animation: tuple[_Rect, _Rect] | None = None
        # index 0 is the ground floor; each entry is (upside, downside, alight) text
        self.floor_labels: list[tuple[str, str, str]] = [("", "", "")] * floor_num
        self.floor_styles: list[str] = [_FLOOR_DEFAULT_STYLE] * floor_num
        self.load_text = "0"
        self.load_style = "color:black;background-color:white;" + LOAD_LABEL_QSS

    def _check_floor(self, floor_num: int) -> None:
        if not 0 <= floor_num < self.floor_num:
            raise ValueError("floor number out of range")

    def _y_of(self, floor: int) -> int:
        return LINE_HEIGHT * (self.floor_num - 1 - floor)

    def move_elevator(self, start: int, end: int) -> None:
        """Animate the car from 0-based floor ``start`` to ``end``."""
        begin = _Rect(0, self._y_of(start), PIC_WIDTH, PIC_WIDTH)
        finish = _Rect(0, self._y_of(end), PIC_WIDTH, PIC_WIDTH)
        self.animation = (begin, finish)
        self.geometry = finish
        self.elevator_floor = end

    def set_floor_info(self, floor_num: int, upside_num: int, downside_num: int, alight_num: int) -> None:
        """Show the waiting and alighting counts of 0-based floor ``floor_num``."""
        self._check_floor(floor_num)
        self.floor_labels[floor_num] = (
            format_count(upside_num),
            format_count(downside_num),
            format_count(alight_num),
        )

    def set_load_info(self, load: int, color: str) -> None:
        """Show the car's load on a button of the given colour."""
        self.load_text = str(load)
        if color == "red":
            self.load_style = "color:white;background-color:red;" + LOAD_LABEL_QSS
        else:
            self.load_style = f"color:black;background-color:{color};" + LOAD_LABEL_QSS

    def set_floor_color(self, floor_num: int, color: str) -> None:
        """Paint the background of 0-based floor ``floor_num``."""
        self._check_floor(floor_num)
        self.floor_styles[floor_num] = f"background-color:{color};border:none;border-radius:none;"

    def show_waiting_chart(self) -> None:
        """Fill the line chart with this elevator's estimated waiting times."""
        if self.monitor is None:
            raise RuntimeError(f"elevator shaft {self.id}: no monitor attached")
        self.line_chart.set_data(self.id, self.monitor.estimated_waiting_time(self.id - 1))

    def render(self) -> str:
        """Text picture of the shaft, top floor first, followed by the load."""
        lines = []
        for floor in reversed(range(self.floor_num)):
            car = "[E]" if floor == self.elevator_floor else " | "
            up, down, alight = self.floor_labels[floor]
            lines.append(f"{floor + 1:>3} {car} {up:>3} {down:>3} {alight:>3}")
        lines.append(f"load: {self.load_text}")
        return "\n".join(lines)