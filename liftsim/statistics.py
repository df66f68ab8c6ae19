"""Running statistics for elevators and passenger waiting times."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

SAMPLING_INTERVAL_MS = 5000
DEFAULT_DATA_PATH = Path("data") / "data.json"

_FAST_REFRESH_LIMIT = 36000
_FAST_FLUSH = 10
_SLOW_FLUSH = 100
_RUSH_WAITING_MS = 60 * 1000


class StatisticsView(Protocol):
    """Receiver of statistics updates, usually the main window."""

    def set_elevator_statistics(self, elevator: int, elevator_statistics: tuple[int, int]) -> None: ...

    def set_passenger_statistics(self, passenger_statistics: tuple[int, int, int, int]) -> None: ...


@dataclass
class _Counter:
    """A running total and a buffer that is flushed into it in batches."""

    total: int = 0
    buffer: int = 0

    @property
    def value(self) -> int:
        return self.total + self.buffer

    def add(self, amount: int) -> bool:
        """Add to the buffer; return True when the buffer was flushed."""
        self.buffer += amount
        threshold = _FAST_FLUSH if self.total < _FAST_REFRESH_LIMIT else _SLOW_FLUSH
        if self.buffer >= threshold:
            self.total += self.buffer
            self.buffer = 0
            return True
        return False


@dataclass
class _ElevatorTimes:
    idle: _Counter
    running: _Counter


class Statistics:
    """Collects idle/running times per elevator and passenger waiting times.

    Estimated waiting times per sampling interval are kept as history and
    persisted in a JSON file between runs.
    """

    def __init__(
        self,
        elevator_num: int,
        window: StatisticsView | None = None,
        *,
        path: str | Path = DEFAULT_DATA_PATH,
        base_timestamp: int = 0,
        time_unit: int = 1000,
    ) -> None:
        self.window = window
        self.path = Path(path)
        self.base_timestamp = base_timestamp
        self.time_unit = time_unit
        self._elevators = [_ElevatorTimes(_Counter(), _Counter()) for _ in range(elevator_num)]
        self._waiting_times: list[int] = []
        # per elevator: time division -> [total waiting time, count]
        self._history: list[dict[int, list[int]]] = [{} for _ in range(elevator_num)]
        self.load()

    @property
    def _ratio(self) -> int:
        return 1000 // self.time_unit

    def _record(self, elevator: int, counter: _Counter, time: int) -> None:
        if not time:
            return
        if counter.add(time) and self.window is not None:
            self.window.set_elevator_statistics(elevator, self.elevator_statistics(elevator))

    def add_elevator_idle_time(self, elevator: int, time: int) -> None:
        """Add idle time (ms) for the 0-based elevator."""
        self._record(elevator, self._elevators[elevator].idle, time)

    def add_elevator_running_time(self, elevator: int, time: int) -> None:
        """Add running time (ms) for the 0-based elevator."""
        self._record(elevator, self._elevators[elevator].running, time)

    def add_passenger_waiting_time(self, elevator: int, start: int, end: int) -> None:
        """Record a passenger who waited from ``start`` to ``end`` (ms timestamps)."""
        gap = end - start
        self._waiting_times.append(gap)
        if self.window is not None:
            self.window.set_passenger_statistics(self.passenger_statistics())

        ratio = self._ratio
        division = (start - self.base_timestamp) * ratio // SAMPLING_INTERVAL_MS * SAMPLING_INTERVAL_MS
        entry = self._history[elevator].setdefault(division, [0, 0])
        entry[0] += gap * ratio
        entry[1] += 1

    def elevator_statistics(self, elevator: int) -> tuple[int, int]:
        """Return (idle time, running time) in ms for the 0-based elevator."""
        times = self._elevators[elevator]
        return times.idle.value, times.running.value

    def passenger_statistics(self) -> tuple[int, int, int, int]:
        """Return (mean, maximum, mode, median) of the waiting times in ms.

        The mode is taken over waiting times rounded to whole seconds; ties go
        to the shortest time.
        """
        waits = self._waiting_times
        if not waits:
            raise ValueError("no passenger waiting times recorded")
        mean = sum(waits) // len(waits)
        maximum = max(waits)
        buckets: dict[int, int] = {}
        for wait in waits:
            key = (wait + 500) // 1000 * 1000
            buckets[key] = buckets.get(key, 0) + 1
        mode = max(sorted(buckets), key=lambda key: buckets[key])
        median = sorted(waits)[len(waits) // 2]
        return mean, maximum, mode, median

    def estimated_waiting_time(self, elevator: int) -> dict[int, int]:
        """Return the average waiting time per time division for the 0-based elevator."""
        if not 0 <= elevator < len(self._elevators):
            raise IndexError(f"elevator out of range: {elevator}")
        return {
            division: (total // count if count > 0 else 0)
            for division, (total, count) in sorted(self._history[elevator].items())
        }

    def load(self) -> bool:
        """Load the waiting-time history; return False if the file is absent."""
        try:
            with self.path.open(encoding="utf-8") as handle:
                data = json.load(handle)
        except FileNotFoundError:
            return False
        self._history = [
            {int(division): [int(total), int(count)] for division, (total, count) in elevator}
            for elevator in data
        ]
        return True

    def save(self) -> bool:
        """Write the waiting-time history; return False if the file cannot be opened."""
        data = [
            [[division, [total, count]] for division, (total, count) in sorted(history.items())]
            for history in self._history
        ]
        try:
            with self.path.open("w", encoding="utf-8") as handle:
                handle.write(json.dumps(data, indent=2))
        except OSError:
            return False
        return True

    def is_rush_hour(self, elevator: int, time: int) -> bool:
        """Tell whether the 1-based elevator has had long waits around ``time``."""
        if not 0 < elevator <= len(self._history):
            raise IndexError(f"elevator out of range: {elevator}")
        relative = (time - self.base_timestamp) * self._ratio // SAMPLING_INTERVAL_MS * SAMPLING_INTERVAL_MS
        start = max(relative - 2 * SAMPLING_INTERVAL_MS, 0)
        end = relative + 2 * SAMPLING_INTERVAL_MS
        history = self._history[elevator - 1]
        for division in range(start, end + 1, SAMPLING_INTERVAL_MS):
            total, count = history.setdefault(division, [0, 0])
            waiting = total // count if count else 0
            if waiting > _RUSH_WAITING_MS:
                return True
        return False