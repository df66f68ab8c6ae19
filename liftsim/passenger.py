"""Passengers who travel between floors and finally leave the building."""

from __future__ import annotations

import itertools
import random
import time
from collections.abc import Callable
from typing import Any, ClassVar


def now_ms() -> int:
    """Current wall-clock time in milliseconds."""
    return time.time_ns() // 1_000_000


_shared_rng = random.Random()


class Passenger:
    """A passenger spawned on a floor who visits a random number of floors."""

    _ids: ClassVar[itertools.count] = itertools.count(1)

    def __init__(
        self,
        building: Any,
        floor: Any,
        conf: dict[str, Any],
        *,
        rng: random.Random | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.building = building
        self.current_floor = floor
        self.conf = conf
        self.monitor: Any = None
        self.current_elevator: Any = None
        self.id = next(self._ids)
        self._rng = rng if rng is not None else _shared_rng
        self._clock = clock

        self._floor_count = int(conf["building.floors"])
        self.boarding_time = self._rng.randint(*conf["passenger.boardingTimeRange"])
        self.active_time = 0  # the first request is made as soon as the passenger arrives
        self.total_destinations = self._rng.randint(*conf["passenger.totalDestinationRange"])
        self.visited = 0
        self.original_floor = floor.id
        self.destination = self.original_floor
        self.activated = False
        self._timing = False
        self._timer_stamp = 0
        self.waiting_stamp = 0

        floor.add_passenger(self)
        self._refresh_stamp = self._clock()

    @property
    def _time_unit(self) -> int:
        return int(self.conf["simulator.timeUnitMillisecond"])

    def run(self) -> None:
        """Request an elevator once the passenger's active time has passed."""
        if self.activated or self._clock() - self._refresh_stamp <= self.active_time * self._time_unit:
            return
        self.activated = True
        self.waiting_stamp = self._clock()
        self._choose_destination()
        if self.current_floor is None:
            raise RuntimeError(f"passenger {self.id}: current floor is null.")
        self.current_floor.request_elevator(self)

    def timer(self, elevator: Any) -> bool:
        """Advance boarding/alighting; return True once the passenger is through the door."""
        now = self._clock()
        if not self._timing:
            self._timing = True
            self.current_elevator = elevator
            self._timer_stamp = now
            if self.monitor is not None:
                self.monitor.add_passenger_waiting_time(elevator.id - 1, self.waiting_stamp, now)
            return False
        if now - self._timer_stamp > self.boarding_time * self._time_unit:
            self._timing = False
            return True
        return False

    def _choose_destination(self) -> None:
        if self.visited == self.total_destinations:
            self.destination = 1
            return
        while self.destination == self.original_floor:
            self.destination = self._rng.randint(1, self._floor_count)
            # the last floor visited before leaving cannot be the ground floor
            while self.visited == self.total_destinations - 1 and self.destination == 1:
                self.destination = self._rng.randint(1, self._floor_count)

    def board(self, elevator: Any) -> None:
        """Leave the current floor to enter ``elevator``."""
        if self.current_floor is None:
            raise RuntimeError(f"passenger {self.id}: current floor is null.")
        self.current_floor.remove_passenger(self, elevator)
        self.current_floor = None

    def alight(self, floor: Any) -> None:
        """Step out onto ``floor``; leave the building after the last visit."""
        self.visited += 1
        self.current_floor = floor
        self.current_elevator = None
        floor.add_passenger(self)
        self.original_floor = floor.id
        self.active_time = self._rng.randint(*self.conf["passenger.activeTimeRange"])
        self.activated = False
        self._refresh_stamp = self._clock()
        if self.visited == self.total_destinations + 1:
            floor.leave_building(self)