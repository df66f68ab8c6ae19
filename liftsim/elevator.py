"""Elevators that carry passengers between floors."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from enum import IntEnum
from typing import Any

from liftsim.passenger import now_ms


class Direction(IntEnum):
    UP = 1
    DOWN = -1
    STOP = 0


class Elevator:
    """An elevator that stops at its accessible floors and serves its group's queues.

    ``ding_stage`` tracks a stop: 1 while passengers alight, 2 while they
    board, 3 when the stop is done, 0 when travelling.
    """

    def __init__(
        self,
        elevator_id: int,
        conf: dict[str, Any],
        *,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.id = elevator_id
        self.conf = conf
        self.group_id = 0
        self.group: list[Elevator] = []
        self.monitor: Any = None
        self.direction = Direction.STOP
        self.running = False
        self.full = False
        self.ding_stage = 0
        self.current_floor: Any = None
        self.passengers: list[Any] = []
        self.floors: list[Any] = []
        self.accessible_floors: list[Any] = []
        # floor -> passengers to board or alight there
        self._registry: dict[Any, list[Any]] = {}
        self._clock = clock
        self._refresh_stamp = 0
        self._statistic_stamp = clock()

    @property
    def _capacity(self) -> int:
        return int(self.conf["elevator.capacity"])

    @property
    def load(self) -> int:
        return len(self.passengers)

    @property
    def free_space(self) -> int:
        return self._capacity - len(self.passengers)

    def _set_refresh_time(self) -> None:
        self._refresh_stamp = self._clock()

    def _statistic_time(self) -> int:
        now = self._clock()
        gap = now - self._statistic_stamp
        self._statistic_stamp = now
        return gap

    def run(self) -> None:
        """Advance the elevator: continue a stop or move one floor when due."""
        gap = self._statistic_time()
        if self.monitor is not None:
            self.monitor.add_elevator_statistic(self, gap)
        if not self.running:
            return
        if self.ding_stage:
            self.ding()
            return
        speed = int(self.conf["elevator.speed"])
        time_unit = int(self.conf["simulator.timeUnitMillisecond"])
        if self._clock() - self._refresh_stamp > speed * time_unit:
            next_floor = self.current_floor.id - 1 + self.direction
            if not 0 <= next_floor < len(self.floors):
                raise IndexError(f"elevator {self.id}: floor index ({next_floor}) out of range.")
            self.current_floor = self.floors[next_floor]
            self.ding()

    def register_passenger(self, passenger: Any) -> bool:
        """Register a request; return True if this elevator took the passenger at once."""
        pas_floor = passenger.current_floor
        dest_floor = self.floors[passenger.destination - 1]
        self._registry.setdefault(pas_floor, []).append(passenger)
        if not self.running:
            self.running = True
            if self.current_floor is pas_floor:
                self.direction = Direction.UP if dest_floor.id > self.current_floor.id else Direction.DOWN
                self.ding_stage = 2
                self._board()
                return True
            self.direction = Direction.UP if pas_floor.id > self.current_floor.id else Direction.DOWN
            self._set_refresh_time()
        return False

    def ding(self) -> None:
        """Handle a stop at the current floor."""
        if self.ding_stage == 0:
            self.ding_stage = 1
        if self.ding_stage == 1:
            self._alight()
        if self.ding_stage == 2:
            self._board()
        if self.ding_stage == 3:
            self.ding_stage = 0
            if not self.passengers:
                self.direction = self._choose_direction()
                if self.direction == Direction.STOP:
                    self.running = False
                elif self.current_floor.boarding_queue(self):
                    self.ding_stage = 2
                    self._board()

    def _board(self) -> None:
        floor = self.current_floor
        queue = deque(floor.boarding_queue(self))
        capacity = self._capacity

        # skip passengers already boarding another elevator of the group
        while queue and queue[0].current_elevator is not None and queue[0].current_elevator is not self:
            queue.popleft()

        while queue and len(self.passengers) < capacity:
            self.ding_stage = 2
            passenger = queue[0]
            if passenger.current_elevator is None:
                for member in self.group:
                    waiting = member._registry.get(floor)
                    if waiting:
                        waiting[:] = [p for p in waiting if p is not passenger]
            if not passenger.timer(self):
                break
            self._registry.setdefault(self.floors[passenger.destination - 1], []).append(passenger)
            passenger.board(self)
            self.passengers.append(passenger)
            queue.popleft()

        self.full = len(self.passengers) == capacity
        if not queue or len(self.passengers) >= capacity:
            self.ding_stage = 3
            self._set_refresh_time()

    def _alight(self) -> None:
        self.ding_stage = 2
        floor = self.current_floor
        entries = self._registry.setdefault(floor, [])
        for passenger in list(entries):
            if passenger.destination != floor.id:
                continue
            self.ding_stage = 1
            if not passenger.timer(self):
                break
            passenger.alight(floor)
            self.passengers[:] = [p for p in self.passengers if p is not passenger]
            entries.remove(passenger)
            self.ding_stage = 2

    def _choose_direction(self) -> Direction:
        current = self.current_floor.id
        result = Direction.STOP
        for floor, waiting in self._registry.items():
            if waiting:
                if (floor.id - current) * self.direction > 0:
                    return self.direction
                result = Direction(-self.direction)
        return result

    def is_accessible(self, floor_id: int) -> bool:
        """Tell whether this elevator stops at floor ``floor_id``."""
        return any(floor.id == floor_id for floor in self.accessible_floors)

    def add_accessible_floor(self, floor: Any) -> None:
        """Add ``floor`` to the floors this elevator stops at."""
        self.accessible_floors.append(floor)

    def alighting_count(self, floor: Any) -> int:
        """Number of registered passengers who will get off at ``floor``."""
        return sum(p.destination == floor.id for p in self._registry.get(floor, []))