"""The building: floors, elevators and the passengers that move between them."""

from __future__ import annotations

import json
import math
import random
from collections.abc import Callable
from pathlib import Path
from typing import Any

from liftsim.elevator import Elevator
from liftsim.floor import Floor
from liftsim.passenger import Passenger, now_ms

DEFAULT_CONFIG_PATH = Path("data") / "config.json"


def load_config(path: str | Path = DEFAULT_CONFIG_PATH) -> dict[str, Any]:
    """Read the simulator configuration from a JSON file."""
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as handle:
            return json.load(handle)
    except FileNotFoundError:
        raise FileNotFoundError(
            f'Error: File "{path}" not found. Put it at the same directory as this executable.'
        ) from None
    except json.JSONDecodeError as exc:
        raise ValueError(f'Error: File "{path}" is not valid JSON: {exc}') from exc


def _poisson(rng: random.Random, mean: float) -> int:
    """Draw from a Poisson distribution with the given mean."""
    if mean <= 0:
        return 0
    limit = math.exp(-mean)
    count = 0
    product = rng.random()
    while product > limit:
        count += 1
        product *= rng.random()
    return count


class Building:
    """Holds all floors and elevators and spawns passengers on each refresh."""

    def __init__(
        self,
        conf: dict[str, Any] | None = None,
        *,
        config_path: str | Path = DEFAULT_CONFIG_PATH,
        rng: random.Random | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.conf = conf if conf is not None else load_config(config_path)
        self._rng = rng if rng is not None else random.Random()
        self._clock = clock
        self.monitor: Any = None
        self.refresh_stamp = clock()
        self.base_stamp = self.refresh_stamp
        self.total_traffic = 0

        normal_rate, peak_rate = self.conf["simulator.passengerSpawnRate"][:2]
        self._normal_rate = float(normal_rate)
        self._peak_rate = float(peak_rate)
        self.rush_hours = [(int(start), int(end)) for start, end in self.conf["simulator.rushHours"]]

        self.floors = [Floor(self, i, self.conf) for i in range(1, int(self.conf["building.floors"]) + 1)]
        self.elevators = [
            Elevator(i, self.conf, clock=clock) for i in range(1, int(self.conf["elevator.count"]) + 1)
        ]
        self.passengers: list[Passenger] = []

        for elevator in self.elevators:
            elevator.floors = self.floors

        initial_floor = self.floors[int(self.conf["elevator.initialFloor"]) - 1]
        accessible = self.conf["elevator.accessibleFloors"]
        for group_id, members in enumerate(self.conf["elevator.groups"], start=1):
            group = [self.elevators[member - 1] for member in members]
            for elevator in group:
                elevator.group_id = group_id
                elevator.group = group
                elevator.current_floor = initial_floor
                for floor_id in accessible[group_id - 1]:
                    floor = self.floors[floor_id - 1]
                    elevator.add_accessible_floor(floor)
                    floor.add_accessible_elevator(elevator)

    @property
    def _time_unit(self) -> int:
        return int(self.conf["simulator.timeUnitMillisecond"])

    @property
    def _traffic(self) -> int:
        return int(self.conf["simulator.traffic"])

    def _notify(self, message: str) -> None:
        if self.monitor is not None:
            self.monitor.send_message(message)

    def run(self) -> None:
        """Refresh the building: spawn passengers when due, then advance everyone."""
        traffic = self._traffic
        if self._clock() - self.refresh_stamp > self._time_unit and self.total_traffic < traffic:
            self.refresh_stamp = self._clock()
            rate = self._peak_rate if self.is_rush_hour() else self._normal_rate
            count = _poisson(self._rng, rate)
            self.total_traffic += count
            if self.total_traffic > traffic:
                count -= self.total_traffic - traffic
            spawn_floor = self.floors[int(self.conf["passenger.initialFloor"]) - 1]
            for _ in range(count):
                passenger = Passenger(self, spawn_floor, self.conf, rng=self._rng, clock=self._clock)
                passenger.monitor = self.monitor
                self.passengers.append(passenger)
                self._notify(f'<font color="green">Passenger {passenger.id} spawned.</font>')

        for passenger in list(self.passengers):
            passenger.run()
        for elevator in self.elevators:
            elevator.run()

    def remove_passenger(self, passenger: Passenger) -> None:
        """Take ``passenger`` out of the building; stop the monitor once everyone has left."""
        self.passengers[:] = [p for p in self.passengers if p is not passenger]
        self._notify(f'<font color="blue">Passenger {passenger.id} left the building.</font>')
        if not self.passengers and self.total_traffic >= self._traffic:
            self._notify('<font color="black">All passengers left the building.</font>')
            if self.monitor is not None:
                self.monitor.active = False

    def attach_monitor(self, monitor: Any) -> None:
        """Hand ``monitor`` to the building, its elevators and floors, and start it."""
        self.monitor = monitor
        monitor.active = True
        for elevator in self.elevators:
            elevator.monitor = monitor
        for floor in self.floors:
            floor.monitor = monitor

    def is_rush_hour(self) -> bool:
        """Tell whether the last refresh fell inside a configured rush hour."""
        time_unit = self._time_unit
        relative = self.refresh_stamp - self.base_stamp
        return any(start * time_unit <= relative <= end * time_unit for start, end in self.rush_hours)