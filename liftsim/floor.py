"""Floors that queue passengers and dispatch them to elevators."""

from __future__ import annotations

from typing import Any

from liftsim.elevator import Direction


class Floor:
    """One floor of the building with boarding queues per elevator group and direction."""

    def __init__(self, building: Any, floor_id: int, conf: dict[str, Any]) -> None:
        self.building = building
        self.id = floor_id
        self.conf = conf
        self.monitor: Any = None
        self.passengers: list[Any] = []
        self.accessible_elevators: list[Any] = []
        # group id -> passengers queued for that group
        self.upside_queues: dict[int, list[Any]] = {}
        self.downside_queues: dict[int, list[Any]] = {}

    @property
    def _floor_count(self) -> int:
        return int(self.conf["building.floors"])

    def add_accessible_elevator(self, elevator: Any) -> None:
        """Make ``elevator`` one that stops at this floor."""
        self.accessible_elevators.append(elevator)

    def add_passenger(self, passenger: Any) -> None:
        """Put ``passenger`` on this floor."""
        self.passengers.append(passenger)

    def boarding_queue(self, elevator: Any) -> list[Any]:
        """Return the live queue ``elevator`` boards from, given its direction."""
        queues = self.upside_queues if elevator.direction > 0 else self.downside_queues
        return queues.setdefault(elevator.group_id, [])

    def _distance(self, elevator: Any, pas_direction: int) -> int:
        floors = self._floor_count
        el_direction = elevator.direction
        el_floor = elevator.current_floor.id
        coming = Direction.UP if self.id - el_floor > 0 else Direction.DOWN

        at_same_floor = el_floor == self.id and el_direction == pas_direction and elevator.ding_stage != 0
        pass_by = el_direction == pas_direction and coming == el_direction

        if not elevator.running or at_same_floor or pass_by:
            distance = abs(el_floor - self.id)
        elif el_direction != pas_direction:
            if el_direction == Direction.UP:
                distance = floors - self.id + floors - el_floor
            else:
                distance = self.id - 1 + el_floor - 1
        elif el_direction == Direction.UP:
            distance = self.id - 1 + floors - el_floor + floors - 1
        else:
            distance = floors - self.id + el_floor - 1 + floors - 1

        # keep load off the main elevator group
        if elevator.group_id == 1:
            distance += 20
        return distance

    def request_elevator(self, passenger: Any) -> None:
        """Queue ``passenger`` for the best elevator group and register the request."""
        destination = passenger.destination
        pas_direction = Direction.UP if destination - self.id > 0 else Direction.DOWN
        queues = self.upside_queues if pas_direction > 0 else self.downside_queues

        candidates: list[tuple[int, int, Any]] = []
        for elevator in self.accessible_elevators:
            if not elevator.is_accessible(destination):
                continue
            waiting = len(queues.get(elevator.group_id, []))
            free_space = elevator.free_space - waiting
            candidates.append((self._distance(elevator, pas_direction), free_space, elevator))

        if not candidates:
            raise LookupError(f"floor {self.id}: no elevator serves floor {destination}")
        _, _, nearest = min(candidates, key=lambda c: (c[0], -c[1]))

        target = self.upside_queues if destination > self.id else self.downside_queues
        target.setdefault(nearest.group_id, []).append(passenger)

        for member in nearest.group:
            if member.register_passenger(passenger):
                break

    def remove_passenger(self, passenger: Any, elevator: Any) -> None:
        """Take ``passenger`` off this floor once it boards ``elevator``."""
        self.passengers[:] = [p for p in self.passengers if p is not passenger]
        queue = self.boarding_queue(elevator)
        queue[:] = [p for p in queue if p is not passenger]

    def leave_building(self, passenger: Any) -> None:
        """Let ``passenger`` leave the building; only possible from the ground floor."""
        if self.id != 1:
            raise RuntimeError("Invalid operation: passenger can only leave the building from 1st floor.")
        self.passengers[:] = [p for p in self.passengers if p is not passenger]
        self.building.remove_passenger(passenger)