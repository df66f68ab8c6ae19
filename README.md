# liftsim

liftsim is a library for simulating the elevators of a building in real time.
Passengers arrive on a configured floor, call for an elevator, ride to a few
random floors, and finally leave the building from the ground floor. Elevators
are organised in groups; each group serves its own set of floors, and every
call is given to the group whose elevator is nearest, counting the detours an
elevator must make before it can turn around. Group 1 is treated as the main
group and is only chosen when the others are noticeably further away.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Configuration

`liftsim.building.load_config(path)` reads a flat JSON object with dotted
keys; by default it reads `data/config.json` in the current directory:

```json
{
  "building.floors": 20,
  "elevator.count": 4,
  "elevator.speed": 1,
  "elevator.capacity": 10,
  "elevator.initialFloor": 1,
  "elevator.groups": [[1, 2], [3, 4]],
  "elevator.accessibleFloors": [
    [1, 2, 3, 4, 5, 6, 7, 8, 9, 10],
    [1, 11, 12, 13, 14, 15, 16, 17, 18, 19, 20]
  ],
  "passenger.initialFloor": 1,
  "passenger.boardingTimeRange": [1, 2],
  "passenger.activeTimeRange": [5, 20],
  "passenger.totalDestinationRange": [1, 3],
  "simulator.traffic": 100,
  "simulator.passengerSpawnRate": [1, 4],
  "simulator.rushHours": [[30, 60]],
  "simulator.timeUnitMillisecond": 200,
  "simulator.messageDurationMillisecond": 3000
}
```

- `simulator.timeUnitMillisecond` is the length of one time unit; elevator
  speed, boarding times and active times are counted in units.
- `simulator.passengerSpawnRate` gives the mean number of arrivals per unit
  (Poisson distributed) in normal hours and in rush hours;
  `simulator.rushHours` lists rush periods as `[start, end]` in units since
  the building was created.
- `simulator.traffic` is the total number of passengers that will arrive.
- `elevator.groups` lists the elevator numbers of each group, and
  `elevator.accessibleFloors` the floors each group serves, in the same order.

A missing file raises `FileNotFoundError`; a file that is not valid JSON
raises `ValueError`.

## Modules

- `liftsim.building`: `load_config` and `Building`, which creates the floors
  and elevators from the configuration. Each call to `Building.run()` spawns
  passengers when a time unit has passed and then advances every passenger and
  elevator. `Building.is_rush_hour()` tells whether the last refresh fell in a
  rush period.
- `liftsim.floor`: `Floor`, which keeps boarding queues per elevator group and
  direction and dispatches calls with `request_elevator`.
- `liftsim.elevator`: `Elevator` and the `Direction` enum (`UP`, `DOWN`,
  `STOP`).
- `liftsim.passenger`: `Passenger`.
- `liftsim.statistics`: `Statistics`, which tracks the idle and running time
  of each elevator, the mean, maximum, mode and median passenger waiting time,
  and a history of average waiting times per elevator in 5-second slices. The
  history is read from `data/data.json` when a `Statistics` is created
  (`load`) and written back by `save`; `is_rush_hour(elevator, time)` reports
  whether past waits near `time` averaged more than a minute.
- `liftsim.shaft`: `ElevatorShaft`, the display state of one shaft (car
  position, per-floor counters, floor colours, load) with a text `render()`,
  and `LineChart` for the estimated waiting times.
- `liftsim.charts`: `Chart`, idle/running figures per elevator and the
  waiting-time bars, with a text `render()`.

## Driving a simulation

```python
from liftsim.building import Building, load_config

building = Building(load_config("data/config.json"))
traffic = building.conf["simulator.traffic"]
while building.passengers or building.total_traffic < traffic:
    building.run()
```

A building runs without a monitor. To observe it, pass any object to
`Building.attach_monitor(monitor)` that has an `active` attribute and the
methods `send_message(msg)`, `add_elevator_statistic(elevator, time)` and
`add_passenger_waiting_time(elevator, start, end)`. The building sets
`active` to true when attached and to false once every passenger has arrived
and left. A `Statistics` instance can serve as the receiver of the timing
figures, and its `window` argument can be any object with
`set_elevator_statistics` and `set_passenger_statistics`, such as a `Chart`.

## What is not included

The package has no command to run from the shell, no monitor object that
gathers the state of elevators and floors for display, and no window on
screen. Driving the refresh loop, collecting statistics and showing the
`ElevatorShaft` and `Chart` states are left to the calling code.