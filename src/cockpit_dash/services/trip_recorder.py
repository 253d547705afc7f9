"""Manual trip recording and driving score."""

from __future__ import annotations

import itertools
import time
from enum import Enum
from typing import Callable, List, Optional, Tuple

from PySide6.QtCore import QObject, Signal, Slot

from cockpit_dash.models.data_records import TripRecord, TripSession
from cockpit_dash.services.telemetry_simulator import TelemetrySimulator


class TripState(Enum):
    """Trip state machine states."""

    INACTIVE = "inactive"  # No trip in progress
    ACTIVE = "active"  # Recording


class TripRecorder(QObject):
    """
    Records trips on top of a TelemetrySimulator.

    State machine:
        INACTIVE ──start_trip()──> ACTIVE
        ACTIVE ──stop_trip()──> INACTIVE (emit trip_ended)

    start_trip() while ACTIVE and stop_trip() while INACTIVE are ignored.

    Scoring while ACTIVE (score starts at 100 and only goes down):
        - every tick above HIGH_SPEED_KMH: -0.05, not below 50
        - accelerate(): -2, not below 0
        - brake() from above HARD_BRAKE_KMH: -3, not below 0
    """

    # Signals
    trip_started = Signal(int)  # trip_id
    trip_ended = Signal(object)  # TripRecord
    trip_stats_updated = Signal(object)  # TripSession (every tick)
    state_changed = Signal(str)  # TripState value

    # Configuration
    HIGH_SPEED_KMH = 100.0
    HIGH_SPEED_PENALTY = 0.05  # per tick
    HIGH_SPEED_FLOOR = 50.0
    ACCEL_PENALTY = 2.0
    BRAKE_PENALTY = 3.0
    HARD_BRAKE_KMH = 50.0
    SCORE_FLOOR = 0.0
    MAX_RECENT_TRIPS = 50  # 0 keeps everything

    def __init__(
        self,
        simulator: TelemetrySimulator,
        clock: Callable[[], float] = time.time,
    ):
        super().__init__()
        self._simulator = simulator
        self._clock = clock
        self._state = TripState.INACTIVE
        self._session: Optional[TripSession] = None
        self._recent: List[TripRecord] = []
        self._ids = itertools.count(1)

        simulator.accelerated.connect(self.on_accelerate)
        simulator.braked.connect(self.on_brake)

    @property
    def state(self) -> TripState:
        """Current trip state."""
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state == TripState.ACTIVE

    @property
    def session(self) -> Optional[TripSession]:
        """Trip in progress (None when inactive)."""
        return self._session

    @property
    def duration_secs(self) -> float:
        return self._session.duration_secs if self._session else 0.0

    @property
    def distance_km(self) -> float:
        return self._session.distance_km if self._session else 0.0

    @property
    def score(self) -> float:
        """Live driving score (100 when no trip is active)."""
        return self._session.score if self._session else 100.0

    @property
    def recent_trips(self) -> Tuple[TripRecord, ...]:
        """Finished trips, newest first."""
        return tuple(self._recent)

    def start_trip(self) -> None:
        """Start a new trip. Ignored when one is already active."""
        if self._state == TripState.ACTIVE:
            return

        self._session = TripSession(trip_id=next(self._ids), start_ts=self._clock())
        self._transition_to(TripState.ACTIVE)
        self.trip_started.emit(self._session.trip_id)

    def stop_trip(self) -> Optional[TripRecord]:
        """
        Finish the active trip.

        Returns:
            The finalized record, or None when no trip was active
        """
        if self._state != TripState.ACTIVE or self._session is None:
            return None

        record = self._session.to_record()
        self._recent.insert(0, record)
        if self.MAX_RECENT_TRIPS > 0:
            del self._recent[self.MAX_RECENT_TRIPS:]

        self._session = None
        self._transition_to(TripState.INACTIVE)
        self.trip_ended.emit(record)
        return record

    @Slot(float)
    def on_tick(self, dt: float) -> None:
        """
        Integrate one tick of the current speed into the trip.

        Call after the simulator has ticked so the speed belongs to the
        same step.
        """
        if self._session is None:
            return

        speed = self._simulator.speed_kmh
        self._session.accumulate(speed, dt)
        if speed > self.HIGH_SPEED_KMH:
            self._session.penalize(self.HIGH_SPEED_PENALTY, self.HIGH_SPEED_FLOOR)

        self.trip_stats_updated.emit(self._session)

    @Slot(float)
    def on_accelerate(self, speed_before: float) -> None:
        if self._session is not None:
            self._session.penalize(self.ACCEL_PENALTY, self.SCORE_FLOOR)

    @Slot(float)
    def on_brake(self, speed_before: float) -> None:
        if self._session is not None and speed_before > self.HARD_BRAKE_KMH:
            self._session.penalize(self.BRAKE_PENALTY, self.SCORE_FLOOR)

    def clear_history(self) -> None:
        """Forget all finished trips."""
        self._recent.clear()

    def _transition_to(self, new_state: TripState) -> None:
        """Transition to a new state."""
        if new_state != self._state:
            self._state = new_state
            self.state_changed.emit(new_state.value)
