"""Owner object wiring the simulator, trip recorder and clock together."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from PySide6.QtCore import QObject, Signal, Slot

from cockpit_dash.config.settings import Settings
from cockpit_dash.models.data_records import TPMSReading, TripRecord
from cockpit_dash.models.vehicle_state import DriveMode, Gear, VehicleState
from cockpit_dash.services.sim_clock import SimulationClock
from cockpit_dash.services.telemetry_simulator import TelemetrySimulator
from cockpit_dash.services.trip_recorder import TripRecorder
from cockpit_dash.utils.thresholds import Severity, classify_state, vehicle_alert


@dataclass(frozen=True)
class DashboardSnapshot:
    """Everything the presentation layer reads once per tick."""

    vehicle: VehicleState
    tpms: TPMSReading
    statuses: Dict[str, Severity]
    alert: Optional[str]
    is_trip_active: bool
    trip_duration_secs: float
    trip_distance_km: float
    driving_score: float
    recent_trips: Tuple[TripRecord, ...]


class VehicleSession(QObject):
    """
    One simulated vehicle and its trip log.

    Construct once at startup and pass it to whatever needs it. All mutation
    happens on the thread that owns this object: the clock's tick and the
    control operations below. Each tick runs the simulator first and the
    trip recorder second.
    """

    # Signals
    snapshot_updated = Signal(object)  # DashboardSnapshot, once per tick

    def __init__(
        self,
        settings: Optional[Settings] = None,
        simulator: Optional[TelemetrySimulator] = None,
        clock: Callable[[], float] = time.time,
    ):
        super().__init__()
        self.settings = settings or Settings()
        self.simulator = simulator or TelemetrySimulator(seed=self.settings.rng_seed)
        self.trip_recorder = TripRecorder(self.simulator, clock=clock)
        self.clock = SimulationClock(self.settings.tick_interval_ms, parent=self)
        self.clock.ticked.connect(self.step)

        self.apply_settings(self.settings)

    # ---------- Lifecycle ----------

    @Slot()
    def start(self) -> None:
        """Start ticking on the Qt event loop."""
        self.clock.start()

    @Slot()
    def stop(self) -> None:
        """Stop ticking. No tick runs after this returns."""
        self.clock.stop()

    @property
    def is_running(self) -> bool:
        return self.clock.is_running

    @Slot(float)
    def step(self, dt: float) -> None:
        """Advance one tick of dt seconds (the clock calls this)."""
        self.simulator.tick(dt)
        self.trip_recorder.on_tick(dt)
        self.snapshot_updated.emit(self.snapshot())

    def apply_settings(self, settings: Settings) -> None:
        """Apply changed settings to the running session."""
        self.settings = settings
        self.clock.set_interval(settings.tick_interval_ms)
        self.trip_recorder.HIGH_SPEED_KMH = settings.high_speed_kmh
        self.trip_recorder.HIGH_SPEED_FLOOR = settings.high_speed_score_floor
        self.trip_recorder.MAX_RECENT_TRIPS = settings.max_recent_trips

    # ---------- Controls ----------

    def accelerate(self) -> None:
        self.simulator.accelerate()

    def brake(self) -> None:
        self.simulator.brake()

    def set_gear(self, gear: Gear | str) -> None:
        self.simulator.set_gear(gear)

    def toggle_drive_mode(self) -> DriveMode:
        return self.simulator.toggle_drive_mode()

    def start_trip(self) -> None:
        self.trip_recorder.start_trip()

    def stop_trip(self) -> Optional[TripRecord]:
        return self.trip_recorder.stop_trip()

    def update_tpms(self, **partial) -> TPMSReading:
        return self.simulator.update_tpms(**partial)

    # ---------- Read-only surface ----------

    @property
    def state(self) -> VehicleState:
        return self.simulator.state

    @property
    def tpms(self) -> TPMSReading:
        return self.simulator.tpms

    @property
    def is_trip_active(self) -> bool:
        return self.trip_recorder.is_active

    @property
    def trip_duration(self) -> float:
        return self.trip_recorder.duration_secs

    @property
    def trip_distance(self) -> float:
        return self.trip_recorder.distance_km

    @property
    def driving_score(self) -> float:
        return self.trip_recorder.score

    @property
    def recent_trips(self) -> Tuple[TripRecord, ...]:
        return self.trip_recorder.recent_trips

    def snapshot(self) -> DashboardSnapshot:
        """Consistent read of everything the dashboard shows."""
        vehicle = self.simulator.state
        return DashboardSnapshot(
            vehicle=vehicle,
            tpms=self.simulator.tpms.in_unit(self.settings.tpms_unit),
            statuses=classify_state(vehicle),
            alert=vehicle_alert(vehicle),
            is_trip_active=self.trip_recorder.is_active,
            trip_duration_secs=self.trip_recorder.duration_secs,
            trip_distance_km=self.trip_recorder.distance_km,
            driving_score=self.trip_recorder.score,
            recent_trips=self.trip_recorder.recent_trips,
        )
