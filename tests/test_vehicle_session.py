import pytest
from PySide6.QtCore import QEventLoop, QTimer

from cockpit_dash.config.settings import Settings
from cockpit_dash.models.vehicle_state import Gear, VehicleState
from cockpit_dash.services.sim_clock import SimulationClock
from cockpit_dash.services.telemetry_simulator import TelemetrySimulator
from cockpit_dash.services.vehicle_session import VehicleSession


def wait_ms(ms: int) -> None:
    loop = QEventLoop()
    QTimer.singleShot(ms, loop.quit)
    loop.exec()


def make_session(speed_kmh: float = 0.0, settings: Settings | None = None) -> VehicleSession:
    simulator = TelemetrySimulator(VehicleState(speed_kmh=speed_kmh, gear=Gear.DRIVE), seed=21)
    return VehicleSession(settings or Settings(rng_seed=21), simulator=simulator, clock=lambda: 0.0)


def test_step_runs_simulator_then_recorder():
    session = make_session(speed_kmh=90)
    snapshots = []
    session.snapshot_updated.connect(snapshots.append)

    session.start_trip()
    session.step(1.0)

    assert session.trip_distance == pytest.approx(0.025)
    assert session.trip_duration == 1.0
    assert len(snapshots) == 1
    assert snapshots[0].is_trip_active
    assert snapshots[0].trip_distance_km == pytest.approx(0.025)


def test_operations_route_to_owners():
    session = make_session()
    session.start_trip()
    session.accelerate()
    session.brake()
    session.set_gear("N")
    session.update_tpms(fl=30)

    assert session.state.gear is Gear.NEUTRAL
    assert session.tpms.fl == 30
    assert session.driving_score == 98
    assert session.is_trip_active

    record = session.stop_trip()
    assert session.recent_trips == (record,)
    assert not session.is_trip_active
    assert session.driving_score == 100


def test_snapshot_contents():
    session = make_session(speed_kmh=190, settings=Settings(tpms_unit="BAR"))
    snap = session.snapshot()

    assert snap.vehicle is session.state
    assert snap.tpms.unit == "BAR"
    assert snap.tpms.fl == pytest.approx(32 / 14.5038)
    assert snap.statuses["speed"].value == "critical"
    assert snap.alert == "REDUCE SPEED"
    assert snap.recent_trips == ()


def test_snapshot_is_not_changed_by_later_ticks():
    session = make_session(speed_kmh=50)
    snap = session.snapshot()
    fuel = snap.vehicle.fuel_pct
    session.step(10.0)
    assert snap.vehicle.fuel_pct == fuel
    assert session.state.fuel_pct < fuel


def test_apply_settings():
    session = make_session()
    session.apply_settings(
        Settings(tick_interval_ms=1000, high_speed_kmh=80, high_speed_score_floor=60, max_recent_trips=5)
    )
    assert session.clock.interval_ms == 1000
    assert session.clock.dt == 1.0
    assert session.trip_recorder.HIGH_SPEED_KMH == 80
    assert session.trip_recorder.HIGH_SPEED_FLOOR == 60
    assert session.trip_recorder.MAX_RECENT_TRIPS == 5


def test_timer_ticks_and_stops():
    session = make_session(speed_kmh=60, settings=Settings(tick_interval_ms=10))
    session.start()
    assert session.is_running
    wait_ms(150)
    session.stop()

    ticks = session.clock.tick_count
    state = session.state
    assert ticks > 0

    wait_ms(60)
    assert session.clock.tick_count == ticks
    assert session.state is state
    assert not session.is_running


def test_clock_drops_timeouts_after_stop():
    clock = SimulationClock(50)
    ticks = []
    clock.ticked.connect(ticks.append)

    clock.start()
    clock._on_timeout()
    clock.stop()
    clock._on_timeout()

    assert ticks == [0.05]


def test_clock_running_signal_and_validation():
    clock = SimulationClock()
    changes = []
    clock.running_changed.connect(changes.append)

    clock.start()
    clock.start()
    clock.stop()
    clock.stop()

    assert changes == [True, False]
    assert clock.dt == 0.1
    with pytest.raises(ValueError):
        clock.set_interval(0)
