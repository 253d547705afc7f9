import argparse
import sys

from PySide6.QtCore import QCoreApplication, QTimer

from cockpit_dash.config.settings import Settings
from cockpit_dash.services.vehicle_session import DashboardSnapshot, VehicleSession
from cockpit_dash.utils.gauge_geometry import GaugeSpec, render
from cockpit_dash.utils.units import format_duration


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Headless cockpit telemetry simulator")
    p.add_argument("--seconds", type=float, default=5.0, help="How long to run the simulation")
    p.add_argument("--interval-ms", type=int, default=None, help="Tick period (default from settings)")
    p.add_argument("--seed", type=int, default=None, help="Seed for reproducible noise")
    p.add_argument("--trip", action="store_true", help="Record a trip for the whole run")
    p.add_argument("--accelerate", type=int, default=0, metavar="N", help="Accelerate N times at startup")
    return p.parse_args(argv)


def print_snapshot(snap: DashboardSnapshot) -> None:
    v = snap.vehicle
    speed_gauge = render(GaugeSpec(value=v.speed_kmh, max_value=240, start_angle=-135, end_angle=135))
    print(f"SPEED {v.speed_kmh:5.0f} km/h [{snap.statuses['speed'].value}]  gauge {speed_gauge.angle:.1f} deg")
    print(f"RPM   {v.rpm:5.0f}      [{snap.statuses['rpm'].value}]  gear {v.gear.value}  mode {v.drive_mode.value}")
    print(f"COOL  {v.coolant_c:5.1f} C    OIL {v.oil_c:5.1f} C  INTAKE {v.intake_c:5.1f} C")
    print(f"BATT  {v.battery_v:5.2f} V    LOAD {v.engine_load_pct:4.0f}%")
    print(f"FUEL  {v.fuel_pct:5.2f} %    RANGE {v.range_km:.0f} km")
    t = snap.tpms
    print(f"TPMS  FL {t.fl:.1f} FR {t.fr:.1f} RL {t.rl:.1f} RR {t.rr:.1f} {t.unit}  {t.temperature:.0f} C")
    if snap.alert:
        print(f"ALERT {snap.alert}")


def main(argv=None) -> int:
    args = parse_args(argv)
    settings = Settings.load()
    if args.interval_ms is not None:
        settings.tick_interval_ms = args.interval_ms
    if args.seed is not None:
        settings.rng_seed = args.seed

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    session = VehicleSession(settings)

    for _ in range(args.accelerate):
        session.accelerate()
    if args.trip:
        session.start_trip()

    def finish() -> None:
        session.stop()
        app.quit()

    session.start()
    QTimer.singleShot(int(args.seconds * 1000), finish)
    app.exec()

    record = session.stop_trip()
    print_snapshot(session.snapshot())
    if record is not None:
        print(
            f"TRIP  #{record.trip_id} {record.distance_km:.2f} km in {format_duration(record.duration_secs)}"
            f"  avg {record.avg_speed_kmh:.0f} km/h  score {record.score:.0f}"
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
