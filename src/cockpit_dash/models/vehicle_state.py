"""Central vehicle state - single source of truth for simulated telemetry."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Gear(Enum):
    """Gear selector positions."""

    PARK = "P"
    REVERSE = "R"
    NEUTRAL = "N"
    DRIVE = "D"


class DriveMode(Enum):
    """Drive mode selector, cycled in this order."""

    COMFORT = "COMFORT"
    SPORT = "SPORT"
    ECO = "ECO"


@dataclass(frozen=True)
class VehicleState:
    """
    Snapshot of the simulated vehicle.

    Frozen: the simulator replaces the whole snapshot on every transition,
    so any instance a consumer holds never changes under it.
    """

    # Motion
    speed_kmh: float = 0.0  # 0-240
    rpm: float = 0.0  # 0-8000, engine settles to idle after start
    gear: Gear = Gear.PARK
    drive_mode: DriveMode = DriveMode.COMFORT

    # Temperatures (Celsius), start cold
    coolant_c: float = 20.0
    oil_c: float = 20.0
    intake_c: float = 25.0

    # Electrical / load
    battery_v: float = 12.4  # resting voltage until the alternator cuts in
    engine_load_pct: float = 0.0  # 0-100

    # Fuel
    fuel_pct: float = 75.0  # 0-100

    @property
    def range_km(self) -> float:
        """Estimated range from remaining fuel."""
        return self.fuel_pct * KM_PER_FUEL_PCT


# Domains (used by the simulator's clamping and by gauges)
SPEED_RANGE = (0.0, 240.0)
RPM_RANGE = (0.0, 8000.0)
LOAD_RANGE = (0.0, 100.0)
FUEL_RANGE = (0.0, 100.0)
TEMP_RANGE = (-40.0, 150.0)
VOLT_RANGE = (0.0, 16.0)

IDLE_RPM = 800.0
KM_PER_FUEL_PCT = 6.0  # 75% -> 450 km
