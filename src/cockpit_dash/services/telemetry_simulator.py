"""Simulated vehicle telemetry advanced on a fixed tick."""

from __future__ import annotations

import random
from dataclasses import replace
from typing import Optional

from PySide6.QtCore import QObject, Signal, Slot

from cockpit_dash.models.data_records import TPMSReading
from cockpit_dash.models.vehicle_state import (
    FUEL_RANGE,
    IDLE_RPM,
    LOAD_RANGE,
    RPM_RANGE,
    SPEED_RANGE,
    TEMP_RANGE,
    VOLT_RANGE,
    DriveMode,
    Gear,
    VehicleState,
)
from cockpit_dash.utils import thresholds
from cockpit_dash.utils.thresholds import Severity

# RPM relaxation
RPM_BASE = 2000.0  # target when rolling in gear, before the speed term
RPM_PER_KMH = 20.0
RPM_SMOOTHING = 0.1  # fraction of the gap closed per tick
RPM_JITTER = 25.0  # +/- uniform

# Thermal warm-up (deg C per second)
COOLANT_TARGET_C = 90.0
OIL_TARGET_C = 95.0
COOLANT_RATE = 0.5
OIL_RATE = 0.3
INTAKE_AMBIENT_C = 25.0
INTAKE_PER_LOAD_PCT = 0.15
INTAKE_SMOOTHING = 0.05

# Charging system
ALTERNATOR_V = 14.2
ALTERNATOR_NOISE = 0.1
RESTING_V = 12.4
ALTERNATOR_CUT_IN_RPM = 500.0

# Engine load
IDLE_LOAD_PCT = 15.0
LOAD_PER_KMH = 0.3
LOAD_NOISE = 2.0

# Fuel burn (percent)
FUEL_DRAIN_PER_SEC = 0.01
ACCEL_FUEL_BURN = 0.1

# Control impulses
ACCEL_SPEED_STEP = 5.0
ACCEL_RPM_STEP = 500.0
BRAKE_SPEED_STEP = 10.0
BRAKE_RPM_STEP = 1000.0

_IDLING_GEARS = (Gear.PARK, Gear.NEUTRAL)
_DRIVE_MODE_ORDER = (DriveMode.COMFORT, DriveMode.SPORT, DriveMode.ECO)


def _clamp(value: float, bounds: tuple) -> float:
    lo, hi = bounds
    return max(lo, min(hi, value))


def clamp_state(state: VehicleState) -> VehicleState:
    """Force every bounded field back into its domain."""
    return replace(
        state,
        speed_kmh=_clamp(state.speed_kmh, SPEED_RANGE),
        rpm=_clamp(state.rpm, RPM_RANGE),
        coolant_c=_clamp(state.coolant_c, TEMP_RANGE),
        oil_c=_clamp(state.oil_c, TEMP_RANGE),
        intake_c=_clamp(state.intake_c, TEMP_RANGE),
        battery_v=_clamp(state.battery_v, VOLT_RANGE),
        engine_load_pct=_clamp(state.engine_load_pct, LOAD_RANGE),
        fuel_pct=_clamp(state.fuel_pct, FUEL_RANGE),
    )


# ----------------------------
# Tick rules
# ----------------------------


def target_rpm(speed_kmh: float, gear: Gear) -> float:
    """Engine speed the RPM relaxes toward."""
    if speed_kmh <= 0 or gear in _IDLING_GEARS:
        return IDLE_RPM
    return RPM_BASE + RPM_PER_KMH * speed_kmh


def relax_rpm(state: VehicleState, rng: random.Random) -> float:
    target = target_rpm(state.speed_kmh, state.gear)
    jitter = rng.uniform(-RPM_JITTER, RPM_JITTER)
    return state.rpm + (target - state.rpm) * RPM_SMOOTHING + jitter


def _ramp_toward(current: float, target: float, step: float) -> float:
    if current >= target:
        return current
    return min(target, current + step)


def ramp_temperatures(state: VehicleState, dt: float) -> tuple:
    """Coolant and oil warm toward their targets without overshooting."""
    coolant = _ramp_toward(state.coolant_c, COOLANT_TARGET_C, COOLANT_RATE * dt)
    oil = _ramp_toward(state.oil_c, OIL_TARGET_C, OIL_RATE * dt)
    return coolant, oil


def drift_intake(state: VehicleState, load_pct: float) -> float:
    target = INTAKE_AMBIENT_C + INTAKE_PER_LOAD_PCT * load_pct
    return state.intake_c + (target - state.intake_c) * INTAKE_SMOOTHING


def battery_voltage(rpm: float, rng: random.Random) -> float:
    """Charging voltage with the engine running, resting voltage otherwise."""
    if rpm > ALTERNATOR_CUT_IN_RPM:
        return ALTERNATOR_V + rng.uniform(-ALTERNATOR_NOISE, ALTERNATOR_NOISE)
    return RESTING_V


def engine_load(speed_kmh: float, rng: random.Random) -> float:
    load = IDLE_LOAD_PCT + LOAD_PER_KMH * speed_kmh + rng.uniform(-LOAD_NOISE, LOAD_NOISE)
    return _clamp(load, LOAD_RANGE)


def drain_fuel(state: VehicleState, dt: float) -> float:
    if state.speed_kmh > 0:
        return state.fuel_pct - FUEL_DRAIN_PER_SEC * dt
    return state.fuel_pct


def advance(state: VehicleState, dt: float, rng: random.Random) -> VehicleState:
    """
    Advance the vehicle by one tick of dt seconds.

    Rules run in a fixed order: RPM relaxation, thermal ramp, battery,
    engine load (and intake, which follows load), fuel burn. Speed and gear
    are never changed here; they only move through control inputs.

    Args:
        state: Current snapshot
        dt: Tick length in seconds
        rng: Noise source

    Returns:
        New clamped snapshot
    """
    rpm = _clamp(relax_rpm(state, rng), RPM_RANGE)
    coolant, oil = ramp_temperatures(state, dt)
    voltage = battery_voltage(rpm, rng)
    load = engine_load(state.speed_kmh, rng)

    return clamp_state(
        replace(
            state,
            rpm=rpm,
            coolant_c=coolant,
            oil_c=oil,
            intake_c=drift_intake(state, load),
            battery_v=voltage,
            engine_load_pct=load,
            fuel_pct=drain_fuel(state, dt),
        )
    )


# ----------------------------
# Control impulses
# ----------------------------


def apply_accelerate(state: VehicleState) -> VehicleState:
    """Step speed and RPM up, burn extra fuel, shift out of park."""
    gear = Gear.DRIVE if state.gear is Gear.PARK else state.gear
    return clamp_state(
        replace(
            state,
            speed_kmh=state.speed_kmh + ACCEL_SPEED_STEP,
            rpm=state.rpm + ACCEL_RPM_STEP,
            fuel_pct=state.fuel_pct - ACCEL_FUEL_BURN,
            gear=gear,
        )
    )


def apply_brake(state: VehicleState) -> VehicleState:
    """Step speed and RPM down; RPM never drops under idle."""
    return clamp_state(
        replace(
            state,
            speed_kmh=state.speed_kmh - BRAKE_SPEED_STEP,
            rpm=max(IDLE_RPM, state.rpm - BRAKE_RPM_STEP),
        )
    )


def next_drive_mode(mode: DriveMode) -> DriveMode:
    idx = _DRIVE_MODE_ORDER.index(mode)
    return _DRIVE_MODE_ORDER[(idx + 1) % len(_DRIVE_MODE_ORDER)]


class TelemetrySimulator(QObject):
    """
    Owns the simulated vehicle state and tire pressures.

    The state is only replaced by tick() and the control operations; readers
    get the current frozen snapshot through the ``state`` property or the
    state_updated signal.
    """

    # Signals
    state_updated = Signal(object)  # VehicleState
    tpms_updated = Signal(object)  # TPMSReading
    accelerated = Signal(float)  # speed before the impulse
    braked = Signal(float)  # speed before the impulse
    gear_changed = Signal(str)  # Gear value

    def __init__(
        self,
        state: Optional[VehicleState] = None,
        tpms: Optional[TPMSReading] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        super().__init__()
        self._state = clamp_state(state or VehicleState())
        self._tpms = tpms or TPMSReading()
        self._rng = rng or random.Random(seed)

    @property
    def state(self) -> VehicleState:
        """Current vehicle snapshot."""
        return self._state

    @property
    def tpms(self) -> TPMSReading:
        """Current tire pressure snapshot."""
        return self._tpms

    @property
    def speed_kmh(self) -> float:
        return self._state.speed_kmh

    @Slot(float)
    def tick(self, dt: float) -> None:
        """Advance the simulation by dt seconds."""
        self._set_state(advance(self._state, dt, self._rng))

    @Slot()
    def accelerate(self) -> None:
        before = self._state
        self._set_state(apply_accelerate(before))
        if self._state.gear is not before.gear:
            self.gear_changed.emit(self._state.gear.value)
        self.accelerated.emit(before.speed_kmh)

    @Slot()
    def brake(self) -> None:
        before = self._state.speed_kmh
        self._set_state(apply_brake(self._state))
        self.braked.emit(before)

    def set_gear(self, gear: Gear | str) -> None:
        """
        Select a gear.

        Args:
            gear: Gear member or its letter ("P", "R", "N", "D")

        Raises:
            ValueError: If the letter is not a gear
        """
        new_gear = gear if isinstance(gear, Gear) else Gear(gear)
        if new_gear is self._state.gear:
            return
        self._set_state(replace(self._state, gear=new_gear))
        self.gear_changed.emit(new_gear.value)

    def toggle_drive_mode(self) -> DriveMode:
        """Cycle COMFORT -> SPORT -> ECO -> COMFORT."""
        mode = next_drive_mode(self._state.drive_mode)
        self._set_state(replace(self._state, drive_mode=mode))
        return mode

    def update_tpms(self, **partial) -> TPMSReading:
        """
        Merge new tire values into the current reading.

        Values pass through unchecked. Unknown field names raise TypeError.
        """
        self._tpms = replace(self._tpms, **partial)
        self.tpms_updated.emit(self._tpms)
        return self._tpms

    # ---------- Status queries ----------

    def speed_status(self) -> Severity:
        return thresholds.speed_status(self._state.speed_kmh)

    def rpm_status(self) -> Severity:
        return thresholds.rpm_status(self._state.rpm)

    def coolant_status(self) -> Severity:
        return thresholds.coolant_status(self._state.coolant_c)

    def battery_status(self) -> Severity:
        return thresholds.battery_status(self._state.battery_v)

    def fuel_status(self) -> Severity:
        return thresholds.fuel_status(self._state.fuel_pct)

    def alert(self) -> Optional[str]:
        return thresholds.vehicle_alert(self._state)

    def _set_state(self, state: VehicleState) -> None:
        self._state = state
        self.state_updated.emit(state)
