"""Severity classification for dashboard metrics."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, Optional

if TYPE_CHECKING:
    from cockpit_dash.models.vehicle_state import VehicleState


class Severity(Enum):
    """Status level shown by gauges, pills and alert banners."""

    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True)
class MetricThresholds:
    """
    Two breakpoints for one metric.

    For regular metrics higher is worse: ``value >= critical`` is critical,
    ``value >= warning`` is a warning. Inverted metrics (battery, fuel) use
    ``<=`` so that lower is worse.
    """

    warning: float
    critical: float
    inverted: bool = False

    def classify(self, value: float) -> Severity:
        if self.inverted:
            if value <= self.critical:
                return Severity.CRITICAL
            if value <= self.warning:
                return Severity.WARNING
            return Severity.NORMAL

        if value >= self.critical:
            return Severity.CRITICAL
        if value >= self.warning:
            return Severity.WARNING
        return Severity.NORMAL


# Fixed breakpoints
SPEED = MetricThresholds(warning=120.0, critical=180.0)  # km/h
RPM = MetricThresholds(warning=5500.0, critical=6500.0)  # redline at 6500
COOLANT = MetricThresholds(warning=100.0, critical=110.0)  # deg C
BATTERY = MetricThresholds(warning=12.0, critical=11.5, inverted=True)  # V
FUEL = MetricThresholds(warning=25.0, critical=15.0, inverted=True)  # %

METRICS: Dict[str, MetricThresholds] = {
    "speed": SPEED,
    "rpm": RPM,
    "coolant": COOLANT,
    "battery": BATTERY,
    "fuel": FUEL,
}

# Trip logbook score badge
SCORE_GOOD = 90.0
SCORE_FAIR = 70.0


def speed_status(speed_kmh: float) -> Severity:
    return SPEED.classify(speed_kmh)


def rpm_status(rpm: float) -> Severity:
    return RPM.classify(rpm)


def coolant_status(temp_c: float) -> Severity:
    return COOLANT.classify(temp_c)


def battery_status(voltage_v: float) -> Severity:
    return BATTERY.classify(voltage_v)


def fuel_status(fuel_pct: float) -> Severity:
    return FUEL.classify(fuel_pct)


def classify(metric: str, value: float) -> Severity:
    """
    Classify a value for a named metric.

    Args:
        metric: One of "speed", "rpm", "coolant", "battery", "fuel"
        value: Raw reading in the metric's unit

    Raises:
        KeyError: If the metric name is unknown
    """
    return METRICS[metric].classify(value)


def score_status(score: float) -> Severity:
    """Map a driving score to its badge level (green / amber / red)."""
    if score >= SCORE_GOOD:
        return Severity.NORMAL
    if score >= SCORE_FAIR:
        return Severity.WARNING
    return Severity.CRITICAL


def classify_state(state: VehicleState) -> Dict[str, Severity]:
    """Classify every monitored metric of a vehicle state snapshot."""
    return {
        "speed": SPEED.classify(state.speed_kmh),
        "rpm": RPM.classify(state.rpm),
        "coolant": COOLANT.classify(state.coolant_c),
        "battery": BATTERY.classify(state.battery_v),
        "fuel": FUEL.classify(state.fuel_pct),
    }


def vehicle_alert(state: VehicleState) -> Optional[str]:
    """
    Pick the single alert banner text for a state, highest priority first.

    Returns:
        Alert text, or None when nothing is critical
    """
    if COOLANT.classify(state.coolant_c) is Severity.CRITICAL:
        return "ENGINE OVERHEAT"
    if FUEL.classify(state.fuel_pct) is Severity.CRITICAL:
        return "LOW FUEL LEVEL"
    if SPEED.classify(state.speed_kmh) is Severity.CRITICAL:
        return "REDUCE SPEED"
    return None
