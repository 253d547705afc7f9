"""Unit conversion helpers for display and TPMS readings."""

from __future__ import annotations

# Conversion constants
PSI_PER_BAR = 14.5038
SECONDS_PER_HOUR = 3600.0


def psi_to_bar(psi: float) -> float:
    """Convert pounds per square inch to bar."""
    return psi / PSI_PER_BAR


def bar_to_psi(bar: float) -> float:
    """Convert bar to pounds per square inch."""
    return bar * PSI_PER_BAR


def km_travelled(speed_kmh: float, dt_secs: float) -> float:
    """Distance in km covered at a constant speed over dt_secs."""
    return speed_kmh / SECONDS_PER_HOUR * dt_secs


def average_speed_kmh(distance_km: float, duration_secs: float) -> float:
    """
    Average speed over a recorded span.

    Returns 0.0 when no time has elapsed instead of dividing by zero.
    """
    if duration_secs <= 0:
        return 0.0
    return distance_km / (duration_secs / SECONDS_PER_HOUR)


def format_duration(seconds: float) -> str:
    """Format seconds as HH:MM:SS."""
    total = int(seconds)
    h = total // 3600
    m = (total % 3600) // 60
    s = total % 60
    return f"{h:02d}:{m:02d}:{s:02d}"
