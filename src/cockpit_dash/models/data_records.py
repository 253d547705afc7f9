"""Data transfer objects for tire pressure and trip tracking."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from cockpit_dash.utils.thresholds import Severity, score_status
from cockpit_dash.utils.units import (
    average_speed_kmh,
    bar_to_psi,
    format_duration,
    km_travelled,
    psi_to_bar,
)

PSI = "PSI"
BAR = "BAR"

SCORE_START = 100.0


@dataclass(frozen=True)
class TPMSReading:
    """
    Tire pressure monitoring snapshot.

    Values are stored as given; nothing here checks that a pressure is
    plausible.
    """

    fl: float = 32.0  # Front left
    fr: float = 32.0  # Front right
    rl: float = 33.0  # Rear left
    rr: float = 33.0  # Rear right
    temperature: float = 35.0  # Shared tire temperature (Celsius)
    unit: str = PSI

    def in_unit(self, unit: str) -> TPMSReading:
        """
        Return a copy with pressures converted to another unit.

        Args:
            unit: "PSI" or "BAR"

        Raises:
            ValueError: If the unit is not recognized
        """
        if unit not in (PSI, BAR):
            raise ValueError(f"Unknown pressure unit: {unit}")
        if unit == self.unit:
            return self

        convert = psi_to_bar if unit == BAR else bar_to_psi
        return replace(
            self,
            fl=convert(self.fl),
            fr=convert(self.fr),
            rl=convert(self.rl),
            rr=convert(self.rr),
            unit=unit,
        )


@dataclass(frozen=True)
class TripRecord:
    """Finalized trip, kept in the recent trips list."""

    trip_id: int
    start_ts: float  # Unix timestamp
    distance_km: float
    duration_secs: float
    avg_speed_kmh: float
    score: float  # 0-100

    @property
    def start_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.start_ts)

    @property
    def duration_formatted(self) -> str:
        return format_duration(self.duration_secs)

    @property
    def score_status(self) -> Severity:
        return score_status(self.score)


@dataclass
class TripSession:
    """In-memory statistics for the trip in progress."""

    trip_id: int
    start_ts: float
    distance_km: float = 0.0
    duration_secs: float = 0.0
    score: float = SCORE_START

    @property
    def avg_speed_kmh(self) -> float:
        return average_speed_kmh(self.distance_km, self.duration_secs)

    def accumulate(self, speed_kmh: float, dt_secs: float) -> None:
        """Add one tick of travel at speed_kmh."""
        self.duration_secs += dt_secs
        self.distance_km += km_travelled(speed_kmh, dt_secs)

    def penalize(self, amount: float, floor: float = 0.0) -> float:
        """
        Lower the score by amount, never below floor.

        A score already at or under the floor is left alone, so the score
        can only go down.

        Returns:
            The amount actually deducted
        """
        if self.score <= floor:
            return 0.0
        new_score = max(floor, self.score - amount)
        deducted = self.score - new_score
        self.score = new_score
        return deducted

    def to_record(self) -> TripRecord:
        return TripRecord(
            trip_id=self.trip_id,
            start_ts=self.start_ts,
            distance_km=self.distance_km,
            duration_secs=self.duration_secs,
            avg_speed_kmh=self.avg_speed_kmh,
            score=self.score,
        )
