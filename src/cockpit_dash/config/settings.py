"""Application settings with persistence."""

from __future__ import annotations

import json
import platform
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional


@dataclass
class Settings:
    """
    Application settings with defaults and JSON persistence.

    All speeds are in km/h.
    """

    # Simulation
    tick_interval_ms: int = 100
    rng_seed: Optional[int] = None  # None seeds from system entropy

    # Display
    tpms_unit: str = "PSI"

    # Trip scoring
    high_speed_kmh: float = 100.0
    high_speed_score_floor: float = 50.0

    # Data management
    max_recent_trips: int = 50  # 0 keeps every trip

    def __post_init__(self) -> None:
        """Replace out-of-range values with their defaults."""
        checks = {
            "tick_interval_ms": lambda v: _is_int(v) and v > 0,
            "rng_seed": lambda v: v is None or _is_int(v),
            "tpms_unit": lambda v: v in ("PSI", "BAR"),
            "high_speed_kmh": lambda v: _is_number(v) and v >= 0,
            "high_speed_score_floor": lambda v: _is_number(v) and 0 <= v <= 100,
            "max_recent_trips": lambda v: _is_int(v) and v >= 0,
        }
        for name, valid in checks.items():
            value = getattr(self, name)
            if not valid(value):
                default = self.__dataclass_fields__[name].default
                print(f"Invalid setting {name}={value!r}, using {default!r}")
                setattr(self, name, default)

    @classmethod
    def load(cls, path: Optional[Path] = None) -> Settings:
        """
        Load settings from JSON file.

        Args:
            path: Optional custom path. Uses default if None.

        Returns:
            Settings instance (defaults if file doesn't exist or fails)
        """
        if path is None:
            path = cls._default_path()

        try:
            if path.exists():
                with open(path, encoding="utf-8") as f:
                    data = json.load(f)
                # Filter to only known fields (ignore obsolete settings)
                known_fields = {f.name for f in cls.__dataclass_fields__.values()}
                filtered = {k: v for k, v in data.items() if k in known_fields}
                return cls(**filtered)
        except Exception as e:
            print(f"Failed to load settings: {e}")

        return cls()

    def save(self, path: Optional[Path] = None) -> bool:
        """
        Save settings to JSON file.

        Args:
            path: Optional custom path. Uses default if None.

        Returns:
            True if saved successfully
        """
        if path is None:
            path = self._default_path()

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(asdict(self), f, indent=2)
            return True
        except Exception as e:
            print(f"Failed to save settings: {e}")
            return False

    @staticmethod
    def _default_path() -> Path:
        """Get default settings file location."""
        if platform.system() == "Windows":
            base = Path.home() / ".cockpit_dash"
        else:
            base = Path.home() / ".local" / "share" / "cockpit_dash"
        return base / "settings.json"

    def reset_to_defaults(self) -> None:
        """Reset all settings to their default values."""
        defaults = Settings()
        for field_name in self.__dataclass_fields__:
            setattr(self, field_name, getattr(defaults, field_name))


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
