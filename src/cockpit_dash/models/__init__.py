# Cockpit Dash - Data models
from cockpit_dash.models.vehicle_state import VehicleState, Gear, DriveMode
from cockpit_dash.models.data_records import (
    TPMSReading,
    TripRecord,
    TripSession,
)

__all__ = [
    "VehicleState",
    "Gear",
    "DriveMode",
    "TPMSReading",
    "TripRecord",
    "TripSession",
]
