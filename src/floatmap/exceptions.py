# src/floatmap/exceptions.py
from typing import List, Optional


class FloatMapError(Exception):
    """Base error for the float map package"""


class TelemetryValidationError(FloatMapError):
    """Raised when telemetry records fail validation"""

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__("Invalid telemetry: " + "; ".join(self.problems))


class ProjectionDomainError(FloatMapError, ValueError):
    """Raised when coordinates fall outside the geographic domain"""

    def __init__(self, latitude: float, longitude: float):
        self.latitude = latitude
        self.longitude = longitude
        super().__init__(
            f"Coordinates out of range: lat={latitude}, lon={longitude} "
            f"(expected -90..90, -180..180)"
        )


class UnknownFloatError(FloatMapError, KeyError):
    """Raised when a float id is not present in the store"""

    def __init__(self, float_id: Optional[str]):
        self.float_id = float_id
        super().__init__(f"Unknown float: {float_id}")

    def __str__(self) -> str:
        return f"Unknown float: {self.float_id}"
