# src/floatmap/telemetry/models.py
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, Any


class FloatStatus(str, Enum):
    ACTIVE = 'active'
    MAINTENANCE = 'maintenance'
    INACTIVE = 'inactive'


@dataclass(frozen=True)
class Float:
    """Snapshot of a single ARGO float"""
    id: str
    latitude: float
    longitude: float
    temperature: float
    salinity: float
    depth: float
    status: FloatStatus
    last_update: str
    region: str

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['status'] = self.status.value
        return data
