# src/floatmap/telemetry/store.py
import logging
from typing import Dict, Any, Iterable, Iterator, List, Optional, Tuple

import pandas as pd

from ..exceptions import TelemetryValidationError, UnknownFloatError
from .models import Float, FloatStatus

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('id', 'latitude', 'longitude', 'temperature', 'salinity',
                   'depth', 'status', 'last_update', 'region')


class TelemetryStore:
    """Fixed, ordered collection of floats shown on the map.

    The store never changes after construction. Order matters: it drives
    per-float animation phases, ripple delays and connector pairing.
    """

    def __init__(self, floats: Iterable[Float]):
        self._floats: Tuple[Float, ...] = tuple(floats)
        self._index: Dict[str, int] = {}
        for position, float_ in enumerate(self._floats):
            if float_.id in self._index:
                raise TelemetryValidationError([f"Duplicate float id: {float_.id}"])
            self._index[float_.id] = position

    def __iter__(self) -> Iterator[Float]:
        return iter(self._floats)

    def __len__(self) -> int:
        return len(self._floats)

    def __getitem__(self, position: int) -> Float:
        return self._floats[position]

    def __contains__(self, float_id: object) -> bool:
        return float_id in self._index

    def __repr__(self) -> str:
        return f"TelemetryStore({len(self)} floats)"

    @property
    def floats(self) -> Tuple[Float, ...]:
        return self._floats

    def ids(self) -> List[str]:
        return [float_.id for float_ in self._floats]

    def get(self, float_id: str) -> Float:
        try:
            return self._floats[self._index[float_id]]
        except KeyError:
            raise UnknownFloatError(float_id) from None

    def index_of(self, float_id: str) -> int:
        try:
            return self._index[float_id]
        except KeyError:
            raise UnknownFloatError(float_id) from None

    def to_dataframe(self) -> pd.DataFrame:
        """Tabular view of the store, one row per float in store order"""
        columns = list(REQUIRED_FIELDS)
        if not self._floats:
            return pd.DataFrame(columns=columns)
        return pd.DataFrame([float_.to_dict() for float_ in self._floats], columns=columns)

    @classmethod
    def from_records(cls, records: Iterable[Dict[str, Any]], strict: bool = True) -> 'TelemetryStore':
        """Build a store from plain dict records, validating each one.

        In strict mode any invalid record raises TelemetryValidationError with
        every problem found. Otherwise invalid records are skipped.
        """
        floats: List[Float] = []
        problems: List[str] = []
        seen_ids = set()

        for position, record in enumerate(records):
            validation = validate_float_record(record)
            # Compare as stored: 5 and "5" are the same float
            record_id = str(record['id']) if record.get('id') is not None else None
            if record_id in seen_ids:
                validation['errors'].append(f"Duplicate float id: {record_id}")
                validation['is_valid'] = False

            if not validation['is_valid']:
                label = record_id or f"record {position}"
                if strict:
                    problems.extend(f"{label}: {error}" for error in validation['errors'])
                else:
                    logger.warning(f"Dropping invalid float {label}: {validation['errors']}")
                continue

            seen_ids.add(record_id)
            floats.append(_record_to_float(record))

        if problems:
            raise TelemetryValidationError(problems)

        logger.info(f"Loaded {len(floats)} floats from records")
        return cls(floats)


def validate_float_record(record: Dict[str, Any]) -> Dict[str, Any]:
    """Validate a float record before it enters the store"""
    validation_results = {
        'is_valid': True,
        'errors': []
    }

    for field in REQUIRED_FIELDS:
        if record.get(field) is None or record.get(field) == '':
            validation_results['errors'].append(f"Missing required field: {field}")

    latitude = _as_number(record.get('latitude'))
    longitude = _as_number(record.get('longitude'))
    depth = _as_number(record.get('depth'))

    if record.get('latitude') is not None and (latitude is None or not -90 <= latitude <= 90):
        validation_results['errors'].append("Latitude out of range (-90 to 90)")

    if record.get('longitude') is not None and (longitude is None or not -180 <= longitude <= 180):
        validation_results['errors'].append("Longitude out of range (-180 to 180)")

    if record.get('depth') is not None and (depth is None or depth < 0):
        validation_results['errors'].append("Depth must be a non-negative number")

    for field in ('temperature', 'salinity'):
        if record.get(field) is not None and _as_number(record.get(field)) is None:
            validation_results['errors'].append(f"{field} must be numeric")

    status = record.get('status')
    if status is not None and _as_status(status) is None:
        validation_results['errors'].append(f"Unknown status: {status}")

    validation_results['is_valid'] = not validation_results['errors']
    return validation_results


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _as_status(value: Any) -> Optional[FloatStatus]:
    if isinstance(value, FloatStatus):
        return value
    try:
        return FloatStatus(str(value).lower())
    except ValueError:
        return None


def _record_to_float(record: Dict[str, Any]) -> Float:
    return Float(
        id=str(record['id']),
        latitude=float(record['latitude']),
        longitude=float(record['longitude']),
        temperature=float(record['temperature']),
        salinity=float(record['salinity']),
        depth=float(record['depth']),
        status=_as_status(record['status']),
        last_update=str(record['last_update']),
        region=str(record['region']),
    )


# Simulated ARGO floats at representative ocean positions
REFERENCE_FLOATS: Tuple[Float, ...] = (
    Float('ARG001', 35, -40, 18.5, 35.2, 1250, FloatStatus.ACTIVE, '2 min ago', 'North Atlantic'),
    Float('ARG002', -20, 60, 26.8, 35.8, 980, FloatStatus.ACTIVE, '1 min ago', 'Indian Ocean'),
    Float('ARG003', 10, -120, 24.2, 34.9, 1450, FloatStatus.ACTIVE, '3 min ago', 'Pacific Ocean'),
    Float('ARG004', -45, 140, 12.1, 34.2, 2100, FloatStatus.MAINTENANCE, '15 min ago', 'Southern Ocean'),
    Float('ARG005', 65, -150, -1.2, 32.8, 800, FloatStatus.ACTIVE, '5 min ago', 'Arctic Ocean'),
    Float('ARG006', -10, -30, 25.6, 36.1, 1680, FloatStatus.ACTIVE, '1 min ago', 'South Atlantic'),
    Float('ARG007', 40, 140, 19.8, 34.6, 1320, FloatStatus.ACTIVE, '4 min ago', 'North Pacific'),
    Float('ARG008', -35, 20, 16.4, 35.4, 1890, FloatStatus.INACTIVE, '2 hours ago', 'South Atlantic'),
    Float('ARG009', 25, 65, 28.1, 36.2, 750, FloatStatus.ACTIVE, '30 sec ago', 'Arabian Sea'),
    Float('ARG010', -60, -45, 4.2, 34.1, 2400, FloatStatus.ACTIVE, '6 min ago', 'Southern Ocean'),
)


def reference_store() -> TelemetryStore:
    """The fixed session dataset"""
    return TelemetryStore(REFERENCE_FLOATS)
