# src/floatmap/telemetry/__init__.py
from .models import Float, FloatStatus
from .store import TelemetryStore, reference_store, validate_float_record

__all__ = ['Float', 'FloatStatus', 'TelemetryStore', 'reference_store', 'validate_float_record']
