# src/floatmap/__init__.py
"""Live ARGO float telemetry map."""

__version__ = "1.0.0"
