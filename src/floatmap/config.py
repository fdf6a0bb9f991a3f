# src/floatmap/config.py
import copy
import os
import yaml
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, Optional
import logging

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

ENV_PREFIX = "FLOATMAP_"

DEFAULT_SETTINGS: Dict[str, Any] = {
    'map': {
        'tick_period_ms': 100,
        'phase_modulus': 360,
        'bob_frequency': 0.05,
        'bob_phase_shift': 1.0,
        'bob_amplitude': 0.3,
        'marker_radius': 0.8,
        'marker_radius_active': 1.2,
        'hover_scale': 1.3,
        'ripple_duration_s': 2.0,
        'ripple_delay_step_s': 0.3,
        'ripple_max_radius': 3.0,
        'connector_cycle_s': 3.0,
        'clamp_out_of_range': True
    },
    'display': {
        'dark_mode': False,
        'refresh_ms': 500
    },
    'visualization': {
        'figure_height': 600,
        'default_theme': 'plotly_white'
    },
    'logging': {
        'level': 'INFO',
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        'file': 'logs/floatmap.log'
    }
}


class Config:
    """Configuration manager for the float map"""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = Path(config_path) if config_path else self._find_config_file()
        self.settings = self._load_settings()

    def _find_config_file(self) -> Optional[Path]:
        """Find the configuration file in various locations"""
        possible_paths = [
            Path('config/settings.yaml'),
            Path('../config/settings.yaml'),
            Path(__file__).resolve().parents[2] / 'config' / 'settings.yaml',
            Path('./settings.yaml')
        ]

        for path in possible_paths:
            if path.exists():
                return path

        return None

    def _load_settings(self) -> Dict[str, Any]:
        """Load settings from YAML file on top of the built-in defaults"""
        settings = copy.deepcopy(DEFAULT_SETTINGS)
        if self.config_path is None:
            return settings

        try:
            with open(self.config_path, 'r') as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Error loading config {self.config_path}: {e}")
            return settings

        _deep_update(settings, loaded)
        return settings

    def load_config(self, config_path: str):
        """Reload settings from an explicit file"""
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        self.settings = self._load_settings()

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation"""
        keys = key.split('.')
        value = self.settings

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                value = default
                break

        # Environment variable override
        env_key = f"{ENV_PREFIX}{key.replace('.', '_').upper()}"
        env_value = os.getenv(env_key)
        if env_value is None:
            return value
        try:
            return _coerce(env_value, value)
        except ValueError:
            logger.error(f"Ignoring {env_key}={env_value!r}: not a valid value for {key}")
            return value

    def set(self, key: str, value: Any):
        """Set configuration value using dot notation"""
        keys = key.split('.')
        target = self.settings
        for k in keys[:-1]:
            target = target.setdefault(k, {})
        target[keys[-1]] = value

    def map_settings(self) -> 'MapSettings':
        """Snapshot of the map tunables"""
        return MapSettings(
            tick_period_s=float(self.get('map.tick_period_ms')) / 1000.0,
            phase_modulus=int(self.get('map.phase_modulus')),
            bob_frequency=float(self.get('map.bob_frequency')),
            bob_phase_shift=float(self.get('map.bob_phase_shift')),
            bob_amplitude=float(self.get('map.bob_amplitude')),
            marker_radius=float(self.get('map.marker_radius')),
            marker_radius_active=float(self.get('map.marker_radius_active')),
            hover_scale=float(self.get('map.hover_scale')),
            ripple_duration_s=float(self.get('map.ripple_duration_s')),
            ripple_delay_step_s=float(self.get('map.ripple_delay_step_s')),
            ripple_max_radius=float(self.get('map.ripple_max_radius')),
            connector_cycle_s=float(self.get('map.connector_cycle_s')),
            clamp_out_of_range=bool(self.get('map.clamp_out_of_range')),
        )


@dataclass(frozen=True)
class MapSettings:
    """Tunable constants for projection, animation and markers"""
    tick_period_s: float = 0.1
    phase_modulus: int = 360
    bob_frequency: float = 0.05
    bob_phase_shift: float = 1.0
    bob_amplitude: float = 0.3
    marker_radius: float = 0.8
    marker_radius_active: float = 1.2
    hover_scale: float = 1.3
    ripple_duration_s: float = 2.0
    ripple_delay_step_s: float = 0.3
    ripple_max_radius: float = 3.0
    connector_cycle_s: float = 3.0
    clamp_out_of_range: bool = True


def _deep_update(base: Dict[str, Any], updates: Dict[str, Any]):
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_update(base[key], value)
        else:
            base[key] = value


def _coerce(raw: str, reference: Any) -> Any:
    """Convert an environment string to the type of the configured value"""
    if isinstance(reference, bool):
        return raw.strip().lower() in ('1', 'true', 'yes', 'on')
    if isinstance(reference, int):
        try:
            return int(raw)
        except ValueError:
            return float(raw)
    if isinstance(reference, float):
        return float(raw)
    return raw


# Global configuration instance
config = Config()
