"""
config.py - System Configuration Settings
==========================================
Central configuration for the scheduling optimizer.
"""

from pathlib import Path
from typing import Dict, Any


class Config:
    """System-wide configuration settings."""

    # ============================================================================
    # OPTIMIZER CONFIGURATION
    # ============================================================================

    OPTIMIZER = {
        'valves': {
            'start': 'AA',
            'solo_time_budget': 30,
            'pair_time_budget': 26,
        },
        'production': {
            'short_time_budget': 24,
            'long_time_budget': 32,
            'long_horizon_blueprints': 3,
        },
    }

    # ============================================================================
    # PARALLEL SEARCH CONFIGURATION
    # ============================================================================

    PARALLEL = {
        'enabled': False,
        'workers': None,  # defaults to one per first-level branch, capped by CPU count
        'use_processes': False,
    }

    # ============================================================================
    # LOGGING CONFIGURATION
    # ============================================================================

    LOGGING = {
        'level': 'INFO',
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        'date_format': '%Y-%m-%d %H:%M:%S',
        'file': None,
        'max_bytes': 10 * 1024 * 1024,  # 10 MB
        'backup_count': 5,
        'console_output': True
    }

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        """Get configuration value by dot-notation key."""
        keys = key.split('.')
        value = cls

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            elif not isinstance(value, dict) and hasattr(value, k):
                value = getattr(value, k)
            else:
                return default

        return value

    @classmethod
    def set(cls, key: str, value: Any):
        """Set configuration value by dot-notation key."""
        keys = key.split('.')
        target = cls

        for k in keys[:-1]:
            if isinstance(target, dict) and k in target:
                target = target[k]
            elif not isinstance(target, dict) and hasattr(target, k):
                target = getattr(target, k)
            else:
                raise KeyError(f"Configuration key not found: {key}")

        final_key = keys[-1]
        if isinstance(target, dict):
            if final_key not in target:
                raise KeyError(f"Configuration key not found: {key}")
            target[final_key] = value
        elif hasattr(target, final_key):
            setattr(target, final_key, value)
        else:
            raise KeyError(f"Cannot set configuration key: {key}")

    @classmethod
    def to_dict(cls) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        result = {}

        for attr in dir(cls):
            if not attr.startswith('_') and attr.isupper():
                value = getattr(cls, attr)
                if not callable(value):
                    result[attr] = value

        return result

    @classmethod
    def from_file(cls, filepath: str):
        """Load configuration from JSON or YAML file."""
        import json

        filepath = str(filepath)
        with open(filepath, 'r') as f:
            if filepath.endswith('.json'):
                config_data = json.load(f)
            elif filepath.endswith(('.yml', '.yaml')):
                import yaml
                config_data = yaml.safe_load(f)
            else:
                raise ValueError(f"Unsupported config file format: {filepath}")

        for key, value in config_data.items():
            current = getattr(cls, key, None)
            if isinstance(current, dict) and isinstance(value, dict):
                _deep_update(current, value)
            elif hasattr(cls, key):
                setattr(cls, key, value)

    @classmethod
    def save_to_file(cls, filepath: str):
        """Save configuration to JSON or YAML file."""
        import json

        filepath = str(filepath)
        config_data = cls.to_dict()

        with open(filepath, 'w') as f:
            if filepath.endswith('.json'):
                json.dump(config_data, f, indent=2, default=str)
            elif filepath.endswith(('.yml', '.yaml')):
                import yaml
                yaml.safe_dump(_plain(config_data), f, default_flow_style=False)
            else:
                raise ValueError(f"Unsupported config file format: {filepath}")


def _deep_update(target: Dict[str, Any], updates: Dict[str, Any]):
    for key, value in updates.items():
        if isinstance(target.get(key), dict) and isinstance(value, dict):
            _deep_update(target[key], value)
        else:
            target[key] = value


def _plain(value: Any) -> Any:
    """Paths become strings so the YAML dumper accepts them."""
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, Path):
        return str(value)
    return value

