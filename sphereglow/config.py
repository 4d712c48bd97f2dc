"""
Settings file loader.

Supports JSON and YAML files with two optional sections:
```yaml
trace:
  n_bounces: 8
  exposure: 0.5
  enable_russian_roulette: false
  min_ray_dist: 0.001
  max_ray_dist: 10000.0

render:
  width: 300
  height: 120
  samples_per_pixel: 8
  enable_aa: true
  seed: 1234
```
"""

from __future__ import annotations
import json
import logging
from dataclasses import fields
from pathlib import Path
from typing import Dict, Any, Tuple

from .integrator import TraceSettings
from .renderer import RenderSettings

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Error while loading settings."""
    pass


def _read_file(path: Path) -> Dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read settings file {path}: {e}") from e

    if path.suffix in ('.yaml', '.yml'):
        try:
            import yaml
        except ImportError as e:
            raise ConfigError("PyYAML not installed. Install with: pip install pyyaml") from e
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    elif path.suffix == '.json':
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    else:
        raise ConfigError(f"Unsupported settings file type: {path.suffix or path.name}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file must contain a mapping, got {type(data).__name__}")
    return data


def _build(cls, section: str, values: Any):
    if values is None:
        values = {}
    if not isinstance(values, dict):
        raise ConfigError(f"Section '{section}' must be a mapping")

    known = {f.name for f in fields(cls)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ConfigError(f"Unknown {section} setting(s): {', '.join(unknown)}")

    try:
        return cls(**values)
    except (ValueError, TypeError) as e:
        raise ConfigError(f"Invalid {section} settings: {e}") from e


def parse_settings(data: Dict[str, Any]) -> Tuple[TraceSettings, RenderSettings]:
    """Build settings objects from a parsed dictionary.

    Args:
        data: Mapping with optional 'trace' and 'render' sections

    Returns:
        Tuple of (trace_settings, render_settings)
    """
    unknown = sorted(set(data) - {'trace', 'render'})
    if unknown:
        raise ConfigError(f"Unknown section(s): {', '.join(unknown)}")

    trace = _build(TraceSettings, 'trace', data.get('trace'))
    render = _build(RenderSettings, 'render', data.get('render'))
    return trace, render


def load_settings(filepath: str) -> Tuple[TraceSettings, RenderSettings]:
    """Load settings from a JSON or YAML file.

    Args:
        filepath: Path to the settings file

    Returns:
        Tuple of (trace_settings, render_settings)

    Raises:
        ConfigError: If the file is missing, unreadable or invalid
    """
    path = Path(filepath)
    if not path.exists():
        raise ConfigError(f"Settings file not found: {filepath}")

    settings = parse_settings(_read_file(path))
    logger.debug(f"Loaded settings from {path}: {settings}")
    return settings
