"""
Configuration management for fsmdraw.

Loads YAML configuration with the editor's defaults for arrowheads,
hit-testing, labels, and tracing.
"""

import os
from dataclasses import dataclass, field, fields

import yaml


ARROW_SIZE = 12.0
RADIUS_TOLERANCE = 6.0
LABEL_OFFSET = 25.0
ARC_SAMPLE_POINTS = 60


@dataclass
class ArrowConfig:
    """Configuration for arrowhead construction."""
    size: float = ARROW_SIZE  # on-screen units, independent of zoom and curvature


@dataclass
class HitTestConfig:
    """Configuration for edge hit-testing."""
    radius_tolerance: float = RADIUS_TOLERANCE


@dataclass
class LabelConfig:
    """Configuration for edge label anchors."""
    offset: float = LABEL_OFFSET


@dataclass
class PathConfig:
    """Configuration for arc polyline sampling."""
    sample_points: int = ARC_SAMPLE_POINTS


@dataclass
class TracingConfig:
    """Configuration for runtime tracing."""
    enabled: bool = False
    level: str = "INFO"
    file_path: str = None
    json_output: bool = False


@dataclass
class EngineConfig:
    """Complete geometry engine configuration."""
    arrow: ArrowConfig = field(default_factory=ArrowConfig)
    hit_test: HitTestConfig = field(default_factory=HitTestConfig)
    label: LabelConfig = field(default_factory=LabelConfig)
    path: PathConfig = field(default_factory=PathConfig)
    tracing: TracingConfig = field(default_factory=TracingConfig)


SECTIONS = ("arrow", "hit_test", "label", "path", "tracing")


def load_config(config_path=None):
    """
    Load configuration from YAML file.

    Falls back to defaults for any missing values.
    """
    config = EngineConfig()

    if config_path and os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        config = _merge_config(config, yaml_data)

    return config


def _merge_config(config, yaml_data):
    """Merge YAML data into config dataclass, skipping unknown keys."""
    for section in SECTIONS:
        values = yaml_data.get(section)
        if not isinstance(values, dict):
            continue
        target = getattr(config, section)
        for key, value in values.items():
            if hasattr(target, key):
                setattr(target, key, value)

    return config


def config_to_dict(config):
    """Plain nested dict of every section, in declaration order."""
    return {
        section: {
            f.name: getattr(getattr(config, section), f.name)
            for f in fields(getattr(config, section))
        }
        for section in SECTIONS
    }


def save_default_config(path):
    """Save default configuration to YAML file for reference."""
    yaml_data = config_to_dict(EngineConfig())

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(yaml_data, f, default_flow_style=False, sort_keys=False)
