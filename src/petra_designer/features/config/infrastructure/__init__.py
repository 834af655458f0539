"""
Infrastructure layer for config feature.

Contains:
- YAML codec (dump_config / load_config)
"""
from petra_designer.features.config.infrastructure.yaml_codec import ConfigDumper, dump_config, load_config

__all__ = [
    'ConfigDumper',
    'dump_config',
    'load_config',
]
