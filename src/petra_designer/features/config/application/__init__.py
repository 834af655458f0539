"""
Application layer for config feature.

Contains:
- build_config / generate_config (document -> config text)
- parse_config / ParsedFlow (config text -> document)
- validate_config_text (structural check of config text)
"""
from petra_designer.features.config.application.config_generator import build_config, generate_config
from petra_designer.features.config.application.config_parser import ParsedFlow, parse_config
from petra_designer.features.config.application.config_checker import validate_config_text

__all__ = [
    'build_config',
    'generate_config',
    'ParsedFlow',
    'parse_config',
    'validate_config_text',
]
