"""
Application Settings Module

Usage:
    from petra_designer.application.settings import DesignerSettings
    settings = DesignerSettings.load()
"""

from .designer_settings import DesignerSettings

__all__ = [
    'DesignerSettings',
]
