"""
Configuration Module

Provides centralized configuration management using Pydantic Settings.
"""

from ezvrates.config.settings import Settings, settings

__all__ = ["Settings", "settings"]
