"""
Configuration System

Manages configuration for memdrive with a layered approach.

Configuration Priority (highest to lowest):
    1. Programmatic (passed to DriveConfig()) or config file
       (DriveConfig.from_file, whose values are applied as overrides)
    2. Environment variables (MEMDRIVE_* prefix)
    3. Built-in defaults

Modules:
    settings: DriveConfig class
"""

from memdrive.config.settings import DriveConfig

__all__ = ["DriveConfig"]
