"""
PAPE Configuration Module

Provides configuration management for PAPE request encoding.
"""

from .schema import PapeConfig
from .loader import load_config, load_config_from_file

__all__ = [
    "PapeConfig",
    "load_config",
    "load_config_from_file",
]
