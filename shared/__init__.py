"""
lumpkit Shared Module
=====================

Configuration and logging shared by the lumpkit packages.
"""

from shared.config import LumpConfig, get_config
from shared.logger import LumpLogger

__all__ = ["LumpConfig", "LumpLogger", "get_config"]
