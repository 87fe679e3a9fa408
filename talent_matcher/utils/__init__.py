"""
Utility modules for the talent matcher application.
"""

from .catalog_loader import load_catalog
from .config import Config

__all__ = [
    "load_catalog",
    "Config",
]
