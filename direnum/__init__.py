"""Directory Enumerator - concurrent filesystem inventory with XML reports."""

__version__ = "0.1.0"

from direnum.config import Config
from direnum.scanner import Scanner

__all__ = ["Config", "Scanner"]
