"""Utility modules for Fusion Debug.

Provides logging configuration.
"""

from fusion_debug.utils.logging import MultilineFormatter, setup_logging

__all__ = ["setup_logging", "MultilineFormatter"]
