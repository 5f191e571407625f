"""Framework-agnostic support code shared by the SDK, currently logging.

This package must NEVER import from ``telegram_sdk/``.
"""

from core.logger import SdkLogger

__all__ = [
    "SdkLogger",
]
