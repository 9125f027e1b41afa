"""
Infrastructure layer - External integrations.

This layer contains alias file loading and integrations with external
frameworks and tools. It depends on both Application and Domain layers.
"""

from . import config, fastapi_integration, testing

__all__ = [
    "config",
    "fastapi_integration",
    "testing",
]
