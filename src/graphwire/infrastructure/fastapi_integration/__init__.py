"""
FastAPI integration module.

Provides helpers for resolving graphwire instances in FastAPI endpoints.
"""

from .integration import (
    ContainerMiddleware,
    create_fastapi_dependency,
    create_request_dependency,
)

__all__ = [
    "create_fastapi_dependency",
    "create_request_dependency",
    "ContainerMiddleware",
]
