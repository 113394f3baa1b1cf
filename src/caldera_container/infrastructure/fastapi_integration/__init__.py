"""
FastAPI integration module.

Provides helpers for using a caldera-container from FastAPI applications.
"""

from .integration import (
    ContainerMiddleware,
    create_callable_dependency,
    create_fastapi_dependency,
    get_request_container,
)

__all__ = [
    "create_fastapi_dependency",
    "create_callable_dependency",
    "get_request_container",
    "ContainerMiddleware",
]
