"""
Domain layer - Core models, contracts and errors.

This layer describes services, providers and container failures.
It has no dependencies on other layers.
"""

from .enums import InstanceKind
from .exceptions import (
    CircularReferenceError,
    ContainerError,
    InstantiationError,
    MethodNotFoundError,
    NotCallableError,
    NotFoundError,
    ParameterResolutionError,
    ProviderError,
)
from .interfaces import ICaller, IContainer, IContainerAware, IProvider, IResolver
from .models import InstanceSlot, Service

__all__ = [
    # Enums
    "InstanceKind",
    # Exceptions
    "ContainerError",
    "NotFoundError",
    "CircularReferenceError",
    "ParameterResolutionError",
    "MethodNotFoundError",
    "InstantiationError",
    "NotCallableError",
    "ProviderError",
    # Interfaces
    "ICaller",
    "IContainer",
    "IContainerAware",
    "IProvider",
    "IResolver",
    # Models
    "InstanceSlot",
    "Service",
]
