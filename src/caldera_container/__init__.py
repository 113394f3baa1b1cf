"""
caldera-container: Dependency injection container with auto-wiring and lazy service providers.

Public API exports for the caldera_container package.
"""

# Application exports
from caldera_container.application.container import Container
from caldera_container.application.container_aware import ContainerAware
from caldera_container.application.providers import AbstractProvider

# Configuration
from caldera_container.config import ContainerSettings

# Domain exports
from caldera_container.domain.enums import InstanceKind
from caldera_container.domain.exceptions import (
    CircularReferenceError,
    ContainerError,
    InstantiationError,
    MethodNotFoundError,
    NotCallableError,
    NotFoundError,
    ParameterResolutionError,
    ProviderError,
)
from caldera_container.domain.interfaces import IProvider
from caldera_container.domain.models import Service

__version__ = "0.1.0"

__all__ = [
    # Container
    "Container",
    "ContainerAware",
    "ContainerSettings",
    # Providers
    "AbstractProvider",
    "IProvider",
    # Models
    "InstanceKind",
    "Service",
    # Exceptions
    "ContainerError",
    "NotFoundError",
    "CircularReferenceError",
    "ParameterResolutionError",
    "MethodNotFoundError",
    "InstantiationError",
    "NotCallableError",
    "ProviderError",
]
