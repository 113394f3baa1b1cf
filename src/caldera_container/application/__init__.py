"""
Application layer - Resolution engine and orchestration.

This layer contains the container and the components it delegates to.
It depends only on the Domain layer.
"""

from .caller import CallableInspector
from .container import Container
from .container_aware import ContainerAware
from .providers import AbstractProvider, ProviderRegistry
from .resolver import DependencyResolver

__all__ = [
    "Container",
    "ContainerAware",
    "AbstractProvider",
    "ProviderRegistry",
    "DependencyResolver",
    "CallableInspector",
]
