from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from caldera_container.domain.models import Service


class ICaller(ABC):
    """Abstract interface for invoking callables with resolved parameters."""

    @abstractmethod
    def call(self, target: Any, arguments: Optional[Mapping[str, Any]] = None) -> Any:
        """Call a callable and return its result.

        Args:
            target: Function, ``(receiver, "method")`` pair, invokable object or function name.
            arguments: Values bound by parameter name.
        """


class IContainer(ICaller):
    """Abstract interface for dependency injection container operations."""

    @abstractmethod
    def add(self, name: Any, shared: bool = False, instance: Any = None) -> Service:
        """Register a service, or return the one already registered under ``name``.

        Args:
            name: Service name (string or class).
            shared: Whether the resolved instance is reused.
            instance: ``None``, a concrete object, a factory or an implementation reference.
        """

    @abstractmethod
    def remove(self, name: Any) -> "IContainer":
        """Remove a registered service, if any."""

    @abstractmethod
    def has(self, name: Any) -> bool:
        """Check whether a service is registered or provided."""

    @abstractmethod
    def get(self, name: Any) -> Any:
        """Resolve and return the instance for ``name``."""

    @abstractmethod
    def provider(self, provider: "IProvider") -> "IContainer":
        """Attach a service provider."""


class IProvider(ABC):
    """Abstract interface for lazily activated bundles of registrations."""

    @abstractmethod
    def bootstrap(self) -> None:
        """One-time setup, called when the provider is attached to a container."""

    @abstractmethod
    def provides(self, service: Any) -> bool:
        """Check if a service is provided by this provider.

        Args:
            service: Service name.
        """

    @abstractmethod
    def register(self) -> None:
        """Add the provided services to the container."""

    @abstractmethod
    def boot(self) -> None:
        """One-time setup, run before the first ``register`` of this provider class."""


class IContainerAware(ABC):
    """Abstract interface for objects that hold a container reference."""

    @abstractmethod
    def set_container(self, container: IContainer) -> "IContainerAware":
        """Set container instance."""

    @abstractmethod
    def get_container(self) -> IContainer:
        """Get container instance."""


class IResolver(ABC):
    """Abstract interface for reflective construction and parameter resolution."""

    @abstractmethod
    def make(self, cls: type, arguments: Mapping[str, Any], container: IContainer) -> Any:
        """Construct ``cls`` resolving its constructor parameters.

        Raises:
            ParameterResolutionError: If a parameter cannot be resolved.
        """

    @abstractmethod
    def resolve(
        self,
        target: Callable[..., Any],
        arguments: Mapping[str, Any],
        container: IContainer,
    ) -> Tuple[List[Any], Dict[str, Any]]:
        """Resolve the parameters of ``target`` into positional and keyword arguments."""

    @abstractmethod
    def decorate(self, instance: Any, decorators: Mapping[str, Any], container: IContainer) -> None:
        """Apply post-construction method calls to ``instance``.

        Raises:
            MethodNotFoundError: If a bound method does not exist.
        """
