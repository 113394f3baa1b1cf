"""Application layer - Service providers and their lazy activation."""

import copy
import logging
from typing import Any, ClassVar, List, Optional, Sequence, Set, Type

from caldera_container.application.container_aware import ContainerAware
from caldera_container.domain import IContainer, IContainerAware, IProvider

logger = logging.getLogger(__name__)


class AbstractProvider(ContainerAware, IProvider):
    """Base class for providers declaring the names they supply.

    Subclasses list their names in ``provides_names`` and add the matching
    services to ``self.container`` from ``register``.

    Example:
        >>> class MailProvider(AbstractProvider):
        ...     provides_names = ["mailer"]
        ...
        ...     def register(self) -> None:
        ...         self.get_container().add("mailer", True, lambda c: SmtpMailer())
    """

    provides_names: ClassVar[Sequence[Any]] = ()

    def bootstrap(self) -> None:
        pass

    def provides(self, service: Any) -> bool:
        return service in self.provides_names

    def boot(self) -> None:
        pass


class ProviderRegistry:
    """Keeps attached providers and runs their boot/register passes lazily.

    Boot and register happen at most once per provider class, tracked across
    all providers attached to the same container.

    Attributes:
        _providers: Providers in attachment order.
        _registered: Provider classes whose ``register`` already ran.
        _booted: Provider classes whose ``boot`` already ran.
    """

    def __init__(self) -> None:
        self._providers: List[IProvider] = []
        self._registered: Set[Type[IProvider]] = set()
        self._booted: Set[Type[IProvider]] = set()

    def add(self, provider: IProvider) -> None:
        self._providers.append(provider)

    def provides(self, service: Any) -> bool:
        """Check if any attached provider claims ``service``."""
        return any(provider.provides(service) for provider in self._providers)

    def register(self, service: Any) -> None:
        """Run the first pending provider that claims ``service``.

        Providers whose class already registered are skipped. The matching
        provider is booted first if its class was never booted.

        Args:
            service: The service name being resolved.
        """
        for provider in self._providers:
            provider_class = type(provider)
            if provider_class in self._registered:
                continue
            if provider.provides(service):
                if provider_class not in self._booted:
                    self._booted.add(provider_class)
                    logger.debug("Booting provider %s", provider_class.__qualname__)
                    provider.boot()
                self._registered.add(provider_class)
                logger.debug("Registering provider %s for %r", provider_class.__qualname__, service)
                provider.register()
                return

    def is_registered(self, provider_class: Type[IProvider]) -> bool:
        return provider_class in self._registered

    def is_booted(self, provider_class: Type[IProvider]) -> bool:
        return provider_class in self._booted

    def copy(self, container: Optional[IContainer] = None) -> "ProviderRegistry":
        """Return a registry with copies of the providers and the same tracking state.

        Args:
            container: Container-aware provider copies are attached to it, so
                their ``register`` adds services there instead of the original.
        """
        registry = ProviderRegistry()
        for provider in self._providers:
            clone = copy.copy(provider)
            if container is not None and isinstance(clone, IContainerAware):
                clone.set_container(container)
            registry._providers.append(clone)
        registry._registered = set(self._registered)
        registry._booted = set(self._booted)
        return registry

    def __iter__(self):
        return iter(self._providers)

    def __len__(self) -> int:
        return len(self._providers)
