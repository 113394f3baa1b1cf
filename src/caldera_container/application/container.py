import contextlib
import inspect
import logging
import threading
from typing import Any, Dict, Iterator, List, Mapping, Optional

from caldera_container.application.caller import CallableInspector, locate
from caldera_container.application.providers import ProviderRegistry
from caldera_container.application.resolver import DependencyResolver
from caldera_container.config import ContainerSettings
from caldera_container.domain import (
    CircularReferenceError,
    IContainer,
    IContainerAware,
    IProvider,
    IResolver,
    InstanceKind,
    InstanceSlot,
    InstantiationError,
    NotFoundError,
    ProviderError,
    Service,
)
from caldera_container.domain.exceptions import describe

logger = logging.getLogger(__name__)


def instantiable_class(name: Any) -> Optional[type]:
    """Return the concrete class a name refers to, if any.

    Accepts a class object or a dotted ``module.ClassName`` path. Abstract
    classes and protocols are not instantiable.
    """
    candidate = name
    if isinstance(name, str):
        if "." not in name:
            return None
        candidate = locate(name)

    if not inspect.isclass(candidate):
        return None
    if inspect.isabstract(candidate) or getattr(candidate, "_is_protocol", False):
        return None
    return candidate


def _binds_itself(name: Any, slot: InstanceSlot) -> bool:
    return slot.kind == InstanceKind.BY_NAME and slot.value == name


class Container(IContainer):
    """Main dependency injection container.

    Maps service names (strings or classes) to ``Service`` bindings and
    resolves object graphs on demand, auto-wiring constructor parameters and
    activating providers lazily the first time one of their names is requested.

    Attributes:
        _services: Dictionary mapping service names to their bindings.
        _providers: Attached providers and their boot/register tracking.
        _resolver: Component responsible for construction and auto-wiring.
        _inspector: Component normalizing callables for ``call``.
        _chain: Names under construction, outermost first.
        _settings: Behaviour switches.
        _lock: Re-entrant lock around public operations.
    """

    def __init__(self, settings: Optional[ContainerSettings] = None) -> None:
        """Initialize the container with an empty registry.

        Args:
            settings: Behaviour switches. Defaults to ``ContainerSettings()``.
        """
        self._settings = settings or ContainerSettings()
        self._services: Dict[Any, Service] = {}
        self._providers = ProviderRegistry()
        self._resolver: IResolver = DependencyResolver()
        self._inspector = CallableInspector(self)
        self._chain: List[Any] = []
        self._lock = threading.RLock() if self._settings.thread_safe else contextlib.nullcontext()

    @property
    def settings(self) -> ContainerSettings:
        return self._settings

    def add(self, name: Any, shared: bool = False, instance: Any = None) -> Service:
        """Register a service.

        Registering a name twice returns the existing ``Service`` untouched.

        Args:
            name: Service name, a string or a class.
            shared: Reuse the first resolved instance.
            instance: ``None`` to construct ``name`` itself, a concrete object,
                a factory receiving the container, or an implementation class
                (or dotted class path).

        Returns:
            The service binding, for chaining ``with_argument``/``with_decorator``.

        Example:
            >>> container.add(Mailer, shared=True).with_argument("host", "localhost")
            >>> container.add(Transport, False, SmtpTransport)
            >>> container.add("clock", False, lambda c: SystemClock())
        """
        with self._lock:
            if name not in self._services:
                self._services[name] = Service.create(shared, instance)
                logger.debug("Added service %s (shared=%s)", describe(name), shared)
            return self._services[name]

    def remove(self, name: Any) -> "Container":
        """Remove a service; removing an unknown name is a no-op."""
        with self._lock:
            self._services.pop(name, None)
        return self

    def has(self, name: Any) -> bool:
        """Check whether a service is registered or claimed by a provider."""
        with self._lock:
            return name in self._services or self._providers.provides(name)

    def provider(self, provider: IProvider) -> "Container":
        """Attach a service provider.

        The provider is given this container if it is container-aware and is
        bootstrapped immediately. Its ``boot`` and ``register`` run later, the
        first time one of its names is requested.

        Args:
            provider: The provider to attach.

        Returns:
            This container, for chaining.
        """
        with self._lock:
            if isinstance(provider, IContainerAware):
                provider.set_container(self)
            provider.bootstrap()
            self._providers.add(provider)
        return self

    def get(self, name: Any) -> Any:
        """Resolve and return the instance for a service name.

        Args:
            name: Service name, a string or a class.

        Returns:
            The resolved instance; the same object for every call on a shared service.

        Raises:
            NotFoundError: If the name is unknown and not an instantiable class.
            ProviderError: If a provider claims the name but does not add it.
            CircularReferenceError: If the name is requested again while being built.
            ParameterResolutionError: If a constructor parameter cannot be resolved.
            MethodNotFoundError: If a decorator names a missing method.
            InstantiationError: If no instance can be produced.
        """
        with self._lock:
            if not self.has(name):
                return self._construct_unregistered(name)

            if name not in self._services:
                self._providers.register(name)
                if name not in self._services:
                    raise ProviderError(self, f"Service '{describe(name)}' not provided by any registered provider")

            service = self._services[name]
            if service.is_locked():
                raise self._circular(name)

            slot = service.instance
            service.set_locked(True)
            try:
                with self._constructing(name):
                    instance = self._build(name, service)
            finally:
                service.set_locked(False)

            if instance is None:
                raise InstantiationError(self, f"Service '{describe(name)}' can not be instantiated")

            if service.is_shared() and (slot.is_empty or slot.is_factory or _binds_itself(name, slot)):
                service.cache_instance(instance)
            return instance

    def _construct_unregistered(self, name: Any) -> Any:
        cls = instantiable_class(name) if self._settings.autowire else None
        if cls is None:
            raise NotFoundError(self, name)

        # Unregistered classes have no Service to lock
        if name in self._chain:
            raise self._circular(name)

        with self._constructing(name):
            instance = self._resolver.make(cls, {}, self)

        if instance is None:
            raise InstantiationError(self, f"Class '{describe(name)}' can not be instantiated")
        return instance

    @contextlib.contextmanager
    def _constructing(self, name: Any) -> Iterator[None]:
        self._chain.append(name)
        try:
            yield
        finally:
            self._chain.pop()

    def _circular(self, name: Any) -> CircularReferenceError:
        start = self._chain.index(name) if name in self._chain else 0
        return CircularReferenceError(self, self._chain[start:] + [name])

    def _build(self, name: Any, service: Service) -> Any:
        slot = service.instance

        if slot.kind == InstanceKind.CONCRETE:
            return slot.value

        if slot.kind == InstanceKind.FACTORY:
            return slot.value(self)

        if slot.kind == InstanceKind.EMPTY:
            cls = instantiable_class(name)
            if cls is not None:
                return self._make(cls, service)

        if slot.kind == InstanceKind.BY_NAME:
            implementation = slot.value
            if not _binds_itself(name, slot) and self.has(implementation):
                return self.get(implementation)
            cls = instantiable_class(implementation)
            if cls is not None:
                return self._make(cls, service)

        raise InstantiationError(self, f"Service '{describe(name)}' can not be instantiated")

    def _make(self, cls: type, service: Service) -> Any:
        instance = self._resolver.make(cls, service.get_arguments(), self)
        self._resolver.decorate(instance, service.get_decorators(), self)
        return instance

    def call(self, target: Any, arguments: Optional[Mapping[str, Any]] = None) -> Any:
        """Call a callable, resolving its parameters like a constructor.

        Args:
            target: Function, ``(receiver, "method")`` pair, invokable object,
                or the name of a function (builtin or dotted path).
            arguments: Values bound by parameter name, in any order.

        Returns:
            Whatever the callable returns.

        Raises:
            NotCallableError: If ``target`` is not a supported callable shape.
            MethodNotFoundError: If a receiver/method pair names a missing method.
            ParameterResolutionError: If a parameter cannot be resolved.

        Example:
            >>> container.call(lambda mailer, to: mailer.send(to), {"to": "ops@example.com"})
            >>> container.call((report, "render"), {"fmt": "pdf"})
        """
        with self._lock:
            func = self._inspector.target(target)
            args, kwargs = self._resolver.resolve(func, arguments or {}, self)
        return func(*args, **kwargs)

    def services(self) -> List[Any]:
        """Names of the registered services."""
        with self._lock:
            return list(self._services)

    def get_registry_copy(self) -> Dict[Any, Service]:
        """Get an independent copy of the registry.

        Returns:
            Service names mapped to copies of their bindings.
        """
        with self._lock:
            return {
                name: service.model_copy(
                    update={"arguments": dict(service.arguments), "decorators": dict(service.decorators)}
                )
                for name, service in self._services.items()
            }

    def set_registry(self, registry: Dict[Any, Service]) -> None:
        with self._lock:
            self._services = registry

    def clear(self) -> None:
        """Clear all registrations.

        Attached providers are kept.
        """
        with self._lock:
            self._services.clear()

    def __getitem__(self, name: Any) -> Any:
        return self.get(name)

    def __setitem__(self, name: Any, value: Any) -> None:
        self.add(name, False, value)

    def __delitem__(self, name: Any) -> None:
        self.remove(name)

    def __contains__(self, name: Any) -> bool:
        return self.has(name)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.services())
