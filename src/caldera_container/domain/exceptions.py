from typing import TYPE_CHECKING, Any, List, Optional

if TYPE_CHECKING:
    from caldera_container.domain.interfaces import IContainer


def describe(name: Any) -> str:
    """Return a readable label for a service name (string or class)."""
    if isinstance(name, type):
        return name.__qualname__
    return str(name)


class ContainerError(Exception):
    """Base exception for container failures.

    Attributes:
        container: The container that raised the error.
    """

    def __init__(self, container: Optional["IContainer"], message: str = "") -> None:
        self.container = container
        super().__init__(message)


class NotFoundError(ContainerError):
    """Raised when a name is neither registered, provided nor constructible.

    Attributes:
        name: The requested service name.
    """

    def __init__(self, container: Optional["IContainer"], name: Any) -> None:
        self.name = name
        super().__init__(container, f"Service '{describe(name)}' not found")


class CircularReferenceError(ContainerError):
    """Raised when a name is requested again while it is still being built.

    Attributes:
        chain: Names involved in the cycle, first and last being the same.
    """

    def __init__(self, container: Optional["IContainer"], chain: List[Any]) -> None:
        self.chain = chain
        path = " -> ".join(describe(name) for name in chain)
        super().__init__(container, f"Circular reference for '{describe(chain[-1])}' service: {path}")


class ParameterResolutionError(ContainerError):
    """Raised when a constructor or callable parameter cannot be resolved.

    Attributes:
        parameter: Name of the offending parameter.
        reason: Optional reason for the failure.
    """

    def __init__(self, container: Optional["IContainer"], parameter: str, reason: Optional[str] = None) -> None:
        self.parameter = parameter
        self.reason = reason
        message = f"Can not resolve parameter '{parameter}'"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(container, message)


class MethodNotFoundError(ContainerError):
    """Raised when a decorator or callable refers to a missing method.

    Attributes:
        method: The method name that was looked up.
    """

    def __init__(self, container: Optional["IContainer"], method: str) -> None:
        self.method = method
        super().__init__(container, f"Method '{method}' does not exist")


class InstantiationError(ContainerError):
    """Raised when a service yields no usable instance."""


class NotCallableError(ContainerError):
    """Raised by ``call`` for values that are not a supported callable shape."""


class ProviderError(ContainerError):
    """Raised when a provider claims a service but never adds it."""
