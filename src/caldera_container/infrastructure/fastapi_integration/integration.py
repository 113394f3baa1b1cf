from typing import Any, Awaitable, Callable, Mapping, Optional

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from caldera_container.domain import IContainer


def create_fastapi_dependency(container: IContainer, name: Any) -> Callable[[], Any]:
    """Create a FastAPI Depends() callable that resolves from the container.

    The resolved instance follows the service registration: shared services
    yield the same object on every request.

    Args:
        container: The container to resolve from.
        name: The service name to resolve when the dependency is called.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> container = Container()
        >>> container.add(UserRepository, shared=True)
        >>>
        >>> get_user_repo = create_fastapi_dependency(container, UserRepository)
        >>>
        >>> @app.get("/users")
        >>> async def list_users(repo: UserRepository = Depends(get_user_repo)):
        ...     return await repo.get_all()
    """

    def dependency() -> Any:
        """Resolve the service from the container."""
        return container.get(name)

    return dependency


def get_request_container(request: Request) -> IContainer:
    """Return the container attached to a request by ``ContainerMiddleware``.

    Raises:
        RuntimeError: If the middleware is not installed.
    """
    container = getattr(request.state, "container", None)
    if container is None:
        raise RuntimeError("Request does not have a DI container. Did you forget to add ContainerMiddleware?")
    return container


def create_callable_dependency(
    target: Any, arguments: Optional[Mapping[str, Any]] = None
) -> Callable[[Request], Any]:
    """Create a FastAPI dependency that runs ``container.call`` on the request container.

    Requires the ContainerMiddleware to be installed.

    Args:
        target: Any callable shape accepted by ``Container.call``.
        arguments: Values bound by parameter name.

    Returns:
        A callable returning the result of the call.

    Example:
        >>> def current_settings(loader: SettingsLoader, section: str = "web"):
        ...     return loader.load(section)
        >>>
        >>> @app.get("/settings")
        >>> async def show(settings=Depends(create_callable_dependency(current_settings))):
        ...     return settings
    """

    def callable_dependency(request: Request) -> Any:
        """Call the target through the request's container."""
        return get_request_container(request).call(target, arguments)

    return callable_dependency


class ContainerMiddleware(BaseHTTPMiddleware):
    """Middleware that exposes the container on every request.

    The container is accessible via ``request.state.container``.

    Attributes:
        container: The container attached to requests.

    Example:
        >>> app = FastAPI()
        >>> app.add_middleware(ContainerMiddleware, container=container)
        >>>
        >>> @app.get("/")
        >>> async def root(request: Request):
        ...     mailer = request.state.container.get("mailer")
        ...     return {"message": "Hello"}
    """

    def __init__(self, app: FastAPI, container: IContainer):
        """Initialize the middleware with a container.

        Args:
            app: The FastAPI/Starlette application.
            container: The container to attach to requests.
        """
        super().__init__(app)
        self.container = container

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        """Attach the container to the request and execute the endpoint.

        Args:
            request: The incoming HTTP request.
            call_next: The next middleware or endpoint handler.

        Returns:
            The response from the endpoint.
        """
        request.state.container = self.container
        return await call_next(request)
