"""Application layer - Callable shape inspection for ``Container.call``."""

import builtins
import functools
import importlib
import inspect
from typing import Any, Callable, Optional

from caldera_container.domain import IContainer, MethodNotFoundError, NotCallableError


def locate(path: str) -> Optional[Any]:
    """Look up a builtin name or a dotted ``module.attribute`` path.

    Returns:
        The located object, or ``None`` when nothing matches.
    """
    if "." not in path:
        return getattr(builtins, path, None)

    module_name, _, attribute = path.rpartition(".")
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return None
    return getattr(module, attribute, None)


class CallableInspector:
    """Normalizes the supported callable shapes into an invocable target.

    Supported shapes:
    - functions, lambdas, bound methods and builtins;
    - ``(receiver, "method")`` pairs, as a tuple or a list;
    - invokable objects (instances defining ``__call__``);
    - strings naming a builtin or a dotted path to a function.
    """

    def __init__(self, container: IContainer) -> None:
        self._container = container

    def target(self, value: Any) -> Callable[..., Any]:
        """Return the callable whose signature is resolved and which is invoked.

        Args:
            value: The callable in any supported shape.

        Raises:
            MethodNotFoundError: If a receiver/method pair names a missing method.
            NotCallableError: If the value is not a supported callable shape.
        """
        if inspect.isroutine(value) or isinstance(value, functools.partial):
            return self._checked(value)

        if isinstance(value, (tuple, list)) and len(value) == 2 and isinstance(value[1], str):
            receiver, method = value
            bound = getattr(receiver, method, None)
            if not callable(bound):
                raise MethodNotFoundError(self._container, method)
            return self._checked(bound)

        if isinstance(value, str):
            located = locate(value)
            if located is not None and inspect.isroutine(located):
                return self._checked(located)
            raise NotCallableError(self._container, f"'{value}' is not a callable")

        if not isinstance(value, type) and callable(value):
            return self._checked(value.__call__)

        raise NotCallableError(self._container, "The specified value is not a callable")

    def _checked(self, target: Callable[..., Any]) -> Callable[..., Any]:
        try:
            inspect.signature(target)
        except (TypeError, ValueError) as e:
            raise NotCallableError(self._container, f"Can not inspect the parameters of {target!r}") from e
        return target
