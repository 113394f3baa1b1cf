import inspect
import logging
from typing import Any, Callable, Dict, List, Mapping, Tuple, get_type_hints

from caldera_container.domain import (
    CircularReferenceError,
    IContainer,
    IResolver,
    MethodNotFoundError,
    ParameterResolutionError,
)

logger = logging.getLogger(__name__)

_NON_INJECTABLE_MODULES = ("builtins", "typing")
_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def is_injectable(annotation: Any) -> bool:
    """Check whether a parameter annotation names a class the container can supply.

    Builtin types (``int``, ``str``, ...) and typing constructs are not injectable,
    they are filled from bound arguments or defaults.
    """
    return inspect.isclass(annotation) and annotation.__module__ not in _NON_INJECTABLE_MODULES


def _type_hints(target: Callable[..., Any], parameters: List[inspect.Parameter]) -> Dict[str, Any]:
    try:
        return get_type_hints(getattr(target, "__func__", target))
    except Exception:
        # Unresolvable forward references: fall back to evaluated annotations only
        return {
            param.name: param.annotation
            for param in parameters
            if param.annotation is not inspect.Parameter.empty and not isinstance(param.annotation, str)
        }


class DependencyResolver(IResolver):
    """Resolves constructor and callable parameters using signatures and type hints.

    Uses Python's inspect module to walk parameters in declaration order and
    fills each one from bound arguments, the container, or its default value.
    """

    def make(self, cls: type, arguments: Mapping[str, Any], container: IContainer) -> Any:
        """Construct ``cls`` with auto-wired constructor parameters.

        Args:
            cls: The class to instantiate.
            arguments: Constructor arguments bound by parameter name.
            container: Container used for class-typed parameters.

        Returns:
            The new instance.

        Raises:
            ParameterResolutionError: If a parameter cannot be resolved.

        Example:
            >>> class Tap:
            ...     def __init__(self, foo: Foo, num: int = 0):
            ...         self.num = num
            >>>
            >>> tap = DependencyResolver().make(Tap, {"num": 5}, container)
        """
        if cls.__init__ is object.__init__:
            return cls()

        try:
            signature = inspect.signature(cls.__init__)
        except (TypeError, ValueError):
            # Constructors implemented in C expose no signature
            return cls()

        # Drop the receiver parameter
        parameters = list(signature.parameters.values())[1:]
        args, kwargs = self._resolve_parameters(cls.__init__, parameters, arguments, container)
        logger.debug("Constructing %s", cls.__qualname__)
        return cls(*args, **kwargs)

    def resolve(
        self,
        target: Callable[..., Any],
        arguments: Mapping[str, Any],
        container: IContainer,
    ) -> Tuple[List[Any], Dict[str, Any]]:
        """Resolve the parameters of a callable.

        Args:
            target: Function or bound method whose signature is inspected.
            arguments: Values bound by parameter name.
            container: Container used for class-typed parameters.

        Returns:
            Positional arguments in declaration order and keyword-only arguments.

        Raises:
            ParameterResolutionError: If a parameter cannot be resolved.
        """
        parameters = list(inspect.signature(target).parameters.values())
        return self._resolve_parameters(target, parameters, arguments, container)

    def _resolve_parameters(
        self,
        target: Callable[..., Any],
        parameters: List[inspect.Parameter],
        arguments: Mapping[str, Any],
        container: IContainer,
    ) -> Tuple[List[Any], Dict[str, Any]]:
        hints = _type_hints(target, parameters)
        args: List[Any] = []
        kwargs: Dict[str, Any] = {}

        for param in parameters:
            if param.kind in _SKIPPED_KINDS:
                continue

            value = self._resolve_parameter(param, hints.get(param.name), arguments, container)
            if param.kind == inspect.Parameter.KEYWORD_ONLY:
                kwargs[param.name] = value
            else:
                args.append(value)

        return args, kwargs

    def _resolve_parameter(
        self,
        param: inspect.Parameter,
        annotation: Any,
        arguments: Mapping[str, Any],
        container: IContainer,
    ) -> Any:
        if is_injectable(annotation):
            if param.name in arguments and type(arguments[param.name]) is annotation:
                return arguments[param.name]

            try:
                return container.get(annotation)
            except CircularReferenceError:
                raise
            except Exception as e:
                raise ParameterResolutionError(container, param.name, str(e)) from e

        if param.name in arguments:
            return arguments[param.name]
        if param.default is not inspect.Parameter.empty:
            return param.default
        raise ParameterResolutionError(container, param.name, "no bound argument and no default value")

    def decorate(self, instance: Any, decorators: Mapping[str, Any], container: IContainer) -> None:
        """Run decorator method calls on a freshly built instance.

        Args:
            instance: The service instance.
            decorators: Method names mapped to positional (sequence) or keyword (mapping) arguments.
            container: Container reported on raised errors.

        Raises:
            MethodNotFoundError: If a method is missing or not callable.
        """
        for method, method_arguments in decorators.items():
            bound = getattr(instance, method, None)
            if not callable(bound):
                raise MethodNotFoundError(container, method)

            if isinstance(method_arguments, Mapping):
                bound(**method_arguments)
            else:
                bound(*method_arguments)
