import functools
import inspect
from typing import Any, Dict, Mapping, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

from caldera_container.domain.enums import InstanceKind

DecoratorArguments = Union[Sequence[Any], Mapping[str, Any]]


class InstanceSlot(BaseModel):
    """Value object describing how a service obtains its instance.

    Attributes:
        kind: Which variant the slot holds.
        value: The raw object, factory, class or class name.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: InstanceKind = Field(default=InstanceKind.EMPTY, description="Variant held by the slot.")
    value: Any = Field(default=None, description="Raw value bound to the slot.")

    @classmethod
    def from_value(cls, value: Any) -> "InstanceSlot":
        """Classify a raw binding into a slot.

        Args:
            value: ``None``, a class or class name, a factory function, or an object.

        Returns:
            The slot tagged with the matching ``InstanceKind``.

        Example:
            >>> InstanceSlot.from_value(lambda c: Mailer()).kind
            <InstanceKind.FACTORY: 'factory'>
        """
        if value is None:
            return cls(kind=InstanceKind.EMPTY)
        if isinstance(value, (str, type)):
            return cls(kind=InstanceKind.BY_NAME, value=value)
        if inspect.isfunction(value) or inspect.ismethod(value) or isinstance(value, functools.partial):
            return cls(kind=InstanceKind.FACTORY, value=value)
        return cls(kind=InstanceKind.CONCRETE, value=value)

    @property
    def is_empty(self) -> bool:
        return self.kind == InstanceKind.EMPTY

    @property
    def is_factory(self) -> bool:
        return self.kind == InstanceKind.FACTORY


class Service(BaseModel):
    """Binding metadata registered under a service name.

    The name itself is the registry key and is not stored here.

    Attributes:
        shared: Whether the first resolved instance is reused.
        instance: The instance slot (empty, concrete, factory or by-name).
        arguments: Constructor arguments bound by parameter name.
        decorators: Post-construction method calls, in binding order.
        locked: True while the service is being constructed.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    shared: bool = Field(default=False, description="Reuse the first resolved instance.")
    instance: InstanceSlot = Field(default_factory=InstanceSlot, description="How the instance is obtained.")
    arguments: Dict[str, Any] = Field(default_factory=dict, description="Bound constructor arguments.")
    decorators: Dict[str, Any] = Field(default_factory=dict, description="Decorator method calls.")
    locked: bool = Field(default=False, description="Construction in progress.")

    @classmethod
    def create(cls, shared: bool = False, instance: Any = None) -> "Service":
        """Build a service from a raw instance binding."""
        return cls(shared=shared, instance=InstanceSlot.from_value(instance))

    def set_locked(self, locked: bool) -> "Service":
        self.locked = locked
        return self

    def set_shared(self, shared: bool) -> "Service":
        self.shared = shared
        return self

    def set_instance(self, instance: Any) -> "Service":
        self.instance = InstanceSlot.from_value(instance)
        return self

    def cache_instance(self, instance: Any) -> "Service":
        """Store a resolved instance as the concrete value of the slot."""
        self.instance = InstanceSlot(kind=InstanceKind.CONCRETE, value=instance)
        return self

    def with_argument(self, name: str, value: Any = "") -> "Service":
        """Bind a constructor argument by parameter name.

        Args:
            name: Parameter name.
            value: Value passed for that parameter.
        """
        self.arguments[name] = value
        return self

    def with_decorator(self, name: str, arguments: DecoratorArguments = ()) -> "Service":
        """Bind a method to call on each freshly built instance.

        Args:
            name: Method name.
            arguments: Positional arguments (sequence) or keyword arguments (mapping).

        Raises:
            TypeError: If ``arguments`` is a string or bytes, which would be split
                into one positional argument per character.
        """
        if isinstance(arguments, (str, bytes)):
            raise TypeError(
                f"Decorator '{name}' arguments must be a sequence or a mapping, not {type(arguments).__name__}"
            )
        self.decorators[name] = arguments
        return self

    def is_locked(self) -> bool:
        return self.locked

    def is_shared(self) -> bool:
        return self.shared

    def get_instance(self) -> Any:
        return self.instance.value

    def get_argument(self, name: str, default: Any = "") -> Any:
        return self.arguments.get(name, default)

    def get_decorator(self, name: str) -> Any:
        return self.decorators.get(name)

    def get_arguments(self) -> Dict[str, Any]:
        return self.arguments

    def get_decorators(self) -> Dict[str, Any]:
        return self.decorators
