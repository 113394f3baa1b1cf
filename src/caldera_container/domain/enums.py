from enum import Enum


class InstanceKind(str, Enum):
    """Defines what a service's instance slot currently holds.

    Attributes:
        EMPTY: Nothing bound, the service name itself is constructed.
        CONCRETE: A pre-built object returned as-is.
        FACTORY: A callable receiving the container and returning the instance.
        BY_NAME: A class or class name implementing the service.
    """

    EMPTY = "empty"
    CONCRETE = "concrete"
    FACTORY = "factory"
    BY_NAME = "by_name"

    def __str__(self) -> str:
        return self.value
