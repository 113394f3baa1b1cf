from typing import Optional

from caldera_container.domain import IContainer, IContainerAware


class ContainerAware(IContainerAware):
    """Mixin holding a container reference.

    Attributes:
        container: The attached container, ``None`` until ``set_container`` is called.
    """

    container: Optional[IContainer] = None

    def set_container(self, container: IContainer) -> "ContainerAware":
        """Set container instance.

        Args:
            container: The container to attach.

        Returns:
            This object, for chaining.
        """
        self.container = container
        return self

    def get_container(self) -> IContainer:
        """Get container instance.

        Raises:
            RuntimeError: If no container has been attached.
        """
        if self.container is None:
            raise RuntimeError("Container instance not set")
        return self.container
