from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ContainerSettings(BaseSettings):
    """Container behaviour switches, overridable through the environment.

    Attributes:
        autowire: Construct unregistered classes on demand.
        thread_safe: Serialize public container operations behind a re-entrant lock.

    Example:
        >>> # CALDERA_CONTAINER_AUTOWIRE=false
        >>> ContainerSettings().autowire
        False
    """

    model_config = SettingsConfigDict(env_prefix="CALDERA_CONTAINER_")

    autowire: bool = Field(default=True, description="Construct unregistered classes on demand.")
    thread_safe: bool = Field(default=True, description="Guard container operations with a lock.")
