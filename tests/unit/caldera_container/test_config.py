"""Unit tests for ContainerSettings."""

from caldera_container.config import ContainerSettings


class TestContainerSettings:
    """Test cases for ContainerSettings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("CALDERA_CONTAINER_AUTOWIRE", raising=False)
        monkeypatch.delenv("CALDERA_CONTAINER_THREAD_SAFE", raising=False)

        settings = ContainerSettings()

        assert settings.autowire is True
        assert settings.thread_safe is True

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("CALDERA_CONTAINER_AUTOWIRE", "false")
        monkeypatch.setenv("CALDERA_CONTAINER_THREAD_SAFE", "0")

        settings = ContainerSettings()

        assert settings.autowire is False
        assert settings.thread_safe is False

    def test_explicit_values_override_environment(self, monkeypatch):
        monkeypatch.setenv("CALDERA_CONTAINER_AUTOWIRE", "false")

        assert ContainerSettings(autowire=True).autowire is True
