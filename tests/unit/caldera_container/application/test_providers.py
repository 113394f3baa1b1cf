"""Unit tests for AbstractProvider and ProviderRegistry."""

import pytest

from caldera_container.application.container_aware import ContainerAware
from caldera_container.application.providers import AbstractProvider, ProviderRegistry
from caldera_container.domain import IContainerAware, IProvider


class RecordingProvider(AbstractProvider):
    """Provider recording its lifecycle calls."""

    provides_names = ["mailer", "transport"]

    def __init__(self):
        self.calls = []

    def bootstrap(self):
        self.calls.append("bootstrap")

    def register(self):
        self.calls.append("register")

    def boot(self):
        self.calls.append("boot")


class OtherProvider(RecordingProvider):
    provides_names = ["mailer", "clock"]


class TestAbstractProvider:
    """Test cases for AbstractProvider."""

    def test_provider_is_container_aware(self):
        provider = RecordingProvider()

        assert isinstance(provider, IProvider)
        assert isinstance(provider, IContainerAware)
        assert isinstance(provider, ContainerAware)

    def test_provides_checks_declared_names(self):
        provider = RecordingProvider()

        assert provider.provides("mailer")
        assert provider.provides("transport")
        assert not provider.provides("clock")

    def test_default_hooks_are_noops(self):
        class MinimalProvider(AbstractProvider):
            provides_names = ["x"]

            def register(self):
                pass

        provider = MinimalProvider()
        provider.bootstrap()
        provider.boot()

        assert provider.provides("x")

    def test_provider_without_names_provides_nothing(self):
        class EmptyProvider(AbstractProvider):
            def register(self):
                pass

        assert not EmptyProvider().provides("anything")


class TestProviderRegistry:
    """Test cases for ProviderRegistry."""

    def test_empty_registry_provides_nothing(self):
        registry = ProviderRegistry()

        assert not registry.provides("mailer")
        assert len(registry) == 0

    def test_provides_checks_all_providers(self):
        registry = ProviderRegistry()
        registry.add(RecordingProvider())
        registry.add(OtherProvider())

        assert registry.provides("transport")
        assert registry.provides("clock")
        assert not registry.provides("cache")

    def test_register_boots_then_registers(self):
        registry = ProviderRegistry()
        provider = RecordingProvider()
        registry.add(provider)

        registry.register("mailer")

        assert provider.calls == ["boot", "register"]
        assert registry.is_booted(RecordingProvider)
        assert registry.is_registered(RecordingProvider)

    def test_register_runs_once_per_provider_class(self):
        registry = ProviderRegistry()
        provider = RecordingProvider()
        registry.add(provider)

        registry.register("mailer")
        registry.register("transport")
        registry.register("mailer")

        assert provider.calls == ["boot", "register"]

    def test_register_first_match_wins(self):
        registry = ProviderRegistry()
        first = RecordingProvider()
        second = OtherProvider()
        registry.add(first)
        registry.add(second)

        registry.register("mailer")

        assert first.calls == ["boot", "register"]
        assert second.calls == []

    def test_register_falls_through_to_next_pending_provider(self):
        registry = ProviderRegistry()
        first = RecordingProvider()
        second = OtherProvider()
        registry.add(first)
        registry.add(second)

        registry.register("mailer")
        registry.register("mailer")

        assert second.calls == ["boot", "register"]

    def test_register_unknown_service_is_noop(self):
        registry = ProviderRegistry()
        provider = RecordingProvider()
        registry.add(provider)

        registry.register("cache")

        assert provider.calls == []
        assert not registry.is_booted(RecordingProvider)

    def test_same_class_registers_once_across_instances(self):
        registry = ProviderRegistry()
        first = RecordingProvider()
        second = RecordingProvider()
        registry.add(first)
        registry.add(second)

        registry.register("mailer")
        registry.register("mailer")

        assert first.calls == ["boot", "register"]
        assert second.calls == []

    def test_copy_is_independent(self):
        registry = ProviderRegistry()
        registry.add(RecordingProvider())

        clone = registry.copy()
        clone.register("mailer")

        assert clone.is_registered(RecordingProvider)
        assert not registry.is_registered(RecordingProvider)
        assert [type(provider) for provider in clone] == [RecordingProvider]

    def test_copy_attaches_providers_to_new_container(self):
        original_container = object()
        new_container = object()
        provider = RecordingProvider().set_container(original_container)
        registry = ProviderRegistry()
        registry.add(provider)

        clone = registry.copy(new_container)

        (copied,) = list(clone)
        assert copied is not provider
        assert copied.get_container() is new_container
        assert provider.get_container() is original_container
