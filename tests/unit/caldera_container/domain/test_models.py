"""Unit tests for domain models."""

import functools

import pytest
from pydantic import ValidationError

from caldera_container.domain.enums import InstanceKind
from caldera_container.domain.models import InstanceSlot, Service


class Mailer:
    def send(self):
        return True


def build_mailer(container):
    return Mailer()


class TestInstanceSlot:
    """Test cases for the InstanceSlot model."""

    def test_default_slot_is_empty(self):
        slot = InstanceSlot()

        assert slot.kind == InstanceKind.EMPTY
        assert slot.value is None
        assert slot.is_empty

    def test_from_none_is_empty(self):
        assert InstanceSlot.from_value(None).kind == InstanceKind.EMPTY

    def test_from_class_is_by_name(self):
        slot = InstanceSlot.from_value(Mailer)

        assert slot.kind == InstanceKind.BY_NAME
        assert slot.value is Mailer

    def test_from_string_is_by_name(self):
        slot = InstanceSlot.from_value("app.mail.SmtpMailer")

        assert slot.kind == InstanceKind.BY_NAME
        assert slot.value == "app.mail.SmtpMailer"

    @pytest.mark.parametrize(
        "factory",
        [
            build_mailer,
            lambda c: Mailer(),
            functools.partial(build_mailer),
        ],
    )
    def test_from_function_is_factory(self, factory):
        slot = InstanceSlot.from_value(factory)

        assert slot.kind == InstanceKind.FACTORY
        assert slot.is_factory

    def test_from_bound_method_is_factory(self):
        class Factories:
            def mailer(self, container):
                return Mailer()

        assert InstanceSlot.from_value(Factories().mailer).kind == InstanceKind.FACTORY

    def test_from_object_is_concrete(self):
        mailer = Mailer()
        slot = InstanceSlot.from_value(mailer)

        assert slot.kind == InstanceKind.CONCRETE
        assert slot.value is mailer

    def test_invokable_object_is_concrete(self):
        """Test that objects defining __call__ are not treated as factories."""

        class Invokable:
            def __call__(self, container):
                return Mailer()

        assert InstanceSlot.from_value(Invokable()).kind == InstanceKind.CONCRETE

    def test_slot_is_frozen(self):
        slot = InstanceSlot.from_value(Mailer)

        with pytest.raises(ValidationError):
            slot.kind = InstanceKind.CONCRETE


class TestService:
    """Test cases for the Service model."""

    def test_service_defaults(self):
        service = Service()

        assert service.is_shared() is False
        assert service.is_locked() is False
        assert service.get_instance() is None
        assert service.get_arguments() == {}
        assert service.get_decorators() == {}

    def test_create_classifies_instance(self):
        service = Service.create(True, build_mailer)

        assert service.is_shared() is True
        assert service.instance.kind == InstanceKind.FACTORY
        assert service.get_instance() is build_mailer

    def test_setters_are_fluent(self):
        service = Service()

        assert service.set_shared(True) is service
        assert service.set_locked(True) is service
        assert service.set_instance(Mailer) is service
        assert service.is_shared() is True
        assert service.is_locked() is True
        assert service.instance.kind == InstanceKind.BY_NAME

    def test_with_argument(self):
        service = Service().with_argument("host", "localhost").with_argument("port", 25)

        assert service.get_argument("host") == "localhost"
        assert service.get_argument("port") == 25
        assert service.get_arguments() == {"host": "localhost", "port": 25}

    def test_get_argument_default(self):
        service = Service()

        assert service.get_argument("missing") == ""
        assert service.get_argument("missing", 10) == 10

    def test_with_decorator_keeps_binding_order(self):
        service = Service().with_decorator("set_host", ["localhost"]).with_decorator("set_port", {"port": 25})

        assert list(service.get_decorators()) == ["set_host", "set_port"]
        assert service.get_decorator("set_host") == ["localhost"]
        assert service.get_decorator("set_port") == {"port": 25}
        assert service.get_decorator("missing") is None

    def test_with_decorator_without_arguments(self):
        service = Service().with_decorator("connect")

        assert service.get_decorator("connect") == ()

    @pytest.mark.parametrize("arguments", ["abc", b"abc"])
    def test_with_decorator_rejects_text_arguments(self, arguments):
        """Test that a bare string is not split into per-character arguments."""
        service = Service()

        with pytest.raises(TypeError):
            service.with_decorator("set_name", arguments)

        assert service.get_decorators() == {}

    def test_with_decorator_accepts_single_string_in_list(self):
        service = Service().with_decorator("set_name", ["abc"])

        assert service.get_decorator("set_name") == ["abc"]

    def test_cache_instance_stores_concrete_value(self):
        """Test that cached values are concrete even when they are callables."""
        service = Service.create(True, build_mailer)

        service.cache_instance(build_mailer)

        assert service.instance.kind == InstanceKind.CONCRETE
        assert service.get_instance() is build_mailer
