import functools
import logging

import pytest

from robocontainer import (
    ClassFactory,
    ComponentNotFoundError,
    Container,
    Instance,
    Name,
    PlainFactory,
    Type,
    Value,
    contract_name,
)


def test_resolve_unregistered_string_contract_raises():
    c = Container()
    with pytest.raises(ComponentNotFoundError) as ctx:
        c.resolve("unknown-contract")
    assert ctx.value.name == "unknown-contract"
    assert isinstance(ctx.value, LookupError)


def test_bind_class_resolves_new_instance_of_class():
    c = Container()

    class Service: ...

    c.bind(Service).to(Service)
    obj = c.resolve(Service)
    assert isinstance(obj, Service)


def test_bind_name_to_derived_class():
    c = Container()

    class Base: ...

    class Derived(Base): ...

    c.bind(Base).to(Derived)
    assert isinstance(c.resolve("Base"), Derived)


def test_class_builder_returns_distinct_instances_without_singleton():
    c = Container()

    class A: ...

    c.bind("a").to(A)
    assert c.resolve("a") is not c.resolve("a")


def test_lambda_is_invoked_as_factory():
    c = Container()
    sentinel = object()

    c.bind("thing").to(lambda: sentinel)
    assert c.resolve("thing") is sentinel


def test_factory_returns_fresh_value_each_call():
    c = Container()

    c.bind("list").to(lambda: [])
    first = c.resolve("list")
    second = c.resolve("list")
    assert first == second == []
    assert first is not second


def test_named_function_is_invoked_as_factory():
    c = Container()

    def make_port():
        return 5555

    c.bind("port").to(make_port)
    assert c.resolve("port") == 5555


def test_partial_is_invoked_as_factory():
    c = Container()

    c.bind("pair").to(functools.partial(tuple, "ab"))
    assert c.resolve("pair") == ("a", "b")


def test_fixed_instance_is_same_reference_on_every_resolve():
    c = Container()
    settings = {"debug": True}

    c.bind("settings").to(settings)
    assert c.resolve("settings") is settings
    assert c.resolve("settings") is settings


def test_fixed_instance_ignores_dependencies_and_properties():
    c = Container()
    settings = {"debug": True}

    c.bind("settings").to(settings).use("missing").set(attr="also-missing")
    assert c.resolve("settings") is settings


def test_instance_tag_hands_out_callable_verbatim():
    c = Container()

    def callback(): ...

    c.bind("callback").to(Instance(callback))
    assert c.resolve("callback") is callback


def test_plain_factory_tag_calls_class_without_classification():
    c = Container()

    class Widget:
        def __init__(self, size):
            self.size = size

    c.bind("size").to(3)
    c.bind("widget").to(PlainFactory(Widget)).use("size")
    widget = c.resolve("widget")
    assert isinstance(widget, Widget)
    assert widget.size == 3


def test_class_factory_tag_constructs_with_dependencies():
    c = Container()

    class Repo:
        def __init__(self, db):
            self.db = db

    c.bind("db").to("sqlite://")
    c.bind("repo").to(ClassFactory(Repo)).use("db")
    assert c.resolve("repo").db == "sqlite://"


def test_name_and_type_tags_share_keys_with_untagged_contracts():
    c = Container()

    class Repo: ...

    c.bind(Name("db")).to("sqlite://")
    c.bind(Type(Repo)).to(Repo)

    assert c.resolve("db") == "sqlite://"
    assert isinstance(c.resolve(Repo), Repo)
    assert isinstance(c.resolve("Repo"), Repo)


def test_rebinding_overwrites_description():
    c = Container()

    c.bind("greeting").to("hello")
    assert c.resolve("greeting") == "hello"

    c.bind("greeting").to("bonjour")
    assert c.resolve("greeting") == "bonjour"


def test_value_resolves_without_registry():
    c = Container()

    assert c.resolve(c.value(42)) == 42
    assert c.resolve(Value(None)) is None
    assert "42" not in c


def test_container_is_callable():
    c = Container()

    c.bind("answer").to(42)
    assert c("answer") == 42


def test_contains_reports_bound_contracts():
    c = Container()

    class Service: ...

    c.bind(Service).to(Service)
    assert Service in c
    assert "Service" in c
    assert "Other" not in c
    assert Value("Service") not in c


def test_description_exposes_registration():
    c = Container()

    c.bind("svc").to(object).use("a", "b").set(log="logger")
    description = c.description("svc")
    assert description.name == "svc"
    assert description.dependencies == ("a", "b")
    assert description.inject_properties == {"log": "logger"}

    with pytest.raises(ComponentNotFoundError):
        c.description("missing")


def test_contract_name_derivation():
    class Service: ...

    def make_service(): ...

    assert contract_name("svc") == "svc"
    assert contract_name(Service) == "Service"
    assert contract_name(make_service) == "make_service"
    assert contract_name(lambda: None) == ""
    assert contract_name(Name("x")) == "x"
    assert contract_name(Type(Service)) == "Service"
    assert contract_name(Type(lambda: None)) == ""
    assert contract_name(42) == ""


def test_binding_is_logged_at_debug(caplog):
    caplog.set_level(logging.DEBUG, logger="robocontainer")
    c = Container()

    c.bind("db").to("sqlite://")
    assert "Bound 'db'" in caplog.text
