"""Minimal dependency injection container.

Contracts (names or classes) are bound to concretes (classes, factories or
fixed instances) through a small fluent DSL, then resolved on demand:

  container = Container()
  container.bind("db").to(Database).as_singleton()
  container.bind(Service).to(Service).use("db").set(clock="clock")
  service = container.resolve(Service)

Exports:
- `Container`: registry plus the resolution engine.
- `Name`, `Type`, `Value`: explicit contract tags; `Value` bypasses the registry.
- `Instance`, `ClassFactory`, `PlainFactory`: explicit concrete tags for `.to()`.
- `identity_map`: pre-declares names to share within one resolution call.
- `configure`, `reset`, `bind`, `resolve`, `value`: the process-wide default container.
"""

from ._builders import ClassFactory, Instance, PlainFactory
from ._container import ComponentDescription, ConcreteSpecification, Container, DependencySpecification
from ._contracts import Name, Type, Value, contract_name, identity_map
from ._default import bind, configure, reset, resolve, value
from ._errors import (
    CircularDependencyError,
    ComponentNotFoundError,
    ConcreteNotSpecifiedError,
    ContainerError,
    InvalidContractError,
    ResolutionError,
)


__all__ = [
    "CircularDependencyError",
    "ClassFactory",
    "ComponentDescription",
    "ComponentNotFoundError",
    "ConcreteNotSpecifiedError",
    "ConcreteSpecification",
    "Container",
    "ContainerError",
    "DependencySpecification",
    "Instance",
    "InvalidContractError",
    "Name",
    "PlainFactory",
    "ResolutionError",
    "Type",
    "Value",
    "bind",
    "configure",
    "contract_name",
    "identity_map",
    "reset",
    "resolve",
    "value",
]
