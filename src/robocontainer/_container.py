from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar, overload

from ._builders import SingletonBuilder, builder_for
from ._contracts import Value, contract_name
from ._errors import (
    CircularDependencyError,
    ComponentNotFoundError,
    ConcreteNotSpecifiedError,
    InvalidContractError,
)


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, MutableMapping

    from ._builders import Builder
    from ._contracts import Name, Type

    T = TypeVar("T")

    Contract = str | type | Callable[..., Any] | Name | Type[Any]
    IdentityMap = MutableMapping[str, Any]

_MISSING: Any = object()


@dataclass
class ComponentDescription:
    name: str
    builder: Builder | None = None
    dependencies: tuple[Any, ...] = ()
    inject_properties: dict[str, Any] = field(default_factory=dict)


class ConcreteSpecification:
    """Returned by `Container.bind`; attaches the concrete producer."""

    def __init__(self, description: ComponentDescription) -> None:
        self._description = description

    def to(self, concrete: object = _MISSING) -> DependencySpecification:
        """Attach a concrete to the bound contract.

        Example:
          container.bind("db").to(Database)            # constructed
          container.bind("clock").to(lambda: time.time)  # invoked
          container.bind("settings").to({"debug": True})  # returned as-is

        """
        if concrete is _MISSING or concrete is None:
            raise ConcreteNotSpecifiedError(self._description.name)

        self._description.builder = builder_for(concrete)
        logger.debug("Bound %r to %r", self._description.name, self._description.builder)
        return DependencySpecification(self._description)


class DependencySpecification:
    def __init__(self, description: ComponentDescription) -> None:
        self._description = description

    def use(self, *contracts: Any) -> DependencySpecification:
        """Declare positional dependencies, resolved in the given order."""
        self._description.dependencies = contracts
        return self

    def set(self, properties: Mapping[str, Any] | None = None, /, **contracts: Any) -> DependencySpecification:
        """Declare attributes assigned from resolved contracts after construction."""
        inject = dict(properties or {})
        inject.update(contracts)
        self._description.inject_properties = inject
        return self

    def as_singleton(self) -> DependencySpecification:
        builder = self._description.builder
        if not isinstance(builder, SingletonBuilder):
            self._description.builder = SingletonBuilder(builder)  # type: ignore[arg-type]
        return self


class Container:
    """Minimal DI container.

    - bind contracts to classes, factories or instances
    - positional constructor injection via `.use(...)`
    - attribute injection via `.set(...)`
    - singletons via `.as_singleton()`
    - graph-local sharing through an optional identity map.

    With ``strict=True`` re-entering a component that is still being built
    raises `CircularDependencyError` instead of recursing.
    """

    def __init__(self, *, strict: bool = False) -> None:
        self._descriptions: dict[str, ComponentDescription] = {}
        self._lock = threading.RLock()
        self._strict = strict
        self._building: list[str] = []

    def bind(self, contract: Contract) -> ConcreteSpecification:
        """Register `contract`, replacing any earlier binding of the same name."""
        name = contract_name(contract)
        if name == "":
            raise InvalidContractError(contract)

        description = ComponentDescription(name)
        with self._lock:
            if name in self._descriptions:
                logger.debug("Rebinding %r", name)
            self._descriptions[name] = description
        return ConcreteSpecification(description)

    @overload
    def resolve(self, contract: type[T], identity_map: IdentityMap | None = ...) -> T: ...

    @overload
    def resolve(self, contract: Value[T], identity_map: IdentityMap | None = ...) -> T: ...

    @overload
    def resolve(self, contract: Any, identity_map: IdentityMap | None = ...) -> Any: ...

    def resolve(self, contract: Any, identity_map: IdentityMap | None = None) -> Any:
        """Resolve `contract` to a component.

        `identity_map` is threaded through the whole resolution tree. Entries
        already holding an instance are returned as-is; keys declared with
        ``None`` are filled in as the matching components get built.
        """
        if isinstance(contract, Value):
            return contract.value

        name = contract_name(contract)

        if identity_map is not None:
            known = identity_map.get(name)
            if known is not None:
                logger.debug("Identity map hit for %r", name)
                return known

        with self._lock:
            description = self._descriptions.get(name)
            if description is None:
                raise ComponentNotFoundError(name or repr(contract))
            if description.builder is None:
                raise ConcreteNotSpecifiedError(name)

            if self._strict and name in self._building:
                path = [*self._building[self._building.index(name) :], name]
                raise CircularDependencyError(path)

            self._building.append(name)
            try:
                return description.builder.build(self, description, identity_map)
            finally:
                self._building.pop()

    def value(self, value: T) -> Value[T]:
        return Value(value)

    def __call__(self, contract: Any, identity_map: IdentityMap | None = None) -> Any:
        return self.resolve(contract, identity_map)

    def __contains__(self, contract: object) -> bool:
        return contract_name(contract) in self._descriptions

    def description(self, contract: Contract) -> ComponentDescription:
        """Return the stored description for `contract`."""
        name = contract_name(contract)
        try:
            return self._descriptions[name]
        except KeyError:
            raise ComponentNotFoundError(name or repr(contract)) from None
