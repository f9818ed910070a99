from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping, MutableMapping

    from ._container import ComponentDescription, Container

    IdentityMap = MutableMapping[str, Any]


class Builder(Protocol):
    def build(
        self,
        container: Container,
        description: ComponentDescription,
        identity_map: IdentityMap | None,
    ) -> object: ...


@dataclass(frozen=True)
class Instance:
    """Concrete that is handed out verbatim on every resolution."""

    value: object


@dataclass(frozen=True)
class ClassFactory:
    cls: type


@dataclass(frozen=True)
class PlainFactory:
    fn: Callable[..., object]


class ComponentBuilder:
    """Shared construction path: dependencies, creation, identity map, properties.

    Subclasses only decide how a component is created from its resolved
    positional dependencies.
    """

    def build(
        self,
        container: Container,
        description: ComponentDescription,
        identity_map: IdentityMap | None,
    ) -> object:
        args = self._resolve_dependencies(container, description.dependencies, identity_map)
        component = self.create(args)

        # Only names the caller pre-declared are recorded.
        recorded = identity_map is not None and description.name in identity_map
        if recorded:
            identity_map[description.name] = component

        try:
            self._inject_properties(container, component, description.inject_properties, identity_map)
        except BaseException:
            if recorded:
                identity_map[description.name] = None
            raise
        return component

    def create(self, args: list[Any]) -> object:
        raise NotImplementedError

    def _resolve_dependencies(
        self,
        container: Container,
        dependencies: Iterable[Any],
        identity_map: IdentityMap | None,
    ) -> list[Any]:
        return [container.resolve(dependency, identity_map) for dependency in dependencies]

    def _inject_properties(
        self,
        container: Container,
        component: object,
        properties: Mapping[str, Any],
        identity_map: IdentityMap | None,
    ) -> None:
        for attr, contract in properties.items():
            setattr(component, attr, container.resolve(contract, identity_map))


class ClassBuilder(ComponentBuilder):
    def __init__(self, cls: type) -> None:
        self._cls = cls

    def create(self, args: list[Any]) -> object:
        return self._cls(*args)

    def __repr__(self) -> str:
        return f"ClassBuilder({self._cls.__name__})"


class FactoryBuilder(ComponentBuilder):
    def __init__(self, fn: Callable[..., object]) -> None:
        self._fn = fn

    def create(self, args: list[Any]) -> object:
        return self._fn(*args)

    def __repr__(self) -> str:
        return f"FactoryBuilder({getattr(self._fn, '__qualname__', self._fn)!r})"


class InstanceBuilder:
    """Returns the stored instance; dependencies and properties are ignored."""

    def __init__(self, instance: object) -> None:
        self._instance = instance

    def build(
        self,
        container: Container,
        description: ComponentDescription,
        identity_map: IdentityMap | None,
    ) -> object:
        return self._instance

    def __repr__(self) -> str:
        return f"InstanceBuilder({type(self._instance).__name__})"


_UNSET = object()


class SingletonBuilder:
    """Memoizes the first fully successful build of the wrapped builder.

    Once cached, the instance is returned for every container call and every
    identity map, without resolving dependencies or injecting properties again.
    """

    def __init__(self, inner: Builder) -> None:
        self.inner = inner
        self._instance: object = _UNSET

    @property
    def is_built(self) -> bool:
        return self._instance is not _UNSET

    def build(
        self,
        container: Container,
        description: ComponentDescription,
        identity_map: IdentityMap | None,
    ) -> object:
        if self._instance is _UNSET:
            instance = self.inner.build(container, description, identity_map)
            logger.debug("Cached singleton %r (%s)", description.name, type(instance).__name__)
            self._instance = instance
        return self._instance

    def __repr__(self) -> str:
        return f"SingletonBuilder({self.inner!r})"


def builder_for(concrete: object) -> Builder:
    """Pick the builder variant for `concrete`.

    Explicit tags win. Otherwise a class is constructed, any other callable is
    invoked as a factory, and everything else is returned as a fixed instance.
    """
    if isinstance(concrete, Instance):
        return InstanceBuilder(concrete.value)
    if isinstance(concrete, ClassFactory):
        return ClassBuilder(concrete.cls)
    if isinstance(concrete, PlainFactory):
        return FactoryBuilder(concrete.fn)

    if inspect.isclass(concrete):
        return ClassBuilder(concrete)
    if callable(concrete):
        return FactoryBuilder(concrete)
    return InstanceBuilder(concrete)
