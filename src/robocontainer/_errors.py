from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Sequence


class ContainerError(RuntimeError):
    pass


class InvalidContractError(ContainerError, ValueError):
    """A contract that does not derive a usable (non-empty) name."""

    def __init__(self, contract: object) -> None:
        self.contract = contract
        msg = f"Contract {contract!r} does not yield a component name"
        super().__init__(msg)


class ConcreteNotSpecifiedError(ContainerError):
    def __init__(self, contract: str) -> None:
        self.contract = contract
        msg = f"No concrete specified for contract {contract!r}"
        super().__init__(msg)


class ResolutionError(ContainerError):
    pass


class ComponentNotFoundError(ResolutionError, LookupError):
    def __init__(self, name: str) -> None:
        self.name = name
        msg = f"Component not found: {name!r}"
        super().__init__(msg)


class CircularDependencyError(ResolutionError):
    """Raised in strict mode when a component is requested while still being built."""

    def __init__(self, path: Sequence[str]) -> None:
        self.path = tuple(path)
        msg = f"Circular dependency detected: {' -> '.join(self.path)}"
        super().__init__(msg)
