"""Contract tags and name derivation.

A contract identifies a component. It may be given as a plain ``str``, as a
class or named function (its ``__name__`` is used), or through the explicit
``Name`` / ``Type`` tags. ``Value`` is not a contract in the registry sense:
it boxes a literal that ``resolve`` hands back untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar


T = TypeVar("T")

_ANONYMOUS = "<lambda>"


@dataclass(frozen=True)
class Name:
    name: str


@dataclass(frozen=True)
class Type(Generic[T]):
    cls: type[T]

    @property
    def name(self) -> str:
        return _callable_name(self.cls)


@dataclass(frozen=True)
class Value(Generic[T]):
    """Literal injected as-is, without a registry lookup."""

    value: T


def contract_name(contract: Any) -> str:
    """Derive the registry key for `contract`.

    Anonymous callables (lambdas) and objects that are neither strings, tags,
    nor named callables derive the empty name, which `bind` rejects.
    """
    if isinstance(contract, str):
        return contract
    if isinstance(contract, (Name, Type)):
        return contract.name
    if isinstance(contract, Value):
        return ""

    if callable(contract):
        return _callable_name(contract)
    return ""


def _callable_name(obj: Any) -> str:
    name = getattr(obj, "__name__", None)
    if not isinstance(name, str) or name == _ANONYMOUS:
        return ""
    return name


def identity_map(*contracts: Any) -> dict[str, Any]:
    """Build an identity map with `contracts` pre-declared as "in progress".

    Only pre-declared names get recorded while a graph is resolved, so this is
    how a caller opts a component into graph-local sharing:

      ids = identity_map("Db")
      container.resolve("Service", ids)
    """
    return {contract_name(c): None for c in contracts}
