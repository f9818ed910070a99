"""Process-wide default container.

`configure()` hands out the shared container, creating it on first use, and
`reset()` discards it. The module-level `bind`, `resolve` and `value`
delegate to whatever `configure()` currently returns.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, TypeVar

from ._container import Container


if TYPE_CHECKING:
    from ._container import ConcreteSpecification, Contract, IdentityMap
    from ._contracts import Value

    T = TypeVar("T")

logger = logging.getLogger(__name__)

_default: Container | None = None
_lock = threading.Lock()


def configure() -> Container:
    global _default  # noqa: PLW0603
    with _lock:
        if _default is None:
            logger.debug("Creating default container")
            _default = Container()
        return _default


def reset() -> None:
    """Forget the default container; the next `configure()` starts empty."""
    global _default  # noqa: PLW0603
    with _lock:
        _default = None


def bind(contract: Contract) -> ConcreteSpecification:
    return configure().bind(contract)


def resolve(contract: Any, identity_map: IdentityMap | None = None) -> Any:
    return configure().resolve(contract, identity_map)


def value(value: T) -> Value[T]:
    return configure().value(value)
