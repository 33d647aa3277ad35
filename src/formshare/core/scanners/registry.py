"""Scanner plugin registry with decorator-based registration.

Scanners register themselves via the ``@register_scanner`` class decorator.
The shareable form builder looks them up by name, so adding a new scanner
only requires defining the class.

Usage::

    from formshare.core.scanners.registry import register_scanner

    @register_scanner
    class MyScanner(BaseScanner):
        name = "my_scanner"
        ...

    # At runtime:
    scanner = create_scanner("my_scanner", lookup=lookup)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, List, Type

if TYPE_CHECKING:
    from .base import BaseScanner

logger = logging.getLogger(__name__)

_REGISTRY: Dict[str, Type[BaseScanner]] = {}


def register_scanner(cls: Type[BaseScanner]) -> Type[BaseScanner]:
    """Class decorator that registers a scanner by its ``name`` attribute.

    Raises ``ValueError`` if *name* is missing, still ``"base"``, or already
    taken by another class.
    """
    name = getattr(cls, "name", None)
    if not name or name == "base":
        raise ValueError(
            f"Scanner {cls.__name__} must define a unique 'name' class attribute"
        )
    if name in _REGISTRY:
        raise ValueError(
            f"Scanner name {name!r} already registered by {_REGISTRY[name].__name__}"
        )
    _REGISTRY[name] = cls
    logger.debug("Registered scanner %s", name)
    return cls


def get_registered_scanners() -> Dict[str, Type[BaseScanner]]:
    """Return a snapshot of all registered scanner classes."""
    return dict(_REGISTRY)


def get_scanner_names() -> List[str]:
    """Return the names of all registered scanners."""
    return list(_REGISTRY.keys())


def create_scanner(name: str, **kwargs: object) -> BaseScanner:
    """Instantiate a registered scanner by *name*.

    Raises ``KeyError`` if the name is unknown.
    """
    if name not in _REGISTRY:
        raise KeyError(
            f"Unknown scanner: {name!r}. Available: {list(_REGISTRY.keys())}"
        )
    return _REGISTRY[name](**kwargs)
