"""
formshare scanners.

Each scanner finds one style of metadata reference in expanded form markup
and resolves it through a LookupService.

Scanners:
- UuidScanner: uuid-shaped tokens anywhere (always run)
- MappedConceptScanner: ``SOURCE:code`` tokens in concept attributes
- DrugNameScanner: drug names in ``drugNames``
- LocationScanner: ``default``/``order`` on ``<encounterLocation>``
- ProviderScanner: placeholder, produces nothing
"""

from .base import BaseScanner
from .drugs import DrugNameScanner
from .locations import LocationScanner
from .mapped_concepts import MappedConceptScanner
from .pattern_registry import PatternDefinition
from .providers import ProviderScanner
from .registry import (
    create_scanner,
    get_registered_scanners,
    get_scanner_names,
    register_scanner,
)
from .uuid_scanner import UuidScanner

__all__ = [
    # Base
    "BaseScanner",
    "PatternDefinition",
    # Registry
    "register_scanner",
    "get_registered_scanners",
    "get_scanner_names",
    "create_scanner",
    # Scanners
    "UuidScanner",
    "MappedConceptScanner",
    "DrugNameScanner",
    "LocationScanner",
    "ProviderScanner",
]
