"""Placeholder scanner for providers referenced by ``<encounterProvider>``.

Exporting providers needs a policy decision first: whether to ship every
person holding a role named in ``role=""``, or only the ``default`` provider.
Until that is settled this scanner finds nothing.
"""

import logging

from ..types import Reference, ReferenceKind
from .base import BaseScanner
from .registry import register_scanner

logger = logging.getLogger(__name__)


@register_scanner
class ProviderScanner(BaseScanner):
    """Extension point for provider dependencies. Produces no references."""

    name = "providers"
    kind = ReferenceKind.PERSON

    def scan(self, markup: str) -> set[Reference]:
        logger.debug("Provider dependencies are not extracted")
        return set()

    def is_available(self) -> bool:
        return False
