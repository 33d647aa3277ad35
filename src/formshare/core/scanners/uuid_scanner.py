"""Scanner for uuid-shaped tokens anywhere in the markup.

A token is "uuid-shaped" when it is five blocks of word characters separated
by hyphens. The shape is a heuristic, not RFC 4122 validation, so a token that
no lookup recognises is logged and skipped rather than treated as an error.
"""

import logging
import re

from ..lookup import UUID_RESOLUTION_ORDER
from ..types import Reference
from .base import BaseScanner
from .registry import register_scanner

logger = logging.getLogger(__name__)

UUID_PATTERN = re.compile(r"\w+-\w+-\w+-\w+-\w+", re.ASCII)


@register_scanner
class UuidScanner(BaseScanner):
    """
    Resolves uuid-shaped tokens against every metadata repository.

    Lookups are tried in UUID_RESOLUTION_ORDER (concept, location, program,
    person, drug); the first match wins.
    """

    name = "uuid"

    def scan(self, markup: str) -> set[Reference]:
        references: set[Reference] = set()

        for match in UUID_PATTERN.finditer(markup):
            token = match.group()
            reference = self.resolve(token)
            if reference is None:
                logger.warning(
                    "Unable to load metadata object with uuid = %s", token,
                    extra={"token": token},
                )
                continue
            references.add(reference)

        return references

    def resolve(self, token: str) -> Reference | None:
        """Resolve a single token using the first lookup that recognises it."""
        for resolver in UUID_RESOLUTION_ORDER:
            reference = resolver.resolve(self.lookup, token)
            if reference is not None:
                return reference
        return None
