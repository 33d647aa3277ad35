"""Scanner for locations named on ``<encounterLocation>``."""

from ..types import Reference, ReferenceKind
from .base import BaseScanner
from .pattern_registry import PatternDefinition, _tag_attr, split_values
from .registry import register_scanner

# Only recognised inside the encounterLocation tag itself
LOCATION_ATTRIBUTE_PATTERNS: tuple[PatternDefinition, ...] = (
    _tag_attr("encounterLocation", "default"),
    _tag_attr("encounterLocation", "order"),
)


@register_scanner
class LocationScanner(BaseScanner):
    """Resolves the ``default`` and ``order`` location lists of encounterLocation."""

    name = "locations"
    kind = ReferenceKind.LOCATION

    def scan(self, markup: str) -> set[Reference]:
        references: set[Reference] = set()

        for pdef in LOCATION_ATTRIBUTE_PATTERNS:
            for match in pdef.pattern.finditer(markup):
                for token in split_values(match.group(pdef.group)):
                    location = self.lookup.find_location_by_identifier(token)
                    if location is not None:
                        references.add(Reference.of(self.kind, location))

        return references
