"""Scanner for drugs listed by name in ``drugNames``."""

from ..types import Reference, ReferenceKind
from .base import BaseScanner
from .pattern_registry import PatternDefinition, _attr, split_values
from .registry import register_scanner

DRUG_ATTRIBUTE_PATTERNS: tuple[PatternDefinition, ...] = (
    _attr("drugNames"),
)


@register_scanner
class DrugNameScanner(BaseScanner):
    """Resolves each ``drugNames`` token by name or id."""

    name = "drugs_by_name"
    kind = ReferenceKind.DRUG

    def scan(self, markup: str) -> set[Reference]:
        references: set[Reference] = set()

        for pdef in DRUG_ATTRIBUTE_PATTERNS:
            for match in pdef.pattern.finditer(markup):
                for token in split_values(match.group(pdef.group)):
                    drug = self.lookup.find_drug_by_name_or_id(token)
                    if drug is not None:
                        references.add(Reference.of(self.kind, drug))

        return references
