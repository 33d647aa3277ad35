"""Scanner for concepts referenced by mapping (``SOURCE:code``)."""


from ..types import Reference, ReferenceKind
from .base import BaseScanner
from .pattern_registry import PatternDefinition, _attr, split_values
from .registry import register_scanner


CONCEPT_ATTRIBUTE_PATTERNS: tuple[PatternDefinition, ...] = (
    _attr("conceptId"),
    _attr("conceptIds"),
    _attr("groupingConceptId"),
    _attr("answerConceptId"),
    _attr("answerConceptIds"),
    _attr("discontinuedReasonConceptId"),
    _attr("discontinueReasonAnswers"),
)


def parse_mapping(token: str) -> tuple[str, str] | None:
    """Split ``SOURCE:code`` into a trimmed (source, code) pair.

    Returns None for tokens without a colon.
    """
    source, sep, code = token.partition(":")
    if not sep:
        return None
    return source.strip(), code.strip()


@register_scanner
class MappedConceptScanner(BaseScanner):
    """
    Resolves ``SOURCE:code`` tokens in concept attributes.

    Tokens without a colon are plain ids handled elsewhere and are skipped.
    A mapping nothing matches is normal and is not logged.
    """

    name = "mapped_concepts"
    kind = ReferenceKind.CONCEPT

    def scan(self, markup: str) -> set[Reference]:
        references: set[Reference] = set()

        for pdef in CONCEPT_ATTRIBUTE_PATTERNS:
            for match in pdef.pattern.finditer(markup):
                for token in split_values(match.group(pdef.group)):
                    mapping = parse_mapping(token)
                    if mapping is None:
                        continue
                    source, code = mapping
                    concept = self.lookup.find_concept_by_mapping(code, source)
                    if concept is not None:
                        references.add(Reference.of(self.kind, concept))

        return references
