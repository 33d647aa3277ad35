"""
Tests for UuidScanner.

Tests uuid-shape matching, resolution priority and the warning policy for
tokens nothing recognises.
"""

import logging
from unittest.mock import MagicMock

import pytest

from formshare.core.lookup import InMemoryLookupService, MetadataObject
from formshare.core.scanners.uuid_scanner import UUID_PATTERN, UuidScanner
from formshare.core.types import Reference, ReferenceKind
from formshare.exceptions import ScannerError
from tests.conftest import (
    CONCEPT_UUID,
    DRUG_UUID,
    LOCATION_UUID,
    PERSON_UUID,
    PROGRAM_UUID,
    UNKNOWN_UUID,
)


def _empty_mock_lookup():
    lookup = MagicMock()
    for method in (
        "find_concept_by_uuid", "find_location_by_uuid", "find_program_by_uuid",
        "find_person_by_uuid", "find_drug_by_uuid",
    ):
        getattr(lookup, method).return_value = None
    return lookup


# =============================================================================
# Pattern Tests
# =============================================================================

class TestUuidPattern:
    """Tests for the uuid-shape pattern."""

    def test_matches_standard_uuid(self):
        assert UUID_PATTERN.fullmatch(CONCEPT_UUID)

    def test_matches_non_hex_blocks(self):
        """Shape only, not RFC 4122 validation."""
        assert UUID_PATTERN.fullmatch("a-b-c-d-e")

    def test_non_ascii_words_do_not_match(self):
        """Accented words joined by hyphens are prose, not identifiers."""
        assert UUID_PATTERN.search("été-hiver-année-fête-noël") is None

    def test_four_blocks_do_not_match(self):
        assert UUID_PATTERN.search("a-b-c-d") is None

    def test_finds_token_inside_attribute(self):
        markup = f'<obs conceptId="{CONCEPT_UUID}"/>'
        assert UUID_PATTERN.search(markup).group() == CONCEPT_UUID


# =============================================================================
# Scanner Tests
# =============================================================================

class TestUuidScanner:
    """Tests for UuidScanner.scan."""

    @pytest.fixture
    def scanner(self, lookup):
        return UuidScanner(lookup=lookup)

    def test_scanner_name(self, scanner):
        assert scanner.name == "uuid"

    def test_requires_lookup(self):
        with pytest.raises(ScannerError):
            UuidScanner()

    def test_empty_markup(self, scanner):
        assert scanner.scan("") == set()

    @pytest.mark.parametrize("uuid,kind", [
        (CONCEPT_UUID, ReferenceKind.CONCEPT),
        (LOCATION_UUID, ReferenceKind.LOCATION),
        (PROGRAM_UUID, ReferenceKind.PROGRAM),
        (PERSON_UUID, ReferenceKind.PERSON),
        (DRUG_UUID, ReferenceKind.DRUG),
    ])
    def test_resolves_each_kind(self, scanner, uuid, kind):
        """A token known to exactly one service yields one reference of that kind."""
        refs = scanner.scan(f'<tag attr="{uuid}"/>')
        assert refs == {Reference(kind, uuid)}

    def test_concept_wins_over_drug(self):
        """A token resolvable by two services yields only the higher-priority kind."""
        shared = "11111111-2222-3333-4444-555555555555"
        lookup = InMemoryLookupService([
            MetadataObject(ReferenceKind.DRUG, shared),
            MetadataObject(ReferenceKind.CONCEPT, shared),
        ])
        refs = UuidScanner(lookup=lookup).scan(f'<obs conceptId="{shared}"/>')
        assert refs == {Reference(ReferenceKind.CONCEPT, shared)}

    def test_location_wins_over_person(self):
        shared = "11111111-2222-3333-4444-555555555555"
        lookup = InMemoryLookupService([
            MetadataObject(ReferenceKind.PERSON, shared),
            MetadataObject(ReferenceKind.LOCATION, shared),
        ])
        refs = UuidScanner(lookup=lookup).scan(shared)
        assert refs == {Reference(ReferenceKind.LOCATION, shared)}

    def test_stops_at_first_match(self):
        """Lower-priority lookups are not consulted once a match is found."""
        lookup = _empty_mock_lookup()
        lookup.find_location_by_uuid.return_value = MetadataObject(
            ReferenceKind.LOCATION, LOCATION_UUID
        )
        UuidScanner(lookup=lookup).scan(LOCATION_UUID)

        lookup.find_concept_by_uuid.assert_called_once_with(LOCATION_UUID)
        lookup.find_location_by_uuid.assert_called_once_with(LOCATION_UUID)
        lookup.find_program_by_uuid.assert_not_called()
        lookup.find_person_by_uuid.assert_not_called()
        lookup.find_drug_by_uuid.assert_not_called()

    def test_unresolved_token_adds_nothing(self, scanner):
        assert scanner.scan(f'<obs conceptId="{UNKNOWN_UUID}"/>') == set()

    def test_unresolved_token_logs_warning(self, scanner, caplog):
        with caplog.at_level(logging.WARNING):
            scanner.scan(UNKNOWN_UUID)
        assert UNKNOWN_UUID in caplog.text

    def test_unresolved_token_does_not_stop_scan(self, scanner):
        refs = scanner.scan(f"{UNKNOWN_UUID} {CONCEPT_UUID}")
        assert refs == {Reference(ReferenceKind.CONCEPT, CONCEPT_UUID)}

    def test_non_ascii_text_not_looked_up(self, caplog):
        lookup = _empty_mock_lookup()
        with caplog.at_level(logging.WARNING):
            refs = UuidScanner(lookup=lookup).scan("<p>été-hiver-année-fête-noël</p>")
        assert refs == set()
        lookup.find_concept_by_uuid.assert_not_called()
        assert caplog.records == []

    def test_repeated_token_deduplicated(self, scanner):
        """The same token twice is resolved twice but yields one reference."""
        refs = scanner.scan(f"{CONCEPT_UUID} and again {CONCEPT_UUID}")
        assert len(refs) == 1

    def test_repeated_token_looked_up_each_time(self):
        lookup = _empty_mock_lookup()
        lookup.find_concept_by_uuid.return_value = MetadataObject(
            ReferenceKind.CONCEPT, CONCEPT_UUID
        )
        UuidScanner(lookup=lookup).scan(f"{CONCEPT_UUID} {CONCEPT_UUID}")
        assert lookup.find_concept_by_uuid.call_count == 2

    def test_multiple_kinds_in_one_document(self, scanner):
        markup = (
            f'<obs conceptId="{CONCEPT_UUID}"/>'
            f'<encounterLocation default="{LOCATION_UUID}"/>'
            f'<enrollInProgram programId="{PROGRAM_UUID}"/>'
        )
        refs = scanner.scan(markup)
        assert {r.kind for r in refs} == {
            ReferenceKind.CONCEPT, ReferenceKind.LOCATION, ReferenceKind.PROGRAM,
        }
