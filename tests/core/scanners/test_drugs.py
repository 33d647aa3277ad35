"""Tests for DrugNameScanner."""

from unittest.mock import MagicMock

import pytest

from formshare.core.scanners.drugs import DrugNameScanner
from formshare.core.types import Reference, ReferenceKind
from tests.conftest import ASPIRIN_UUID, DRUG_UUID


class TestDrugNameScanner:
    """Tests for DrugNameScanner.scan."""

    @pytest.fixture
    def scanner(self, lookup):
        return DrugNameScanner(lookup=lookup)

    def test_scanner_name(self, scanner):
        assert scanner.name == "drugs_by_name"
        assert scanner.kind == ReferenceKind.DRUG

    def test_resolves_names(self, scanner):
        refs = scanner.scan('<drugOrder drugNames="Triomune-30,Aspirin"/>')
        assert refs == {
            Reference(ReferenceKind.DRUG, DRUG_UUID),
            Reference(ReferenceKind.DRUG, ASPIRIN_UUID),
        }

    def test_resolves_ids(self, scanner):
        refs = scanner.scan('<drugOrder drugNames="3"/>')
        assert refs == {Reference(ReferenceKind.DRUG, ASPIRIN_UUID)}

    def test_unknown_names_ignored(self, scanner):
        refs = scanner.scan('<drugOrder drugNames="Ibuprofen,Aspirin"/>')
        assert refs == {Reference(ReferenceKind.DRUG, ASPIRIN_UUID)}

    def test_tokens_passed_untrimmed(self):
        lookup = MagicMock()
        lookup.find_drug_by_name_or_id.return_value = None
        DrugNameScanner(lookup=lookup).scan('<drugOrder drugNames="A, B"/>')
        called_with = [c.args[0] for c in lookup.find_drug_by_name_or_id.call_args_list]
        assert called_with == ["A", " B"]

    def test_dict_records_from_lookup(self):
        """Lookups may return plain records; they are keyed by their uuid."""
        lookup = MagicMock()
        lookup.find_drug_by_name_or_id.return_value = {
            "uuid": ASPIRIN_UUID, "name": "Aspirin", "id": 3,
        }
        refs = DrugNameScanner(lookup=lookup).scan('<drugOrder drugNames="Aspirin,3"/>')
        assert refs == {Reference(ReferenceKind.DRUG, ASPIRIN_UUID)}

    def test_no_drug_names(self, scanner):
        assert scanner.scan('<obs conceptId="Aspirin"/>') == set()
