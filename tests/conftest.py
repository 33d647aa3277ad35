"""
Shared test configuration for formshare.

Provides an in-memory lookup service populated with a small metadata
snapshot, and factories for form definitions.
"""

import pytest

from formshare.core.form import FormDefinition
from formshare.core.lookup import InMemoryLookupService, MetadataObject
from formshare.core.types import ReferenceKind


# =============================================================================
# METADATA SNAPSHOT
# =============================================================================

CONCEPT_UUID = "3ce94df0-26fe-102b-80cb-0017a47871b2"
DIABETES_UUID = "1a2b3c4d-0000-4000-8000-00000000a10a"
LOCATION_UUID = "8d6c993e-c2cc-11de-8d13-0010c6dffd0f"
CLINIC_UUID = "aff27d58-a15c-49a6-9beb-d30dcfc0c66e"
PROGRAM_UUID = "da4a0391-ba62-4fad-ad66-1e3722d16380"
PERSON_UUID = "ba1b19c2-3ed6-4f63-b8c0-f762dc8d7562"
DRUG_UUID = "3cfcf118-931c-46f7-8ff6-7b876f0d4202"
ASPIRIN_UUID = "7e0c0b6c-4f31-4b2f-9b0e-2c6f7f6a8b11"
UNKNOWN_UUID = "00000000-0000-0000-0000-000000000000"


def make_concept(uuid, name=None, mappings=()):
    return MetadataObject(
        kind=ReferenceKind.CONCEPT,
        uuid=uuid,
        name=name,
        mappings=frozenset(mappings),
    )


@pytest.fixture
def concept():
    return make_concept(CONCEPT_UUID, "WEIGHT (KG)", [("CIEL", "5089")])


@pytest.fixture
def diabetes():
    return make_concept(DIABETES_UUID, "Diabetes", [("ICD10", "A10")])


@pytest.fixture
def location():
    return MetadataObject(ReferenceKind.LOCATION, LOCATION_UUID, name="Unknown Location", id=1)


@pytest.fixture
def clinic():
    return MetadataObject(ReferenceKind.LOCATION, CLINIC_UUID, name="Outpatient Clinic", id=7)


@pytest.fixture
def program():
    return MetadataObject(ReferenceKind.PROGRAM, PROGRAM_UUID, name="HIV Program")


@pytest.fixture
def person():
    return MetadataObject(ReferenceKind.PERSON, PERSON_UUID, name="Jane Provider")


@pytest.fixture
def drug():
    return MetadataObject(ReferenceKind.DRUG, DRUG_UUID, name="Triomune-30", id=2)


@pytest.fixture
def aspirin():
    return MetadataObject(ReferenceKind.DRUG, ASPIRIN_UUID, name="Aspirin", id=3)


@pytest.fixture
def lookup(concept, diabetes, location, clinic, program, person, drug, aspirin):
    """In-memory lookup holding one or more object of every kind."""
    return InMemoryLookupService(
        [concept, diabetes, location, clinic, program, person, drug, aspirin]
    )


@pytest.fixture
def empty_lookup():
    return InMemoryLookupService()


# =============================================================================
# FORM FACTORIES
# =============================================================================

def make_form(markup, **kwargs):
    """Create a FormDefinition with sensible bookkeeping defaults."""
    defaults = {
        "id": 1,
        "uuid": "f0f0f0f0-1111-2222-3333-444444444444",
        "name": "Adult Intake",
        "description": "Intake form",
    }
    defaults.update(kwargs)
    return FormDefinition(markup=markup, **defaults)


@pytest.fixture
def form_factory():
    return make_form
