"""Lookup service interface and an in-memory implementation.

The engine never owns metadata; it asks a ``LookupService`` to resolve the
identifiers it finds in form markup. Every lookup returns ``None`` when there
is no match.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, runtime_checkable

from .types import Reference, ReferenceKind


@runtime_checkable
class LookupService(Protocol):
    """Query interface over concept, drug, location, program and person repositories."""

    def find_concept_by_uuid(self, uuid: str) -> Optional[Any]: ...

    def find_location_by_uuid(self, uuid: str) -> Optional[Any]: ...

    def find_program_by_uuid(self, uuid: str) -> Optional[Any]: ...

    def find_person_by_uuid(self, uuid: str) -> Optional[Any]: ...

    def find_drug_by_uuid(self, uuid: str) -> Optional[Any]: ...

    def find_concept_by_mapping(self, code: str, source: str) -> Optional[Any]: ...

    def find_drug_by_name_or_id(self, token: str) -> Optional[Any]: ...

    def find_location_by_identifier(self, token: str) -> Optional[Any]: ...


@dataclass(frozen=True)
class UuidResolver:
    """One step of the uuid resolution chain: a kind and the lookup that finds it."""

    kind: ReferenceKind
    method: str

    def resolve(self, lookup: LookupService, token: str) -> Reference | None:
        obj = getattr(lookup, self.method)(token)
        if obj is None:
            return None
        return Reference.of(self.kind, obj)


# First match wins
UUID_RESOLUTION_ORDER: tuple[UuidResolver, ...] = (
    UuidResolver(ReferenceKind.CONCEPT, "find_concept_by_uuid"),
    UuidResolver(ReferenceKind.LOCATION, "find_location_by_uuid"),
    UuidResolver(ReferenceKind.PROGRAM, "find_program_by_uuid"),
    UuidResolver(ReferenceKind.PERSON, "find_person_by_uuid"),
    UuidResolver(ReferenceKind.DRUG, "find_drug_by_uuid"),
)


@dataclass(frozen=True)
class MetadataObject:
    """A metadata record held by ``InMemoryLookupService``."""

    kind: ReferenceKind
    uuid: str
    name: str | None = None
    id: int | None = None
    mappings: frozenset[tuple[str, str]] = field(default_factory=frozenset)


class InMemoryLookupService:
    """
    Dictionary-backed ``LookupService``.

    Useful for exporting against a snapshot of metadata and for tests.
    Mapping pairs are stored as ``(source, code)``.
    """

    def __init__(self, objects: Iterable[MetadataObject] = ()) -> None:
        self._by_uuid: dict[ReferenceKind, dict[str, MetadataObject]] = {
            kind: {} for kind in ReferenceKind
        }
        self._concepts_by_mapping: dict[tuple[str, str], MetadataObject] = {}
        for obj in objects:
            self.add(obj)

    def add(self, obj: MetadataObject) -> MetadataObject:
        self._by_uuid[obj.kind][obj.uuid] = obj
        if obj.kind == ReferenceKind.CONCEPT:
            for source, code in obj.mappings:
                self._concepts_by_mapping[(source.lower(), code)] = obj
        return obj

    def objects(self, kind: ReferenceKind) -> list[MetadataObject]:
        return list(self._by_uuid[kind].values())

    def find_concept_by_uuid(self, uuid: str) -> MetadataObject | None:
        return self._by_uuid[ReferenceKind.CONCEPT].get(uuid)

    def find_location_by_uuid(self, uuid: str) -> MetadataObject | None:
        return self._by_uuid[ReferenceKind.LOCATION].get(uuid)

    def find_program_by_uuid(self, uuid: str) -> MetadataObject | None:
        return self._by_uuid[ReferenceKind.PROGRAM].get(uuid)

    def find_person_by_uuid(self, uuid: str) -> MetadataObject | None:
        return self._by_uuid[ReferenceKind.PERSON].get(uuid)

    def find_drug_by_uuid(self, uuid: str) -> MetadataObject | None:
        return self._by_uuid[ReferenceKind.DRUG].get(uuid)

    def find_concept_by_mapping(self, code: str, source: str) -> MetadataObject | None:
        # Source names are case-insensitive, codes are not
        return self._concepts_by_mapping.get((source.lower(), code))

    def find_drug_by_name_or_id(self, token: str) -> MetadataObject | None:
        drugs = self._by_uuid[ReferenceKind.DRUG].values()
        for drug in drugs:
            if drug.name == token:
                return drug
        if token.isdigit():
            return self._find_by_id(drugs, int(token))
        return None

    def find_location_by_identifier(self, token: str) -> MetadataObject | None:
        locations = self._by_uuid[ReferenceKind.LOCATION]
        if token in locations:
            return locations[token]
        for location in locations.values():
            if location.name == token:
                return location
        if token.isdigit():
            return self._find_by_id(locations.values(), int(token))
        return None

    @staticmethod
    def _find_by_id(objects: Iterable[MetadataObject], id_: int) -> MetadataObject | None:
        for obj in objects:
            if obj.id == id_:
                return obj
        return None
