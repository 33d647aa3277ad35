"""
Core data types for the formshare dependency engine.

This module defines the fundamental types used throughout the engine:
- ReferenceKind: The kinds of metadata a form can depend on
- Reference: A resolved handle to a metadata object plus its kind
- DependencySet: The deduplicated collection of references a form requires
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from formshare.exceptions import ScannerError

__all__ = [
    "ReferenceKind",
    "Reference",
    "DependencySet",
]


class ReferenceKind(str, Enum):
    """Kinds of metadata objects a form definition can reference."""
    CONCEPT = "concept"
    DRUG = "drug"
    LOCATION = "location"
    PROGRAM = "program"
    PERSON = "person"


@dataclass(frozen=True)
class Reference:
    """
    A resolved metadata object, tagged with its kind.

    Two references are equal when kind and external_id match. The resolved
    object rides along in ``target`` but takes no part in equality.
    """
    kind: ReferenceKind
    external_id: Any
    target: Any = field(default=None, compare=False, repr=False)

    @classmethod
    def of(cls, kind: ReferenceKind, obj: Any) -> "Reference":
        """Build a reference for *obj*, keyed by its ``uuid`` when it has one.

        Mappings (records from JSON-backed lookups) are keyed by their
        ``"uuid"`` entry. Without a uuid the object itself is the identity,
        so it must be hashable.

        Raises:
            ScannerError: if the identity is unhashable
        """
        if isinstance(obj, Mapping):
            external_id = obj.get("uuid")
        else:
            external_id = getattr(obj, "uuid", None)
        if external_id is None:
            external_id = obj
        try:
            hash(external_id)
        except TypeError as e:
            raise ScannerError(
                f"Unable to reference {kind.value} without a hashable uuid",
                details={"kind": kind.value, "type": type(obj).__name__},
            ) from e
        return cls(kind=kind, external_id=external_id, target=obj)


class DependencySet:
    """
    Unordered, deduplicated collection of references.

    A fresh set is created for every extraction pass; scanners add to it and
    duplicate kind+id pairs are absorbed.
    """

    def __init__(self, references: Iterable[Reference] = ()) -> None:
        self._references: set[Reference] = set(references)

    def add(self, reference: Reference) -> None:
        self._references.add(reference)

    def update(self, references: Iterable[Reference]) -> None:
        self._references.update(references)

    def of_kind(self, kind: ReferenceKind) -> set[Reference]:
        """Return the references of a single kind."""
        return {r for r in self._references if r.kind == kind}

    def counts(self) -> dict[str, int]:
        """Number of references per kind, keyed by kind value."""
        counts: dict[str, int] = {}
        for reference in self._references:
            counts[reference.kind.value] = counts.get(reference.kind.value, 0) + 1
        return counts

    def as_set(self) -> frozenset[Reference]:
        return frozenset(self._references)

    def __contains__(self, item: object) -> bool:
        return item in self._references

    def __iter__(self) -> Iterator[Reference]:
        return iter(self._references)

    def __len__(self) -> int:
        return len(self._references)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DependencySet):
            return self._references == other._references
        if isinstance(other, (set, frozenset)):
            return self._references == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"DependencySet({sorted(self._references, key=lambda r: (r.kind.value, str(r.external_id)))!r})"
