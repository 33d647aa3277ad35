"""
Base scanner interface for the formshare dependency engine.

All scanners must inherit from BaseScanner and implement the scan() method.
"""

from abc import ABC, abstractmethod

from formshare.exceptions import ScannerError

from ..lookup import LookupService
from ..types import Reference, ReferenceKind


class BaseScanner(ABC):
    """
    Base class for all scanners.

    Each scanner:
    - Has a name and the kind of reference it produces
    - Takes macro- and template-expanded markup
    - Returns the set of references it could resolve
    - Is independent (no shared state between scan() calls)

    Attributes:
        name: Unique identifier for the scanner
        kind: Reference kind produced (None when the scanner produces several)
    """

    name: str = "base"
    kind: ReferenceKind | None = None

    def __init__(self, lookup: LookupService | None = None) -> None:
        if lookup is None:
            raise ScannerError(
                "Scanner requires a lookup service", scanner_name=self.name
            )
        self.lookup = lookup

    @abstractmethod
    def scan(self, markup: str) -> set[Reference]:
        """
        Find and resolve references in markup.

        Args:
            markup: Expanded form markup

        Returns:
            Set of resolved Reference objects
        """

    def is_available(self) -> bool:
        """
        Check if scanner produces anything.

        Placeholder scanners override this to report False.
        """
        return True

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
