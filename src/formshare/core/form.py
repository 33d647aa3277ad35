"""Shareable form definitions.

A ``ShareableForm`` is a copy of a ``FormDefinition`` prepared for transport
to another installation: environment-local attributes are stripped from its
markup and the metadata objects the markup refers to are collected so that
packaging tooling can ship them alongside the form.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

from formshare.exceptions import DependencyExtractionError
from formshare.logging import ContextLogger, form_context

from .lookup import LookupService
from .preprocess import MarkupPreprocessor, PassthroughPreprocessor, expand
from .scanners import create_scanner
from .stripper import strip_local_attributes
from .types import DependencySet, Reference

@dataclass
class FormDefinition:
    """A form definition: its markup plus bookkeeping fields."""

    markup: str = ""
    id: int | None = None
    uuid: str | None = None
    name: str | None = None
    description: str | None = None
    form: Any = None
    creator: Any = None
    date_created: datetime | None = None
    changed_by: Any = None
    date_changed: datetime | None = None
    retired: bool = False
    retired_by: Any = None
    date_retired: datetime | None = None
    retire_reason: str | None = None


@dataclass(frozen=True)
class ShareOptions:
    """Which kinds of referenced metadata travel with a shared form.

    Use class methods for common presets:
        options = ShareOptions()                # locations, but not providers
        options = ShareOptions.everything()     # all kinds
        options = ShareOptions.uuids_only()     # only uuid references
    """

    include_mapped_concepts: bool = True
    include_drugs_by_name: bool = True
    include_locations: bool = True
    include_providers: bool = False

    @classmethod
    def everything(cls) -> ShareOptions:
        return cls(include_providers=True)

    @classmethod
    def uuids_only(cls) -> ShareOptions:
        return cls(
            include_mapped_concepts=False,
            include_drugs_by_name=False,
            include_locations=False,
            include_providers=False,
        )

    @classmethod
    def from_settings(cls, settings: Any = None) -> ShareOptions:
        """Build options from the ``share`` section of the settings."""
        if settings is None:
            from formshare.config import get_settings
            settings = get_settings()
        share = settings.share
        return cls(
            include_mapped_concepts=share.include_mapped_concepts,
            include_drugs_by_name=share.include_drugs_by_name,
            include_locations=share.include_locations,
            include_providers=share.include_providers,
        )


# Scanners gated by an option, in the order they run after the uuid scanner
_OPTION_TO_SCANNER: list[tuple[str, str]] = [
    ("include_mapped_concepts", "mapped_concepts"),
    ("include_drugs_by_name", "drugs_by_name"),
    ("include_locations", "locations"),
    ("include_providers", "providers"),
]


class ShareableForm:
    """
    A copy of a form definition prepared for export.

    Construction strips local attributes from the copy's markup, runs the
    optional identifier replacement pass, and calculates dependencies. The
    source FormDefinition is never modified.

    Raises:
        DependencyExtractionError: if macro or template expansion fails
    """

    def __init__(
        self,
        form: FormDefinition,
        include_mapped_concepts: bool = True,
        include_drugs_by_name: bool = True,
        include_locations: bool = True,
        include_providers: bool = False,
        *,
        lookup: LookupService,
        preprocessor: MarkupPreprocessor | None = None,
        identifier_replacer: Callable[[str], str] | None = None,
    ):
        self.definition = replace(form)
        self.options = ShareOptions(
            include_mapped_concepts=include_mapped_concepts,
            include_drugs_by_name=include_drugs_by_name,
            include_locations=include_locations,
            include_providers=include_providers,
        )
        self.lookup = lookup
        self.preprocessor = preprocessor if preprocessor is not None else PassthroughPreprocessor()
        self._dependencies: DependencySet | None = None

        self.strip_local_attributes()

        if identifier_replacer is not None:
            self.definition.markup = identifier_replacer(self.definition.markup)

        self.calculate_dependencies()

    @classmethod
    def from_options(
        cls,
        form: FormDefinition,
        options: ShareOptions,
        **kwargs: Any,
    ) -> ShareableForm:
        return cls(
            form,
            options.include_mapped_concepts,
            options.include_drugs_by_name,
            options.include_locations,
            options.include_providers,
            **kwargs,
        )

    @property
    def markup(self) -> str:
        """The sanitized markup that will be exported."""
        return self.definition.markup

    def get_sanitized_markup(self) -> str:
        return self.definition.markup

    @property
    def uuid(self) -> str | None:
        return self.definition.uuid

    @property
    def dependencies(self) -> DependencySet:
        if self._dependencies is None:
            self._dependencies = DependencySet()
        return self._dependencies

    @dependencies.setter
    def dependencies(self, references: DependencySet | set[Reference]) -> None:
        if not isinstance(references, DependencySet):
            references = DependencySet(references)
        self._dependencies = references

    def get_dependencies(self) -> frozenset[Reference]:
        return self.dependencies.as_set()

    def strip_local_attributes(self) -> None:
        """Remove provider/location attributes whose kinds are not being shared."""
        self.definition.markup = strip_local_attributes(
            self.definition.markup,
            include_providers=self.options.include_providers,
            include_locations=self.options.include_locations,
        )

    def calculate_dependencies(self) -> DependencySet:
        """
        Collect every metadata object the markup refers to.

        Macros and templates are expanded on a throwaway copy of the markup so
        the exported form keeps them unexpanded. The result replaces any
        previously calculated dependencies.
        """
        log = ContextLogger(__name__, form_name=self.definition.name)
        with form_context(self.uuid):
            try:
                markup = expand(self.preprocessor, self.definition.markup)
            except Exception as e:
                raise DependencyExtractionError(
                    "Unable to process macros and templates when processing form to make it shareable",
                    form_uuid=self.uuid,
                ) from e

            dependencies = DependencySet()
            for scanner_name in self._enabled_scanners():
                scanner = create_scanner(scanner_name, lookup=self.lookup)
                if not scanner.is_available():
                    log.debug(f"Scanner {scanner.name} not available")
                    continue
                references = scanner.scan(markup)
                log.debug(
                    f"Scanner {scanner.name} found {len(references)} reference(s)",
                    scanner=scanner.name,
                )
                dependencies.update(references)

            self._dependencies = dependencies
            log.info(
                f"Calculated {len(dependencies)} dependencies",
                counts=dependencies.counts(),
            )
        return dependencies

    def _enabled_scanners(self) -> list[str]:
        names = ["uuid"]
        for option, scanner_name in _OPTION_TO_SCANNER:
            if getattr(self.options, option):
                names.append(scanner_name)
        return names

    def to_form_definition(self) -> FormDefinition:
        """Return a plain FormDefinition carrying the sanitized markup."""
        return replace(self.definition)

    def __repr__(self) -> str:
        return (
            f"ShareableForm(uuid={self.uuid!r}, "
            f"dependencies={len(self.dependencies)}, options={self.options!r})"
        )


def make_shareable(
    form: FormDefinition,
    lookup: LookupService,
    options: ShareOptions | None = None,
    **kwargs: Any,
) -> ShareableForm:
    """Make *form* shareable, taking flags from settings when *options* is None."""
    if options is None:
        options = ShareOptions.from_settings()
    return ShareableForm.from_options(form, options, lookup=lookup, **kwargs)
