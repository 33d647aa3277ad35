"""
formshare - Package form definitions for transport between installations.

This package provides:
- Dependency extraction: the concepts, drugs, locations, programs and persons
  a form's markup refers to
- Sanitizing: removal of installation-local provider and location attributes
"""

from formshare.core import (
    DependencySet,
    FormDefinition,
    InMemoryLookupService,
    LookupService,
    MetadataObject,
    Reference,
    ReferenceKind,
    ShareableForm,
    ShareOptions,
    make_shareable,
    strip_local_attributes,
)
from formshare.exceptions import DependencyExtractionError, FormShareError

__version__ = "1.0.0"

__all__ = [
    "DependencySet",
    "FormDefinition",
    "InMemoryLookupService",
    "LookupService",
    "MetadataObject",
    "Reference",
    "ReferenceKind",
    "ShareableForm",
    "ShareOptions",
    "make_shareable",
    "strip_local_attributes",
    "DependencyExtractionError",
    "FormShareError",
]
