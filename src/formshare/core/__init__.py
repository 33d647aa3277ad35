"""
formshare core: reference extraction and local-attribute stripping.
"""

from .form import FormDefinition, ShareableForm, ShareOptions, make_shareable
from .lookup import (
    UUID_RESOLUTION_ORDER,
    InMemoryLookupService,
    LookupService,
    MetadataObject,
    UuidResolver,
)
from .preprocess import MarkupPreprocessor, PassthroughPreprocessor
from .stripper import strip_local_attributes
from .types import DependencySet, Reference, ReferenceKind

__all__ = [
    # Types
    "ReferenceKind",
    "Reference",
    "DependencySet",
    # Lookup
    "LookupService",
    "InMemoryLookupService",
    "MetadataObject",
    "UuidResolver",
    "UUID_RESOLUTION_ORDER",
    # Preprocessing
    "MarkupPreprocessor",
    "PassthroughPreprocessor",
    # Stripping
    "strip_local_attributes",
    # Forms
    "FormDefinition",
    "ShareOptions",
    "ShareableForm",
    "make_shareable",
]
