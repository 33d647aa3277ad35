"""Immutable attribute pattern definitions shared by scanners and the stripper.

Patterns are frozen dataclasses stored in tuples: compiled once at import
time, never mutated, safe to share across instances and threads.
"""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class PatternDefinition:
    """An attribute extraction rule."""

    pattern: re.Pattern[str]
    attribute: str
    tag: str | None = None
    group: int = 1
    local: bool = False


def _attr(attribute: str) -> PatternDefinition:
    """``attribute="value"`` anywhere in the markup; group 1 is the value."""
    return PatternDefinition(
        pattern=re.compile(rf'{attribute}="(.*?)"'),
        attribute=attribute,
    )


def _tag_attr(tag: str, attribute: str) -> PatternDefinition:
    """``attribute="value"`` inside the opening ``<tag ...>``; group 1 is the value."""
    return PatternDefinition(
        pattern=re.compile(rf'<{tag}[^>]* {attribute}="(.*?)"'),
        attribute=attribute,
        tag=tag,
    )


def _local_attr(tag: str, attribute: str) -> PatternDefinition:
    """`` attribute="value"`` inside ``<tag ...>``; group 1 is the whole attribute
    including its leading space, so it can be cut out of the tag."""
    return PatternDefinition(
        pattern=re.compile(rf'<{tag}[^>]*( {attribute}=".*?")'),
        attribute=attribute,
        tag=tag,
        local=True,
    )


def split_values(value: str) -> list[str]:
    """Split a comma-separated attribute value into tokens, untrimmed.

    Empty tokens are dropped.
    """
    return [token for token in value.split(",") if token]
