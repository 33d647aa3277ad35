"""Markup preprocessor interface.

Macro and template expansion belong to the form rendering layer. The
dependency engine only needs the expanded text, so it talks to a
``MarkupPreprocessor`` and never persists what it returns.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MarkupPreprocessor(Protocol):
    """Expands macros and templates in form markup. Either step may raise."""

    def expand_macros(self, markup: str) -> str: ...

    def expand_templates(self, markup: str) -> str: ...


class PassthroughPreprocessor:
    """Preprocessor for markup that uses no macros or templates."""

    def expand_macros(self, markup: str) -> str:
        return markup

    def expand_templates(self, markup: str) -> str:
        return markup


def expand(preprocessor: MarkupPreprocessor, markup: str) -> str:
    """Apply macros, then templates."""
    markup = preprocessor.expand_macros(markup)
    return preprocessor.expand_templates(markup)
