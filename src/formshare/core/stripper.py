"""Remove environment-local attributes from form markup before export.

``default``/``role`` on ``<encounterProvider>`` and ``default``/``order`` on
``<encounterLocation>`` name providers and locations of the originating
installation. When those kinds are not shipped with the form, the attributes
are cut out of the markup so the receiving side does not carry identifiers it
cannot resolve.

Only the exact `` attr="value"`` text is removed; the rest of the tag and
document is left byte-for-byte intact.
"""

from __future__ import annotations

import logging
import re

from .scanners.pattern_registry import PatternDefinition, _local_attr

logger = logging.getLogger(__name__)

# Applied in order, each to the output of the previous rule
PROVIDER_LOCAL_ATTRIBUTES: tuple[PatternDefinition, ...] = (
    _local_attr("encounterProvider", "default"),
    _local_attr("encounterProvider", "role"),
)

LOCATION_LOCAL_ATTRIBUTES: tuple[PatternDefinition, ...] = (
    _local_attr("encounterLocation", "default"),
    _local_attr("encounterLocation", "order"),
)


def excise_group(pattern: re.Pattern[str], markup: str, group: int = 1) -> tuple[str, int]:
    """
    Remove the text captured by *group* from every match of *pattern*.

    The pattern's capture group must end the match. Text before the group in
    each match is kept, the group is dropped, and scanning resumes after the
    match.

    Returns:
        (rewritten markup, number of excisions)
    """
    count = 0

    def _keep_prefix(match: re.Match[str]) -> str:
        nonlocal count
        count += 1
        return match.group(0)[: match.start(group) - match.start()]

    return pattern.sub(_keep_prefix, markup), count


def strip_local_attributes(
    markup: str,
    include_providers: bool = False,
    include_locations: bool = True,
) -> str:
    """
    Strip local provider and/or location attributes from *markup*.

    Provider attributes are removed unless *include_providers*; location
    attributes are removed unless *include_locations*. Stripping is
    idempotent.
    """
    rules: list[PatternDefinition] = []
    if not include_providers:
        rules.extend(PROVIDER_LOCAL_ATTRIBUTES)
    if not include_locations:
        rules.extend(LOCATION_LOCAL_ATTRIBUTES)

    for pdef in rules:
        markup, count = excise_group(pdef.pattern, markup, pdef.group)
        if count:
            logger.debug(
                "Stripped %d %s attribute(s) from <%s>", count, pdef.attribute, pdef.tag
            )

    return markup
