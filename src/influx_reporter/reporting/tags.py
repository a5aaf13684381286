"""
Tag Set Utilities.

Every data point gets its own tag mapping so a dynamic tag added to one
point never leaks into the reporter's base tags or into another point.
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from influx_reporter.domain.entities import Tag


def copy_tags(tags: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """Return a shallow copy of ``tags`` (an empty dict for None)."""
    return dict(tags or {})


def merge_tag(base: Optional[Mapping[str, str]], tag: Optional[Tag]) -> Dict[str, str]:
    """
    Copy the base tags and add one dynamic tag.

    Args:
        base: Reporter-wide tags, left untouched
        tag: Optional dynamic tag; overwrites a base tag of the same name

    Returns:
        New tag mapping for a single data point
    """
    tags = copy_tags(base)
    if tag is not None:
        tags[tag.name] = tag.value
    return tags
