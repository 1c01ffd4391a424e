"""
Tag Composition Module

Pure functions assembling tag fields in the order a TagFormat prescribes.
"""

from typing import Iterable, Optional, Tuple

from .config import TAG_FIELD_SEPARATOR
from .models import ComposedTag, TagField, TagFormat


def compose(
    tag_format: TagFormat,
    service: str,
    date: str,
    branch: str,
    include_counter: bool = True,
) -> ComposedTag:
    """
    Order the tag fields for a format.

    An empty service is left out entirely instead of producing an empty
    segment. Formats without a counter never get a counter slot, whatever
    include_counter says.

    Args:
        tag_format: Field ordering
        service: Service name, possibly empty
        date: Run date (YYYY-MM-DD)
        branch: Normalized branch token
        include_counter: Whether counter formats should reserve a counter slot

    Returns:
        ComposedTag with ordered segments and counter slot flag
    """
    values = {
        TagField.SERVICE: service,
        TagField.DATE: date,
        TagField.BRANCH: branch,
    }
    segments = tuple(
        (tag_field, values[tag_field])
        for tag_field in tag_format.fields
        if not (tag_field == TagField.SERVICE and not service)
    )
    return ComposedTag(
        segments=segments,
        has_counter_slot=tag_format.has_counter and include_counter,
    )


def join_tag(segments: Iterable[Tuple[TagField, str]], counter: Optional[str] = None) -> str:
    """Join segment values, appending the counter as the last segment."""
    parts = [value for _, value in segments]
    if counter is not None:
        parts.append(counter)
    return TAG_FIELD_SEPARATOR.join(parts)
