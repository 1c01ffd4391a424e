"""
Counter Resolution Module

Finds the next free duplicate counter for a tag prefix by counting the tags
that already exist for it. Tag namespaces are queried in order (remote, then
local) and the first successful query wins.

The counter is read, not reserved: two builds racing on the same prefix can
pick the same value.
"""

import logging
import re
from typing import Callable, Iterable, Sequence

from .config import COUNTER_WIDTH, TAG_FIELD_SEPARATOR
from .exceptions import TagQueryError
from .models import TagScope

logger = logging.getLogger(__name__)

TagLister = Callable[[TagScope, str], Sequence[str]]

DEFAULT_QUERY_ORDER = (TagScope.REMOTE, TagScope.LOCAL)


def format_counter(count: int) -> str:
    """Format a counter value zero-padded to two digits ('00'..'99', then '100')."""
    return f"{count:0{COUNTER_WIDTH}d}"


def count_existing_tags(prefix: str, tags: Iterable[str]) -> int:
    """
    Count tags made of the prefix followed by a numeric counter.

    Args:
        prefix: Tag without counter
        tags: Candidate tag names

    Returns:
        Number of tags matching '<prefix>_<digits>'
    """
    pattern = re.compile(rf"^{re.escape(prefix + TAG_FIELD_SEPARATOR)}\d+$")
    return sum(1 for tag in tags if pattern.match(tag))


def next_counter(
    prefix: str,
    list_tags: TagLister,
    scopes: Sequence[TagScope] = DEFAULT_QUERY_ORDER,
) -> str:
    """
    Determine the next unused counter for a prefix.

    Each scope is tried in order; a TagQueryError moves on to the next one.
    When every scope fails the count defaults to zero so a build is never
    blocked on tag listing.

    Args:
        prefix: Tag without counter
        list_tags: Callable returning tags of a scope that start with a prefix
        scopes: Tag namespaces to try, in order

    Returns:
        Zero-padded counter string
    """
    query_prefix = prefix + TAG_FIELD_SEPARATOR
    for scope in scopes:
        try:
            tags = list_tags(scope, query_prefix)
        except TagQueryError as e:
            logger.warning(f"Listing {scope.value} tags failed: {e}")
            continue
        count = count_existing_tags(prefix, tags)
        logger.info(f"Found {count} existing {scope.value} tag(s) for prefix '{prefix}'")
        return format_counter(count)

    logger.warning(
        f"Could not list tags for prefix '{prefix}' in any scope, "
        f"assuming no existing tags"
    )
    return format_counter(0)
