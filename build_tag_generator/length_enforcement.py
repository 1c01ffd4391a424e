"""
Length Enforcement Module

Pure functions shortening a composed tag to a length budget. The counter
segment is never touched; other fields are cut from their tail in a fixed
order of shrink steps until the tag fits. Truncation happens before the
counter is resolved, so existing tags are looked up under the prefix the
new tag will actually carry.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from .config import BRANCH_RESERVED_LENGTH, MIN_SEGMENT_LENGTH
from .models import TagField
from .tag_composition import join_tag

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShrinkStep:
    """Cut one field down to at most `floor` characters."""
    tag_field: TagField
    floor: int


# Branch excess goes first, then service and date, the reserved branch span last.
SHRINK_STEPS = (
    ShrinkStep(TagField.BRANCH, BRANCH_RESERVED_LENGTH),
    ShrinkStep(TagField.SERVICE, MIN_SEGMENT_LENGTH),
    ShrinkStep(TagField.DATE, MIN_SEGMENT_LENGTH),
    ShrinkStep(TagField.BRANCH, MIN_SEGMENT_LENGTH),
)


def shrink_segments(
    segments: Sequence[Tuple[TagField, str]],
    max_length: int,
    counter: Optional[str] = None,
    steps: Sequence[ShrinkStep] = SHRINK_STEPS,
) -> Tuple[Tuple[TagField, str], ...]:
    """
    Shorten field values so the joined tag, counter included, fits max_length.

    Separators are never inserted, removed or reordered; only field content
    gets shorter. The counter only takes part through its length, so a
    placeholder of the expected width gives the prefix the final tag will
    carry before the real counter is known.

    Args:
        segments: Ordered (field, value) pairs
        max_length: Maximum tag length
        counter: Counter suffix (or placeholder) the tag must leave room for
        steps: Ordered shrink steps

    Returns:
        Ordered (field, value) pairs, as short as needed and possible
    """
    segments = tuple(segments)
    excess = len(join_tag(segments, counter)) - max_length
    if excess <= 0:
        return segments

    values: Dict[TagField, str] = dict(segments)
    for step in steps:
        if excess <= 0:
            break
        value = values.get(step.tag_field)
        if value is None:
            continue
        cut = min(excess, max(len(value) - step.floor, 0))
        if not cut:
            continue
        if step.tag_field == TagField.BRANCH and step.floor < BRANCH_RESERVED_LENGTH:
            logger.warning(
                f"Truncating branch below {BRANCH_RESERVED_LENGTH} reserved characters "
                f"to fit max length {max_length}"
            )
        values[step.tag_field] = value[: len(value) - cut]
        excess -= cut

    return tuple((tag_field, values[tag_field]) for tag_field, _ in segments)


def enforce_length(
    segments: Sequence[Tuple[TagField, str]],
    max_length: int,
    counter: Optional[str] = None,
    steps: Sequence[ShrinkStep] = SHRINK_STEPS,
) -> str:
    """
    Join segments and the counter, truncating fields to fit max_length.

    If the tag still does not fit after every shrink step, the shortest
    possible tag is returned and a warning is logged.

    Args:
        segments: Ordered (field, value) pairs
        max_length: Maximum tag length
        counter: Counter suffix, kept intact when present
        steps: Ordered shrink steps

    Returns:
        Tag no longer than max_length where possible
    """
    tag = join_tag(segments, counter)
    if len(tag) <= max_length:
        return tag

    truncated = join_tag(shrink_segments(segments, max_length, counter, steps), counter)
    if len(truncated) > max_length:
        logger.warning(
            f"Tag '{truncated}' is {len(truncated)} characters long and cannot be "
            f"shortened to max length {max_length}"
        )
    else:
        logger.info(f"Truncated tag '{tag}' to '{truncated}' (max length {max_length})")
    return truncated
