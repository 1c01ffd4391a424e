"""Tag generator - resolves the run context and builds the final tag."""

import logging
from datetime import date as date_type
from typing import Optional

from .branch_normalization import normalize, resolve_branch
from .config import COUNTER_WIDTH, DATE_FORMAT
from .counter_resolution import TagLister, next_counter
from .exceptions import ConfigurationError
from .io_layer import IOLayer
from .length_enforcement import enforce_length, shrink_segments
from .models import ResolvedContext, TagRequest, TagResult
from .tag_composition import compose, join_tag

logger = logging.getLogger(__name__)


def resolve_context(
    request: TagRequest,
    io_layer: IOLayer,
    today: Optional[date_type] = None,
) -> ResolvedContext:
    """
    Read everything a run depends on from source control and the clock.

    The working tree ref is only looked up when the request carries neither
    a pull-request ref nor a branch ref.

    Args:
        request: Tag request
        io_layer: Source-control access
        today: Date override (defaults to the current date)

    Raises:
        ConfigurationError: If the request is invalid
        SourceControlError: If the commit hash or ref cannot be resolved
    """
    errors = request.validate()
    if errors:
        raise ConfigurationError("; ".join(errors))

    commit_hash = io_layer.current_commit_hash()

    branch_ref = request.branch_ref
    if not request.pull_request_ref and not branch_ref:
        branch_ref = io_layer.current_ref()

    raw_branch = resolve_branch(branch_ref, request.pull_request_ref)
    run_date = today or date_type.today()

    return ResolvedContext(
        commit_hash=commit_hash,
        raw_branch=raw_branch,
        normalized_branch=normalize(raw_branch, request.branch_separator),
        date=run_date.strftime(DATE_FORMAT),
    )


def generate_tag(request: TagRequest, context: ResolvedContext, list_tags: TagLister) -> TagResult:
    """
    Build the tag for a run.

    A custom tag is returned unchanged. Otherwise the fields are composed
    and shortened to leave room for the counter, the counter is resolved
    against that shortened prefix when the format has a counter slot, and the
    result is truncated to the request's max length.

    Args:
        request: Validated tag request
        context: Values resolved for this run
        list_tags: Callable listing existing tags of a scope by prefix

    Returns:
        TagResult with the tag, commit hash and normalized branch
    """
    if request.custom_tag:
        logger.info(f"Using custom tag '{request.custom_tag}'")
        return TagResult(
            tag=request.custom_tag,
            commit_hash=context.commit_hash,
            branch=context.normalized_branch,
        )

    composed = compose(
        request.tag_format,
        request.service_name,
        context.date,
        context.normalized_branch,
        request.include_counter,
    )

    segments = composed.segments
    counter = None
    if composed.has_counter_slot:
        # Existing tags were truncated too, so query with the truncated prefix
        segments = shrink_segments(segments, request.max_length, "0" * COUNTER_WIDTH)
        counter = next_counter(join_tag(segments), list_tags)

    tag = enforce_length(segments, request.max_length, counter)

    return TagResult(
        tag=tag,
        commit_hash=context.commit_hash,
        branch=context.normalized_branch,
    )
