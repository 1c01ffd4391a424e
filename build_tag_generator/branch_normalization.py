"""
Branch Normalization Module

Pure functions turning free-form branch and pull-request refs into tag-safe
tokens. This module contains no side effects - only string transformation.
"""

import re

from .config import SPECIAL_BRANCH_CHARACTERS

REF_PREFIX_RE = re.compile(r"^refs/[^/]+/")


def normalize(raw: str, separator: str) -> str:
    """
    Replace characters that are not allowed in a tag.

    Each of '/', ':', '@' and '#' becomes the separator. Case is kept and
    repeated separators are not collapsed, so normalized input is a fixed point.

    Args:
        raw: Branch name
        separator: Single replacement character

    Returns:
        Normalized branch token
    """
    normalized = raw
    for character in SPECIAL_BRANCH_CHARACTERS:
        normalized = normalized.replace(character, separator)
    return normalized


def strip_ref_prefix(ref: str) -> str:
    """Strip a leading 'refs/<kind>/' (e.g. refs/heads/) from a git ref."""
    return REF_PREFIX_RE.sub("", ref.strip(), count=1)


def resolve_branch(branch_ref: str, pull_request_ref: str = "") -> str:
    """
    Pick the branch name a build is tagged with.

    A pull-request head ref takes precedence over the branch ref.

    Args:
        branch_ref: Ref of the build (e.g. refs/heads/main or main)
        pull_request_ref: Head ref of the pull request, empty outside PRs

    Returns:
        Raw branch name with any ref prefix removed
    """
    if pull_request_ref and pull_request_ref.strip():
        return strip_ref_prefix(pull_request_ref)
    return strip_ref_prefix(branch_ref)
