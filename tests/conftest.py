"""Test fixtures for Build Tag Generator.

This module provides shared fixtures used across multiple test modules.

Fixtures:
    run_date: Fixed date used in place of the current date
    fake_tag_lister: Factory for in-memory tag listers
    mock_repo: Mock GitPython repository
"""

from datetime import date
from unittest.mock import Mock

import pytest

from build_tag_generator.exceptions import TagQueryError
from build_tag_generator.models import TagScope


@pytest.fixture
def run_date():
    """The date all tags in the tests are generated on."""
    return date(2024, 1, 15)


@pytest.fixture
def fake_tag_lister():
    """Creates tag listers backed by in-memory tag lists.

    Each scope maps to a list of tags, or to an exception raised when that
    scope is queried. Calls are recorded on the returned lister.

    Example:
        lister = fake_tag_lister(remote=["a_00"], local=TagQueryError("boom"))
    """

    def factory(remote=(), local=()):
        scopes = {TagScope.REMOTE: remote, TagScope.LOCAL: local}
        calls = []

        def list_tags(scope, prefix):
            calls.append((scope, prefix))
            tags = scopes[scope]
            if isinstance(tags, Exception):
                raise tags
            return [tag for tag in tags if tag.startswith(prefix)]

        list_tags.calls = calls
        return list_tags

    return factory


@pytest.fixture
def failing_scope():
    """A TagQueryError to stand in for an unavailable tag namespace."""
    return TagQueryError("remote unavailable", scope="remote")


@pytest.fixture
def mock_repo():
    """Provides a mock Git repository."""
    repo = Mock()
    repo.git = Mock()
    repo.head.commit.hexsha = "0123456789abcdef0123456789abcdef01234567"
    repo.active_branch.name = "main"
    return repo
