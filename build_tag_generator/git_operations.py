"""
Git Operations Module for Build Tag Generator

This module handles Git-related setup such as opening the repository and
initializing the optional GitHub client used to list remote tags.

Functions:
    setup_git_client: Sets up Git and GitHub clients

Raises:
    SourceControlError: When the path is not a Git repository
"""

import logging
from typing import Optional

from git import Repo
from git.exc import InvalidGitRepositoryError, NoSuchPathError
from github import Auth, Github
from github.Repository import Repository

from .exceptions import SourceControlError

logger = logging.getLogger(__name__)


def setup_git_client(
    path: str = ".",
    token: str = "",
    github_repository: str = "",
) -> tuple[Repo, Optional[Repository]]:
    """Set up Git and GitHub clients.

    The GitHub client is only created when both a token and a repository
    name are given; the repository handle is lazy, so no API call is made
    until tags are listed.

    Args:
        path: Path inside the Git working tree
        token: GitHub token
        github_repository: Repository in 'owner/name' form

    Returns:
        Tuple of the Git repository and the GitHub repository (or None)
    """
    try:
        repo = Repo(path, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        raise SourceControlError(f"Not a git repository: {path}") from e

    github_repo = None
    if token and github_repository:
        github_client = Github(auth=Auth.Token(token))
        github_repo = github_client.get_repo(github_repository, lazy=True)
        logger.info(f"Listing remote tags through GitHub repository {github_repository}")

    return repo, github_repo
