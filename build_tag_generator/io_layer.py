"""
I/O Layer for Build Tag Generator

This module contains all I/O operations (file system, Git, GitHub)
separated from the tag logic. This is the "imperative shell" that
handles all side effects.
"""

from pathlib import Path
from typing import List, Dict, Optional, Any
import yaml
from git import Repo
from git.exc import GitCommandError
from github.GithubException import GithubException
from github.Repository import Repository
from requests.exceptions import RequestException

from .config import DEFAULT_REMOTE
from .exceptions import SourceControlError, TagQueryError
from .models import TagScope

TAG_REF_PREFIX = "refs/tags/"
GLOB_METACHARACTERS = "[]*?\\"


def glob_pattern(prefix: str) -> str:
    """Build a git glob matching every tag that starts with prefix.

    The pattern stops before the first glob metacharacter of the prefix, so
    callers must filter the listed tags by the exact prefix.
    """
    for index, character in enumerate(prefix):
        if character in GLOB_METACHARACTERS:
            return f"{prefix[:index]}*"
    return f"{prefix}*"


class IOLayer:
    """Handles all source-control operations for the application."""

    def __init__(
        self,
        repo: Repo,
        github_repo: Optional[Repository] = None,
        remote: str = DEFAULT_REMOTE,
    ):
        """Initialize the I/O layer.

        Args:
            repo: Git repository object
            github_repo: GitHub repository object, used for remote tag listing
            remote: Git remote queried when no GitHub repository is set
        """
        self.repo = repo
        self.github_repo = github_repo
        self.remote = remote

    # -----------------------------------------------------------------------------
    # Repository State
    # -----------------------------------------------------------------------------

    def current_commit_hash(self) -> str:
        """Return the commit hash of HEAD.

        Raises:
            SourceControlError: If HEAD does not point to a commit
        """
        try:
            return self.repo.head.commit.hexsha
        except (ValueError, GitCommandError) as e:
            raise SourceControlError(f"Failed to read current commit hash: {e}") from e

    def current_ref(self) -> str:
        """Return the name of the checked out branch.

        Raises:
            SourceControlError: If HEAD is detached
        """
        try:
            return self.repo.active_branch.name
        except TypeError as e:
            raise SourceControlError(
                "Failed to read current branch (detached HEAD); set BRANCH_REF"
            ) from e

    # -----------------------------------------------------------------------------
    # Tag Listing
    # -----------------------------------------------------------------------------

    def list_tags(self, scope: TagScope, prefix: str) -> List[str]:
        """List tag names starting with prefix.

        Args:
            scope: Remote or local tag namespace
            prefix: Tag name prefix

        Returns:
            Matching tag names

        Raises:
            TagQueryError: If the namespace cannot be listed
        """
        if scope == TagScope.LOCAL:
            return self._list_local_tags(prefix)
        if self.github_repo is not None:
            return self._list_github_tags(prefix)
        return self._list_remote_tags(prefix)

    def _list_github_tags(self, prefix: str) -> List[str]:
        """List tags through the GitHub matching-refs API."""
        try:
            refs = self.github_repo.get_git_matching_refs(f"tags/{prefix}")
            return [ref.ref[len(TAG_REF_PREFIX):] for ref in refs]
        except GithubException as e:
            raise TagQueryError(
                f"GitHub tag listing failed with status {e.status}", scope=TagScope.REMOTE.value
            ) from e
        except RequestException as e:
            raise TagQueryError(
                f"GitHub tag listing failed: {e}", scope=TagScope.REMOTE.value
            ) from e

    def _list_remote_tags(self, prefix: str) -> List[str]:
        """List tags of the configured remote with git ls-remote."""
        try:
            output = self.repo.git.ls_remote(
                "--tags", "--refs", self.remote, f"{TAG_REF_PREFIX}{glob_pattern(prefix)}"
            )
        except GitCommandError as e:
            raise TagQueryError(
                f"git ls-remote against '{self.remote}' failed: {e}", scope=TagScope.REMOTE.value
            ) from e
        tags = []
        for line in output.splitlines():
            _, _, ref = line.partition("\t")
            if ref.startswith(TAG_REF_PREFIX):
                tags.append(ref[len(TAG_REF_PREFIX):])
        return [tag for tag in tags if tag.startswith(prefix)]

    def _list_local_tags(self, prefix: str) -> List[str]:
        """List tags of the local repository."""
        try:
            output = self.repo.git.tag("--list", glob_pattern(prefix))
        except GitCommandError as e:
            raise TagQueryError(f"git tag --list failed: {e}", scope=TagScope.LOCAL.value) from e
        tags = [line.strip() for line in output.splitlines() if line.strip()]
        return [tag for tag in tags if tag.startswith(prefix)]


# -----------------------------------------------------------------------------
# File System Operations
# -----------------------------------------------------------------------------


def read_yaml(path: str) -> Optional[Dict[str, Any]]:
    """Read a YAML file and return its contents.

    Args:
        path: Path to the YAML file

    Returns:
        Dictionary with YAML contents or None if file doesn't exist
    """
    file_path = Path(path)
    if not file_path.exists():
        return None

    with file_path.open(encoding="utf-8") as f:
        return yaml.safe_load(f)


def write_github_outputs(values: Dict[str, str], output_file: Optional[str] = None) -> None:
    """Write step outputs for GitHub Actions.

    GitHub provides a file path in GITHUB_OUTPUT; writing name=value lines
    there makes the values available to later steps. Without it the lines
    are printed.

    Args:
        values: Output names and values
        output_file: Path from GITHUB_OUTPUT, if any
    """
    lines = [f"{key}={value}" for key, value in values.items()]
    if not output_file:
        for line in lines:
            print(line)
        return

    with open(output_file, "a", encoding="utf-8") as f:
        for line in lines:
            f.write(f"{line}\n")
