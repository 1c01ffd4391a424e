"""Data models for the tag generation pipeline."""

from dataclasses import dataclass, field
from typing import List, Tuple, Dict
from enum import Enum

from .config import (
    DEFAULT_MAX_LENGTH,
    DEFAULT_BRANCH_SEPARATOR,
    TAG_FIELD_SEPARATOR,
)
from .exceptions import ConfigurationError


class TagField(Enum):
    """Fields a tag can be composed of (the counter is handled separately)."""
    SERVICE = "service"
    DATE = "date"
    BRANCH = "branch"


class TagScope(Enum):
    """Tag namespaces queried when resolving the counter."""
    REMOTE = "remote"
    LOCAL = "local"


class TagFormat(Enum):
    """Supported field orderings for the generated tag."""
    SERVICE_DATE_BRANCH_COUNTER = "service-date-branch-counter"
    SERVICE_BRANCH_DATE_COUNTER = "service-branch-date-counter"
    BRANCH_DATE_COUNTER = "branch-date-counter"
    BRANCH_DATE = "branch-date"  # never carries a counter
    DATE_BRANCH = "date-branch"  # never carries a counter

    @classmethod
    def parse(cls, value: str) -> "TagFormat":
        """Parse a format string, accepting '-' or '_' between keywords.

        Args:
            value: Format string such as 'branch_date_counter'

        Returns:
            TagFormat enum value

        Raises:
            ConfigurationError: If the format is not recognized
        """
        normalized = (value or "").strip().lower().replace("_", "-")
        try:
            return cls(normalized)
        except ValueError:
            valid_formats = [f.value for f in cls]
            raise ConfigurationError(
                f"Invalid TAG_FORMAT '{value}'. "
                f"Valid options are: {', '.join(valid_formats)}"
            ) from None

    @property
    def has_counter(self) -> bool:
        """Whether the format ends with a counter slot."""
        return self.value.endswith("-counter")

    @property
    def fields(self) -> Tuple[TagField, ...]:
        """Ordered tag fields, excluding the counter."""
        return tuple(
            TagField(name) for name in self.value.split("-") if name != "counter"
        )


@dataclass(frozen=True)
class TagRequest:
    """Inputs of a single tag generation run."""

    service_name: str = ""
    custom_tag: str = ""
    tag_format: TagFormat = TagFormat.SERVICE_DATE_BRANCH_COUNTER
    max_length: int = DEFAULT_MAX_LENGTH
    include_counter: bool = True
    branch_ref: str = ""
    pull_request_ref: str = ""
    branch_separator: str = DEFAULT_BRANCH_SEPARATOR

    def validate(self) -> List[str]:
        """Validate the request.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []
        if self.max_length <= 0:
            errors.append(f"MAX_LENGTH must be a positive integer, got {self.max_length}")
        if len(self.branch_separator) != 1:
            errors.append(
                f"BRANCH_SEPARATOR must be a single character, got '{self.branch_separator}'"
            )
        return errors


@dataclass(frozen=True)
class ResolvedContext:
    """Values derived once per run from source control and the clock."""
    commit_hash: str
    raw_branch: str
    normalized_branch: str
    date: str  # YYYY-MM-DD


@dataclass(frozen=True)
class ComposedTag:
    """Ordered tag fields before counter resolution and truncation."""
    segments: Tuple[Tuple[TagField, str], ...] = field(default_factory=tuple)
    has_counter_slot: bool = False

    @property
    def prefix(self) -> str:
        """The tag without its counter."""
        return TAG_FIELD_SEPARATOR.join(value for _, value in self.segments)


@dataclass(frozen=True)
class TagResult:
    """Result of a tag generation run."""
    tag: str
    commit_hash: str
    branch: str

    def as_outputs(self) -> Dict[str, str]:
        """Step outputs exposed to later workflow steps."""
        return {
            "tag": self.tag,
            "commit_hash": self.commit_hash,
            "branch": self.branch,
        }
