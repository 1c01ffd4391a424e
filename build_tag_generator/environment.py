"""
Environment Configuration Module

Handles parsing and validation of environment variables and the optional
YAML settings file. This is a pure module - no side effects, just data
transformation.
"""

from dataclasses import dataclass
from typing import List, Dict, Optional, Any
import logging

import dpath

from .config import (
    DEFAULT_MAX_LENGTH,
    DEFAULT_BRANCH_SEPARATOR,
    DEFAULT_TAG_FORMAT,
    DEFAULT_REMOTE,
    SETTINGS_ROOT_KEY,
)
from .exceptions import ConfigurationError
from .models import TagFormat, TagRequest

logger = logging.getLogger(__name__)

# Environment variable -> path inside the settings file
SETTINGS_PATHS = {
    "SERVICE_NAME": f"{SETTINGS_ROOT_KEY}/service_name",
    "TAG_FORMAT": f"{SETTINGS_ROOT_KEY}/format",
    "MAX_LENGTH": f"{SETTINGS_ROOT_KEY}/max_length",
    "INCLUDE_COUNTER": f"{SETTINGS_ROOT_KEY}/include_counter",
    "BRANCH_SEPARATOR": f"{SETTINGS_ROOT_KEY}/branch_separator",
    "TAG_REMOTE": f"{SETTINGS_ROOT_KEY}/remote",
}


def settings_from_yaml(data: Optional[Dict[str, Any]]) -> Dict[str, str]:
    """Extract settings from a parsed YAML settings file.

    Args:
        data: Parsed YAML document

    Returns:
        Mapping of environment variable names to string values

    Raises:
        ConfigurationError: If the document is not a mapping
    """
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError("Settings file must contain a mapping")

    settings = {}
    for name, path in SETTINGS_PATHS.items():
        value = dpath.get(data, path, default=None)
        if value is None:
            continue
        if isinstance(value, bool):
            value = str(value).lower()
        settings[name] = str(value)
    return settings


@dataclass
class EnvironmentConfig:
    """Configuration parsed from environment variables."""

    service_name: str = ""
    custom_tag: str = ""
    tag_format: str = DEFAULT_TAG_FORMAT
    max_length: str = str(DEFAULT_MAX_LENGTH)
    include_counter: bool = True
    branch_ref: str = ""
    pull_request_ref: str = ""
    branch_separator: str = DEFAULT_BRANCH_SEPARATOR
    remote: str = DEFAULT_REMOTE
    github_token: str = ""
    github_repository: str = ""
    target_path: str = "."

    @classmethod
    def from_env(cls, env: Dict[str, str], file_settings: Optional[Dict[str, str]] = None) -> "EnvironmentConfig":
        """Create configuration from environment variables.

        Environment variables win over the settings file, which wins over
        the defaults.

        Args:
            env: Dictionary of environment variables (typically os.environ)
            file_settings: Settings read from the YAML settings file

        Returns:
            EnvironmentConfig instance
        """
        file_settings = file_settings or {}

        def setting(name: str, default: str) -> str:
            value = env.get(name, "")
            if value.strip():
                return value.strip()
            return file_settings.get(name, default)

        # GitHub sets GITHUB_HEAD_REF only for pull_request events
        branch_ref = env.get("BRANCH_REF", "").strip() or env.get("GITHUB_REF", "").strip()
        pull_request_ref = (
            env.get("PULL_REQUEST_REF", "").strip() or env.get("GITHUB_HEAD_REF", "").strip()
        )

        # Separator is taken verbatim so whitespace is reported, not dropped
        branch_separator = env.get("BRANCH_SEPARATOR", "") or file_settings.get(
            "BRANCH_SEPARATOR", DEFAULT_BRANCH_SEPARATOR
        )

        return cls(
            service_name=setting("SERVICE_NAME", ""),
            custom_tag=env.get("CUSTOM_TAG", "").strip(),
            tag_format=setting("TAG_FORMAT", DEFAULT_TAG_FORMAT),
            max_length=setting("MAX_LENGTH", str(DEFAULT_MAX_LENGTH)),
            include_counter=setting("INCLUDE_COUNTER", "true").lower() == "true",
            branch_ref=branch_ref,
            pull_request_ref=pull_request_ref,
            branch_separator=branch_separator,
            remote=setting("TAG_REMOTE", DEFAULT_REMOTE),
            github_token=env.get("GH_TOKEN", ""),
            github_repository=env.get("GITHUB_REPOSITORY", ""),
            target_path=env.get("TARGET_PATH", "."),
        )

    def validate(self) -> List[str]:
        """Validate the configuration.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []

        try:
            TagFormat.parse(self.tag_format)
        except ConfigurationError as e:
            errors.append(str(e))

        try:
            max_length = int(self.max_length)
        except ValueError:
            errors.append(f"MAX_LENGTH must be a positive integer, got '{self.max_length}'")
        else:
            if max_length <= 0:
                errors.append(f"MAX_LENGTH must be a positive integer, got {max_length}")

        if len(self.branch_separator) != 1:
            errors.append(
                f"BRANCH_SEPARATOR must be a single character, got '{self.branch_separator}'"
            )

        if self.github_token and not self.github_repository:
            logger.warning("GH_TOKEN is set but GITHUB_REPOSITORY is not, using git for remote tags")

        return errors

    def to_request(self) -> TagRequest:
        """Build the tag request from this configuration.

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        errors = self.validate()
        if errors:
            raise ConfigurationError("; ".join(errors))

        return TagRequest(
            service_name=self.service_name,
            custom_tag=self.custom_tag,
            tag_format=TagFormat.parse(self.tag_format),
            max_length=int(self.max_length),
            include_counter=self.include_counter,
            branch_ref=self.branch_ref,
            pull_request_ref=self.pull_request_ref,
            branch_separator=self.branch_separator,
        )
