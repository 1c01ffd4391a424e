"""
Configuration Module for Build Tag Generator

This module contains constants shared by the tag generation pipeline and the
environment parsing layer. Values here describe the tag grammar itself, so
registries and Kubernetes label values accept the generated tags.

Constants:
    DEFAULT_MAX_LENGTH: Default tag length ceiling (Kubernetes label limit)
    DEFAULT_BRANCH_SEPARATOR: Character substituted for special branch characters
    DEFAULT_TAG_FORMAT: Field ordering used when TAG_FORMAT is not set
    TAG_FIELD_SEPARATOR: Separator placed between tag fields
    SPECIAL_BRANCH_CHARACTERS: Characters replaced during branch normalization
    BRANCH_RESERVED_LENGTH: Branch characters kept before service/date are cut
    MIN_SEGMENT_LENGTH: Shortest a field may become during truncation
    COUNTER_WIDTH: Zero padding width of the duplicate counter
    DATE_FORMAT: strftime format of the date field
    DEFAULT_REMOTE: Git remote queried for existing tags
    SETTINGS_ROOT_KEY: Top-level key of the optional YAML settings file
"""

DEFAULT_MAX_LENGTH = 63
DEFAULT_BRANCH_SEPARATOR = "-"
DEFAULT_TAG_FORMAT = "service-date-branch-counter"
TAG_FIELD_SEPARATOR = "_"
SPECIAL_BRANCH_CHARACTERS = ("/", ":", "@", "#")
BRANCH_RESERVED_LENGTH = 10
MIN_SEGMENT_LENGTH = 1
COUNTER_WIDTH = 2
DATE_FORMAT = "%Y-%m-%d"
DEFAULT_REMOTE = "origin"
SETTINGS_ROOT_KEY = "build_tag"
