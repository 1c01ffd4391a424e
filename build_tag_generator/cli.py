#!/usr/bin/env python3

"""
Build Tag Generation Script

Computes the image tag for the current build using the Functional Core,
Imperative Shell pattern. All tag logic is in pure functions, all I/O is
in the I/O layer.
"""

import logging
import os
import sys

from .environment import EnvironmentConfig, settings_from_yaml
from .exceptions import BuildTagError, ConfigurationError
from .git_operations import setup_git_client
from .io_layer import IOLayer, read_yaml, write_github_outputs
from .tag_generator import generate_tag, resolve_context
from .utils import setup_logging


def load_file_settings(path: str) -> dict:
    """Read the YAML settings file named by CONFIG_FILE."""
    data = read_yaml(path)
    if data is None:
        raise ConfigurationError(f"Settings file not found: {path}")
    return settings_from_yaml(data)


def main():
    """Main entry point - configuration, context resolution, tag generation."""
    setup_logging(getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO))
    try:
        # Step 1: Parse settings file and environment
        file_settings = {}
        if config_file := os.environ.get("CONFIG_FILE", "").strip():
            file_settings = load_file_settings(config_file)
        config = EnvironmentConfig.from_env(os.environ, file_settings)

        # Step 2: Validate configuration before touching the repository
        errors = config.validate()
        if errors:
            for error in errors:
                print(f"Error: {error}")
            sys.exit(1)
        request = config.to_request()

        # Print configuration
        if request.custom_tag:
            print(f"Custom tag: {request.custom_tag}")
        else:
            print(f"Service name: {request.service_name or '(none)'}")
            print(f"Tag format: {request.tag_format.value}")
            print(f"Max length: {request.max_length}")
            print(f"Include counter: {request.include_counter}")

        # Handle target path change
        if config.target_path != ".":
            print(f"Changing to target directory: {config.target_path}")
            os.chdir(config.target_path)

        # Step 3: Setup I/O layer
        repo, github_repo = setup_git_client(".", config.github_token, config.github_repository)
        io_layer = IOLayer(repo, github_repo, remote=config.remote)

        # Step 4: Resolve commit, branch and date, then build the tag
        context = resolve_context(request, io_layer)
        result = generate_tag(request, context, io_layer.list_tags)

        # Step 5: Publish outputs
        write_github_outputs(result.as_outputs(), os.environ.get("GITHUB_OUTPUT"))
        print(f"Branch: {result.branch}")
        print(f"Commit: {result.commit_hash}")
        print(f"Tag: {result.tag}")
    except BuildTagError as e:
        print(f"Error: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
