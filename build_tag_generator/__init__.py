"""Build Tag Generator - deterministic image tags for CI builds."""
