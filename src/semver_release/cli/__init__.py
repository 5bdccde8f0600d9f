"""Command line interface for semver-release."""
