"""Shared utilities for config-snapshot."""
