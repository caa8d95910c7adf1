"""Filesystem and data helpers shared across the core."""
