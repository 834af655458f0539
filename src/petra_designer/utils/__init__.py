"""Shared utilities (logging, paths)."""
