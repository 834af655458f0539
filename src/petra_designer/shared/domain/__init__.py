"""Shared domain objects."""
