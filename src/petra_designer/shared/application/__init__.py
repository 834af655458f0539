"""Shared application-layer helpers."""
