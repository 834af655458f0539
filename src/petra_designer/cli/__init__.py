"""Command line interface (petra-designer generate/parse/check)."""
