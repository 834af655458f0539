"""
Config feature.

Compiles documents to the runtime configuration text and back.
"""
