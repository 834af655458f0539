"""
Application layer - cross-feature services

This layer contains:
- Result types returned by the FlowStore (api/)
- Event bus and domain events for UI synchronization (events/)
- Designer settings (settings/)
- The error taxonomy (errors.py)
"""
