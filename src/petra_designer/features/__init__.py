"""
Features module - Vertical Feature Organization

Each feature module contains all related code organized by layer:
- domain/: Entities and value objects
- application/: Validators, generators, transitions
- infrastructure/: File formats and codecs

Features:
- nodes/: Node kinds, payloads, block catalog, field rules
- connections/: Edges and the connection rules
- documents/: The node + edge document, checks and persistence
- config/: Runtime configuration generator and parser
- store/: Atomic mutations, history and events
"""
