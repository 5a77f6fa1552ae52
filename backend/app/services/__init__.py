"""Services Layer — operation handlers and operation dispatch.

Invariants:
    - Handlers split by resource (auth, posts)
    - Operation dispatch uses explicit dict mapping (no auto-discovery)
"""
