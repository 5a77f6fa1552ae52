"""Infrastructure Layer — database, file store, password hashing and logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All external failures mapped to core/errors.py types or logged at the boundary
"""
