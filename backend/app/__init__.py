"""Postboard Application Package — social posting backend.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
