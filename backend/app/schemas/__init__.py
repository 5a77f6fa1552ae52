"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas check presence and type only; length/format rules live in
      core/validate_input.py so violations accumulate into one 422 response

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
