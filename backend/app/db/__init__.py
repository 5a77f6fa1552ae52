"""Database Package — SQLAlchemy declarative Base.

Invariants:
    - Engine and sessions live in infrastructure/database.py (initialized via init_db)
    - All sessions are async (AsyncSession)
"""
