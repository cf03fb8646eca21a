"""Database Package — declarative Base shared by every ORM model.

Invariants:
    - Single async engine per process in the app (see infrastructure/database.py)
    - All sessions are async (AsyncSession)
"""
