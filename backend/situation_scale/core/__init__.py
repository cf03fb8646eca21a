"""Core Layer — pure game rules, scoring and projection, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, db/ or models/
    - Randomness is injectable (random.Random) so every rule is deterministic under test

Design Decisions:
    - Functional core separated from imperative shell (services/ orchestrates IO)
"""
