"""Situation Scale — multiplayer ordering party game backend.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
