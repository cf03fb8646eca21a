"""Pydantic Schemas — request/response validation and room event payloads.

Invariants:
    - Schemas validate at system boundary (user input, API responses, broadcasts)
    - Domain types from core/ used for enum fields

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
