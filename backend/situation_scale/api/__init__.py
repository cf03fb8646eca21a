"""API Layer — FastAPI routes, request dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured camelCase JSON

Design Decisions:
    - Thin routes delegate to GameOrchestrator (impureim sandwich lives in services/)
"""
