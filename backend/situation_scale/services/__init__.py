"""Services Layer — game orchestration and the client-side room listener.

Invariants:
    - GameOrchestrator is the only writer of game state
    - Services depend on core/ protocols, never on concrete infrastructure classes

Design Decisions:
    - Orchestrator built per request around the request's session (api/dependencies.py)
"""
