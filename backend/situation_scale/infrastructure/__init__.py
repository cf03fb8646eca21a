"""Infrastructure Layer — database, entity store, room broadcast, logging.

Invariants:
    - Infrastructure never imports core/ rules, only core/ errors and protocols
    - SQLAlchemy exceptions are mapped to PersistenceError before leaving this layer
"""
