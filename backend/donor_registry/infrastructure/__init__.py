"""Infrastructure Layer — database session management and logging.

Invariants:
    - Infrastructure only imports error types from core/, never domain logic
    - Store exceptions are mapped to StoreError before leaving this layer
"""
