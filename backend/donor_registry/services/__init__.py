"""Services Layer — imperative shell around the pure core.

Invariants:
    - Services own every database statement; core/ decides what to query
    - Each service takes the request's AsyncSession; no module-level state

Design Decisions:
    - Normalizer, search, registry and import split one concern per file
"""
