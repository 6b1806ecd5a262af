"""Infrastructure Layer — external service clients and cross-cutting concerns.

Invariants:
    - All external calls wrapped with timeout and error mapping
    - Infrastructure errors surface as core/errors.py types, never raw httpx errors

Design Decisions:
    - Thin wrappers over raw clients (single responsibility per module)
"""
