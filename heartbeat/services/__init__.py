"""Services Layer — imperative shell around the pure core.

Invariants:
    - Services own all awaits; core/ functions they call stay synchronous and pure
"""
