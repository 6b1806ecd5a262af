"""Boundary Protocols — contracts for the collaborators the context builder consumes.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - The balance read is the only async boundary of a cycle

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - ComputeClient has no members: the builder receives it but never calls it
"""

from typing import Protocol


class BalanceSource(Protocol):
    """Reads a wallet's USDC balance. Raises BalanceRetrievalError on failure."""
    async def get_usdc_balance(self, address: str) -> float: ...


class ComputeClient(Protocol):
    """Authenticated client the heartbeat tasks use; opaque to the builder."""


class HeartbeatConfigLike(Protocol):
    """Structural contract for the config passed through the cycle context."""
    low_compute_multiplier: float | None
