"""Cycle Context — the immutable per-cycle snapshot shared by every heartbeat task.

Invariants:
    - Frozen: no field can be reassigned after construction
    - credit_balance == floor(usdc_balance * 100) when both come from one fetch;
      both are 0 when no wallet address was given or the fetch failed
    - survival_tier was computed from this credit_balance, never recomputed
    - config and db are the caller's objects, passed through by reference

Design Decisions:
    - Built only by services/context_builder.build_cycle_context
    - config/db typed as Any: opaque to the core, owned by the caller
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from heartbeat.core.domain_types import CreditCents, CycleId, SurvivalTier


@dataclass(frozen=True)
class CycleContext:
    cycle_id: CycleId
    started_at: datetime
    credit_balance: CreditCents
    usdc_balance: float
    survival_tier: SurvivalTier
    low_compute_multiplier: float
    config: Any
    db: Any

    def summary(self) -> dict:
        """Scalar fields only, JSON-serializable (for log records)."""
        return {
            "cycle_id": self.cycle_id,
            "started_at": self.started_at.isoformat(),
            "credit_balance": self.credit_balance,
            "usdc_balance": self.usdc_balance,
            "survival_tier": self.survival_tier.value,
            "low_compute_multiplier": self.low_compute_multiplier,
        }
