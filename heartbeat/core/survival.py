"""Survival Economics — credit derivation, tier classification, multiplier resolution.

Invariants:
    - credits_from_usdc(b) == floor(b * 100) for every finite b
    - get_survival_tier is total over int: every credit amount maps to one tier
    - resolve_low_compute_multiplier never returns a non-positive value

Design Decisions:
    - Thresholds compared with strict '>' so the boundary value belongs to the
      poorer tier (exactly 500 cents is NORMAL, not HIGH)
    - Zero credits is CRITICAL, only negative credit is DEAD: a cycle whose
      balance lookup failed lands in CRITICAL
"""

import math

from heartbeat.core.domain_types import CreditCents, SurvivalTier

CENTS_PER_USDC = 100
DEFAULT_LOW_COMPUTE_MULTIPLIER = 4

# Lower bounds (exclusive) in credit cents
SURVIVAL_THRESHOLDS: dict[SurvivalTier, int] = {
    SurvivalTier.HIGH: 500,
    SurvivalTier.NORMAL: 50,
    SurvivalTier.LOW_COMPUTE: 10,
}


def credits_from_usdc(usdc_balance: float) -> CreditCents:
    """Convert a USDC balance into whole credit cents, rounding down."""
    return CreditCents(math.floor(usdc_balance * CENTS_PER_USDC))


def get_survival_tier(credit_cents: int) -> SurvivalTier:
    """Classify a credit balance. Pure, total."""
    for tier, floor_cents in SURVIVAL_THRESHOLDS.items():
        if credit_cents > floor_cents:
            return tier
    if credit_cents >= 0:
        return SurvivalTier.CRITICAL
    return SurvivalTier.DEAD


def resolve_low_compute_multiplier(value: object) -> float:
    """Configured multiplier if it is a positive finite number, else the default."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_LOW_COMPUTE_MULTIPLIER
    if not math.isfinite(value) or value <= 0:
        return DEFAULT_LOW_COMPUTE_MULTIPLIER
    return value
