"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - CycleId is an opaque string token, unique within one process
    - CreditCents is an integer amount of credits (1 USDC = 100 cents)
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (log records are JSON)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

CycleId = NewType("CycleId", str)
WalletAddress = NewType("WalletAddress", str)   # 0x + 40 hex chars


# ─── Value Types ─────────────────────────────────────────────────

CreditCents = NewType("CreditCents", int)


# ─── Enums ───────────────────────────────────────────────────────

class SurvivalTier(str, Enum):
    """How resource-constrained the agent is, ordered richest to poorest."""
    HIGH = "high"
    NORMAL = "normal"
    LOW_COMPUTE = "low_compute"
    CRITICAL = "critical"
    DEAD = "dead"


class Network(str, Enum):
    """CAIP-2 identifiers of the chains the USDC balance can be read from."""
    BASE = "eip155:8453"
    BASE_SEPOLIA = "eip155:84532"
