"""Cycle Context Builder — assembles the shared snapshot at the start of each heartbeat cycle.

Invariants:
    - Exactly one balance fetch per cycle; usdc_balance and credit_balance both
      come from that single observation
    - No wallet address → no fetch, both balances 0
    - Never raises for balance problems: failures are logged and degrade to 0
    - survival_tier computed once, from the credit_balance stored in the context
    - db and config passed through untouched; client accepted but never called

Design Decisions:
    - Degrade, don't fail: an unreachable RPC node yields a CRITICAL-tier cycle
      instead of a crashed heartbeat
    - balance_source injectable (BalanceSource protocol); defaults to the
      on-chain USDC reader configured from settings
    - CancelledError (BaseException) passes through: cancellation is the scheduler's job
"""

import logging
import math
from datetime import datetime, timezone
from typing import Any

from heartbeat.config import HeartbeatConfig
from heartbeat.core.collaborator_protocols import (
    BalanceSource, ComputeClient, HeartbeatConfigLike,
)
from heartbeat.core.cycle_context import CycleContext
from heartbeat.core.cycle_id import generate_cycle_id
from heartbeat.core.domain_types import CycleId
from heartbeat.core.errors import BalanceRetrievalError
from heartbeat.core.survival import (
    CENTS_PER_USDC, credits_from_usdc, get_survival_tier,
    resolve_low_compute_multiplier,
)
from heartbeat.infrastructure.usdc_balance import UsdcBalanceReader

logger = logging.getLogger(__name__)


async def build_cycle_context(
    db: Any,
    client: ComputeClient,
    config: HeartbeatConfigLike,
    wallet_address: str | None = None,
    *,
    balance_source: BalanceSource | None = None,
) -> CycleContext:
    """Build the CycleContext for the current heartbeat cycle.

    - Generates a unique cycle_id and stamps started_at (UTC)
    - Fetches the USDC balance ONCE (only when a wallet address is given)
    - Derives credit_balance (cents) and survival_tier from that fetch
    - Resolves low_compute_multiplier from config (default 4)
    """
    cycle_id = generate_cycle_id()
    started_at = datetime.now(timezone.utc)

    fetched = None
    if wallet_address:
        fetched = await _fetch_usdc_balance(
            balance_source, config, wallet_address, cycle_id,
        )

    usdc_balance = fetched if fetched is not None else 0.0
    credit_balance = credits_from_usdc(usdc_balance)
    if fetched is not None:
        logger.debug(
            f"Calculated credit balance from USDC: ${usdc_balance:.4f} -> {credit_balance} cents",
            extra={
                "cycle_id": cycle_id, "usdc_balance": usdc_balance,
                "credit_balance": credit_balance,
            },
        )

    survival_tier = get_survival_tier(credit_balance)
    low_compute_multiplier = resolve_low_compute_multiplier(
        getattr(config, "low_compute_multiplier", None),
    )

    context = CycleContext(
        cycle_id=cycle_id,
        started_at=started_at,
        credit_balance=credit_balance,
        usdc_balance=usdc_balance,
        survival_tier=survival_tier,
        low_compute_multiplier=low_compute_multiplier,
        config=config,
        db=db,
    )
    logger.debug("Cycle context built", extra=context.summary())
    return context


def _default_balance_source(config: object) -> BalanceSource:
    settings = config if isinstance(config, HeartbeatConfig) else None
    return UsdcBalanceReader.from_settings(settings)


def _usable_balance(balance: object) -> float | None:
    """Balance as float if credits can be derived from it, else None."""
    if isinstance(balance, bool) or not isinstance(balance, (int, float)):
        return None
    try:
        usdc = float(balance)
    except OverflowError:
        return None
    if not math.isfinite(usdc) or usdc < 0:
        return None
    # floor() of an infinite product raises; keep the credit derivation total
    if not math.isfinite(usdc * CENTS_PER_USDC):
        return None
    return usdc


async def _fetch_usdc_balance(
    source: BalanceSource | None,
    config: object,
    wallet_address: str,
    cycle_id: CycleId,
) -> float | None:
    """Single balance read. None (after logging) when the cycle must degrade."""
    try:
        if source is None:
            source = _default_balance_source(config)
        balance = await source.get_usdc_balance(wallet_address)
    except BalanceRetrievalError as e:
        e.context.cycle_id = cycle_id
        logger.warning(
            f"Failed to fetch USDC balance, using 0 for this cycle: {e.message}",
            extra=e.to_log_extra(),
        )
        return None
    except Exception as e:
        logger.error(
            f"Unexpected error fetching USDC balance, using 0 for this cycle: {e}",
            exc_info=True,
            extra={"cycle_id": cycle_id, "wallet_address": wallet_address},
        )
        return None

    usdc = _usable_balance(balance)
    if usdc is None:
        logger.error(
            f"Balance source returned unusable value {balance!r}, using 0 for this cycle",
            extra={"cycle_id": cycle_id, "wallet_address": wallet_address},
        )
    return usdc
