"""
Utilization Decay — Time-decayed adjusted utilization

The primary market keeps a "hot" utilization baseline that cools down
toward the real utilization counter over time:

    diff  = adjusted_utilization - utilization
    delta = diff * exp(-(now - utilization_timestamp) / decay_secs)
    delta = clamp(delta, 0, diff)
    adjusted = utilization + delta

A client quoting later than another must see a lower (or equal) congestion
surcharge, so the result is non-increasing in `now`.

CRITICAL INVARIANTS:
1. utilization >= adjusted_utilization → adjusted_utilization unchanged
2. utilization <= result <= adjusted_utilization otherwise
3. decay_secs <= 0 → InvalidDecayConstant
4. `now` is truncated to whole seconds (chain time_point_sec)
"""

import time
from datetime import datetime
from decimal import Decimal

from src.core.domain.market_state import ResourceCurveState, to_epoch_seconds
from src.core.errors import InvalidDecayConstant
from src.core.math.fixed_point import (
    DEFAULT_DECIMAL_PRECISION,
    decimal_context,
    floor_to_int,
)
from src.core.math.numerical_safeguards import clamp

Timestamp = int | float | datetime | str


def resolve_timestamp(now: Timestamp | None = None) -> int:
    """
    Evaluation time in whole epoch seconds.

    Args:
        now: Explicit override (epoch seconds, datetime or ISO string);
            None reads the wall clock

    Returns:
        Seconds since epoch, truncated
    """
    if now is None:
        return int(time.time())
    if isinstance(now, float):
        return int(now)
    return int(to_epoch_seconds(now))


def determine_adjusted_utilization(
    state: ResourceCurveState,
    now: Timestamp | None = None,
    precision: int = DEFAULT_DECIMAL_PRECISION,
) -> int:
    """
    Adjusted utilization of a curve at time `now`.

    The decayed part is truncated to a whole weight unit, as the contract
    stores it in an int64.

    Args:
        state: Curve snapshot
        now: Evaluation time (default: wall clock)
        precision: Decimal digits for exp()

    Returns:
        Adjusted utilization (integer weight)

    Raises:
        InvalidDecayConstant: If state.decay_secs <= 0
    """
    if state.decay_secs <= 0:
        raise InvalidDecayConstant(state.decay_secs)

    utilization = state.utilization
    adjusted = state.adjusted_utilization

    if utilization >= adjusted:
        return adjusted

    elapsed = resolve_timestamp(now) - state.utilization_timestamp
    diff = adjusted - utilization

    # exp(x) >= 1 for x >= 0, clamped to diff anyway
    if elapsed <= 0:
        return adjusted

    with decimal_context(precision):
        factor = (Decimal(-elapsed) / Decimal(state.decay_secs)).exp()
        delta = floor_to_int(Decimal(diff) * factor)

    return utilization + clamp(delta, 0, diff)
