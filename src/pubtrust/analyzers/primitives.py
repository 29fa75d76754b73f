"""Scalar helpers shared by the scorers."""

import math
from datetime import datetime, timezone

# Recency tiers: (max months since last contribution, factor)
RECENCY_TIERS = (
    (1, 1.55),
    (3, 1.5),
    (6, 1.3),
    (12, 1.1),
    (24, 0.6),
)
RECENCY_TAIL_START = 0.4
RECENCY_TAIL_FLOOR = 0.56

ABUSE_LOC_RANGE = (20.0, 50.0)  # Lines changed per commit
ABUSE_PENALTY_RANGE = (0.2, 1.0)

OVERFLOW_CAP = 1000.0
OVERFLOW_SPREAD = 1400.0  # At the default cap, scaled with custom caps
OVERFLOW_SCALE = 1000.0


def log_scale(count: float) -> float:
    """Natural-log compression of a raw count: ln(count + 1)."""
    return math.log(count + 1)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def lerp(low: float, high: float, t: float) -> float:
    return low + (high - low) * t


def as_utc(moment: datetime) -> datetime:
    """Treat naive timestamps as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def months_between(start: datetime, end: datetime) -> float:
    """Whole days between two timestamps divided by 30.

    Negative spans (end before start) are clamped to zero.
    """
    days = (as_utc(end) - as_utc(start)).days
    return max(0, days) / 30


def recency_factor(months_since_last: float) -> float:
    """Multiplier rewarding recent activity.

    Steps down through RECENCY_TIERS, then halves once per year past
    24 months with a floor of RECENCY_TAIL_FLOOR.
    """
    for max_months, factor in RECENCY_TIERS:
        if months_since_last <= max_months:
            return factor

    years_past = math.floor((months_since_last - 24) / 12)
    # The floor sits above the tail start, so long-idle contributors plateau
    return max(RECENCY_TAIL_START * 0.5 ** years_past, RECENCY_TAIL_FLOOR)


def longevity_factor(active_months: float) -> float:
    """Multiplier for sustained contribution history, capped at 1.0."""
    return min(math.log2(active_months / 12 + 1) * 0.25, 1.0)


def abuse_penalty_factor(loc_per_commit: float) -> float:
    """Penalty multiplier for trivially small commits.

    20 lines/commit or fewer maps to 0.2, 50 or more maps to 1.0,
    linear in between.
    """
    low_loc, high_loc = ABUSE_LOC_RANGE
    low_penalty, high_penalty = ABUSE_PENALTY_RANGE
    t = (clamp(loc_per_commit, low_loc, high_loc) - low_loc) / (high_loc - low_loc)
    return lerp(low_penalty, high_penalty, t)


def compress_overflow(score: float, cap: float = OVERFLOW_CAP) -> float:
    """Logarithmically squash scores above the cap, preserving order.

    Spread and scale are proportional to the cap, so a custom cap bends
    the curve the same way the default one does.
    """
    if score <= cap:
        return score
    ratio = cap / OVERFLOW_CAP
    spread = OVERFLOW_SPREAD * ratio
    scale = OVERFLOW_SCALE * ratio
    return cap + math.log2((score - cap) / spread + 1) * scale
