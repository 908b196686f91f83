"""Risk profile -> (pre-retirement, retirement) return rates."""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple, Union

from retireplan.models import RatePair, RiskProfile

logger = logging.getLogger(__name__)

DEFAULT_PRE_RETIREMENT_RATE = 0.065
DEFAULT_RETIREMENT_RATE = 0.05

# retirement-phase rate sits below the pre-retirement rate (glide path)
PROFILE_RATES: Dict[RiskProfile, Tuple[float, float]] = {
    RiskProfile.CONSERVATIVE: (0.045, 0.035),
    RiskProfile.BALANCED: (DEFAULT_PRE_RETIREMENT_RATE, DEFAULT_RETIREMENT_RATE),
    RiskProfile.GROWTH: (0.085, 0.065),
}


def coerce_profile(profile: Union[RiskProfile, str, None]) -> RiskProfile:
    if isinstance(profile, RiskProfile):
        return profile
    try:
        return RiskProfile(str(profile).lower())
    except ValueError:
        logger.debug("unknown risk profile %r, falling back to balanced", profile)
        return RiskProfile.BALANCED


def resolve_rates(
    profile: Union[RiskProfile, str, None],
    custom_pre_retirement: Optional[float] = None,
    custom_retirement: Optional[float] = None,
) -> RatePair:
    """
    Map a risk profile onto the pair of annual return rates used by the two phases.

    ``custom`` takes the caller's rates (each defaulting to the balanced figure);
    anything unrecognised is treated as ``balanced``.
    """
    resolved = coerce_profile(profile)

    if resolved == RiskProfile.CUSTOM:
        pre = DEFAULT_PRE_RETIREMENT_RATE if custom_pre_retirement is None else custom_pre_retirement
        post = DEFAULT_RETIREMENT_RATE if custom_retirement is None else custom_retirement
    else:
        pre, post = PROFILE_RATES[resolved]

    return RatePair(profile=resolved, preRetirementRate=pre, retirementRate=post)
