"""
Premium feature classification.

Each rule is a (predicate, reason) pair. Rules are additive: adding a new
trigger appends a reason and never changes the level of configurations
that do not trip it.
"""

from typing import Callable, NamedTuple

from conveyorcalc.models.inputs import BedType, BeltTrackingMethod, ConveyorInputs
from conveyorcalc.models.outputs import PremiumFlags, PremiumLevel


class PremiumRule(NamedTuple):
    applies: Callable[[ConveyorInputs], bool]
    reason: str


PREMIUM_RULES: list[PremiumRule] = [
    PremiumRule(
        applies=lambda inputs: inputs.bed_type == BedType.ROLLER_BED,
        reason="Roller bed construction",
    ),
    PremiumRule(
        applies=lambda inputs: inputs.belt_tracking_method == BeltTrackingMethod.V_GUIDED,
        reason="V-guided belt tracking",
    ),
]


def premium_level_for(reason_count: int) -> PremiumLevel:
    if reason_count >= 2:
        return PremiumLevel.PREMIUM_PLUS
    if reason_count == 1:
        return PremiumLevel.PREMIUM
    return PremiumLevel.STANDARD


def calculate_premium_flags(inputs: ConveyorInputs) -> PremiumFlags:
    """Classify a configuration as standard, premium or premium_plus."""
    reasons = [rule.reason for rule in PREMIUM_RULES if rule.applies(inputs)]
    return PremiumFlags(
        is_premium=bool(reasons),
        premium_reasons=reasons,
        premium_level=premium_level_for(len(reasons)),
    )
