"""Validation, premium classification and tracking guidance rules."""

from conveyorcalc.rules.premium import calculate_premium_flags, PREMIUM_RULES
from conveyorcalc.rules.tracking import (
    TrackingAdvisor,
    calculate_tracking_guidance,
    tracking_tooltip,
    is_tracking_selection_optimal,
)
from conveyorcalc.rules.validation import (
    validate,
    validate_inputs,
    validate_parameters,
    apply_application_rules,
)

__all__ = [
    "calculate_premium_flags",
    "PREMIUM_RULES",
    "TrackingAdvisor",
    "calculate_tracking_guidance",
    "tracking_tooltip",
    "is_tracking_selection_optimal",
    "validate",
    "validate_inputs",
    "validate_parameters",
    "apply_application_rules",
]
