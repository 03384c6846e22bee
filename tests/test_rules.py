"""
Tests for premium classification and belt tracking guidance.
"""

import pytest

from conveyorcalc.models.inputs import (
    BedType,
    BeltTrackingMethod,
    DirectionMode,
    EnvironmentFactors,
    SideLoadingDirection,
    SideLoadingSeverity,
)
from conveyorcalc.models.outputs import PremiumLevel, TrackingRiskLevel
from conveyorcalc.rules.premium import calculate_premium_flags, premium_level_for
from conveyorcalc.rules.tracking import (
    TrackingAdvisor,
    calculate_tracking_guidance,
    is_tracking_selection_optimal,
    tracking_tooltip,
)


@pytest.fixture
def short_inputs(basic_inputs):
    """A 48 in long, 18 in wide conveyor: every tracking factor is low."""
    return basic_inputs.model_copy(update={"conveyor_length_cc_in": 48.0})


def _factor(guidance, name):
    return next(f for f in guidance.factors if f.name == name)


class TestPremiumFlags:
    def test_standard(self, basic_inputs):
        flags = calculate_premium_flags(basic_inputs)
        assert not flags.is_premium
        assert flags.premium_reasons == []
        assert flags.premium_level == PremiumLevel.STANDARD

    def test_unset_bed_is_standard(self, minimal_inputs):
        assert calculate_premium_flags(minimal_inputs).premium_level == PremiumLevel.STANDARD

    def test_roller_bed(self, roller_inputs):
        flags = calculate_premium_flags(roller_inputs)
        assert flags.is_premium
        assert flags.premium_reasons == ["Roller bed construction"]
        assert flags.premium_level == PremiumLevel.PREMIUM

    def test_v_guided(self, v_guided_inputs):
        flags = calculate_premium_flags(v_guided_inputs)
        assert flags.premium_reasons == ["V-guided belt tracking"]
        assert flags.premium_level == PremiumLevel.PREMIUM

    def test_roller_and_v_guided(self, v_guided_inputs):
        flags = calculate_premium_flags(v_guided_inputs.model_copy(update={"bed_type": BedType.ROLLER_BED}))
        assert flags.premium_reasons == ["Roller bed construction", "V-guided belt tracking"]
        assert flags.premium_level == PremiumLevel.PREMIUM_PLUS

    @pytest.mark.parametrize("count,level", [
        (0, PremiumLevel.STANDARD),
        (1, PremiumLevel.PREMIUM),
        (2, PremiumLevel.PREMIUM_PLUS),
        (3, PremiumLevel.PREMIUM_PLUS),
    ])
    def test_level_for_count(self, count, level):
        assert premium_level_for(count) == level


class TestTrackingGuidance:
    """Tests for the crowned vs V-guided recommendation."""

    def test_six_factors(self, basic_inputs):
        guidance = calculate_tracking_guidance(basic_inputs)
        assert [f.name for f in guidance.factors] == [
            "Length-to-Width Ratio",
            "Reversing Operation",
            "Side Loading",
            "Accumulation",
            "Environment",
            "Belt Speed",
        ]

    def test_low_risk_recommends_crowned(self, short_inputs):
        guidance = calculate_tracking_guidance(short_inputs)
        assert guidance.risk_level == TrackingRiskLevel.LOW
        assert guidance.recommendation == BeltTrackingMethod.CROWNED
        assert guidance.summary == "Crowned tracking is suitable for this application."
        assert guidance.warnings == []

    def test_long_narrow_is_high(self, basic_inputs):
        guidance = calculate_tracking_guidance(basic_inputs)
        assert _factor(guidance, "Length-to-Width Ratio").risk == TrackingRiskLevel.HIGH
        assert guidance.risk_level == TrackingRiskLevel.HIGH
        assert guidance.recommendation == BeltTrackingMethod.V_GUIDED

    def test_moderate_ratio_is_medium(self, basic_inputs):
        inputs = basic_inputs.model_copy(update={"conveyor_length_cc_in": 90.0})
        guidance = calculate_tracking_guidance(inputs)
        assert _factor(guidance, "Length-to-Width Ratio").risk == TrackingRiskLevel.MEDIUM
        assert guidance.risk_level == TrackingRiskLevel.MEDIUM
        assert guidance.recommendation == BeltTrackingMethod.V_GUIDED

    def test_two_mediums_escalate(self, short_inputs):
        inputs = short_inputs.model_copy(update={
            "environment_factors": EnvironmentFactors.WASHDOWN,
            "side_loading_direction": SideLoadingDirection.LEFT,
        })
        assert calculate_tracking_guidance(inputs).risk_level == TrackingRiskLevel.HIGH

    def test_reversing_is_high(self, short_inputs):
        inputs = short_inputs.model_copy(update={"direction_mode": DirectionMode.REVERSING})
        guidance = calculate_tracking_guidance(inputs)
        assert _factor(guidance, "Reversing Operation").risk == TrackingRiskLevel.HIGH
        assert guidance.warnings[0].startswith("Reversing operation with crowned tracking")

    def test_side_loading_explanation_names_side(self, short_inputs):
        inputs = short_inputs.model_copy(update={
            "side_loading_direction": SideLoadingDirection.RIGHT,
            "side_loading_severity": SideLoadingSeverity.HEAVY,
        })
        factor = _factor(calculate_tracking_guidance(inputs), "Side Loading")
        assert factor.risk == TrackingRiskLevel.HIGH
        assert "from right" in factor.explanation

    def test_short_cycle_accumulation(self, short_inputs):
        inputs = short_inputs.model_copy(update={"start_stop_application": True, "cycle_time_seconds": 5.0})
        factor = _factor(calculate_tracking_guidance(inputs), "Accumulation")
        assert factor.risk == TrackingRiskLevel.MEDIUM
        assert "(5s cycle)" in factor.explanation

    @pytest.mark.parametrize("speed,risk", [
        (100.0, TrackingRiskLevel.LOW),
        (150.0, TrackingRiskLevel.MEDIUM),
        (250.0, TrackingRiskLevel.HIGH),
    ])
    def test_belt_speed_bands(self, short_inputs, speed, risk):
        guidance = calculate_tracking_guidance(short_inputs, belt_speed_fpm=speed)
        assert _factor(guidance, "Belt Speed").risk == risk

    def test_warnings_only_for_crowned(self, v_guided_inputs):
        guidance = calculate_tracking_guidance(v_guided_inputs)
        assert guidance.warnings == []

    def test_crowned_high_ratio_warning(self, basic_inputs):
        guidance = calculate_tracking_guidance(basic_inputs)
        assert guidance.warnings == [
            "High length-to-width ratio (6.7:1) with crowned tracking increases mis-tracking risk."
        ]

    def test_notes_suggest_switching(self, basic_inputs):
        notes = calculate_tracking_guidance(basic_inputs).notes
        assert notes[-1].startswith("Current selection: Crowned.")

    def test_narrow_belt_note(self, basic_inputs):
        inputs = basic_inputs.model_copy(update={"conveyor_length_cc_in": 25.0, "belt_width_in": 10.0})
        notes = calculate_tracking_guidance(inputs).notes
        assert "Narrow belts may require more frequent tracking adjustment." in notes

    def test_zero_width_ratio_is_infinite(self, basic_inputs):
        advisor = TrackingAdvisor(basic_inputs.model_copy(update={"belt_width_in": 0.0}))
        assert advisor.lw_ratio == float("inf")

    def test_belt_speed_defaults_to_input(self, basic_inputs):
        assert TrackingAdvisor(basic_inputs).belt_speed_fpm == 50.0


class TestTrackingHelpers:
    def test_tooltip_high(self, basic_inputs):
        assert tracking_tooltip(basic_inputs) == "V-guided recommended due to: length-to-width ratio"

    def test_tooltip_medium(self, short_inputs):
        inputs = short_inputs.model_copy(update={"environment_factors": EnvironmentFactors.DUSTY})
        assert tracking_tooltip(inputs) == "Consider V-guided due to: environment"

    def test_tooltip_low(self, short_inputs):
        assert tracking_tooltip(short_inputs) == "Crowned tracking is suitable for this application."

    def test_crowned_short_is_optimal(self, short_inputs):
        assert is_tracking_selection_optimal(short_inputs)

    def test_crowned_long_is_not_optimal(self, basic_inputs):
        assert not is_tracking_selection_optimal(basic_inputs)

    def test_v_guided_long_is_optimal(self, v_guided_inputs):
        assert is_tracking_selection_optimal(v_guided_inputs)
