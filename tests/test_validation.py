"""
Tests for input, parameter and application rule validation.
"""

import pytest

from conveyorcalc.models.inputs import (
    BeltTrackingMethod,
    CalculationParameters,
    DEFAULT_PARAMETERS,
    EndGuards,
    FluidType,
    FrameHeightMode,
    LacingStyle,
    PartTemperatureClass,
    ShaftDiameterMode,
    SideLoadingDirection,
    SideLoadingSeverity,
    SpeedMode,
)
from conveyorcalc.models.outputs import ValidationSeverity
from conveyorcalc.rules.validation import (
    apply_application_rules,
    validate,
    validate_inputs,
    validate_parameters,
)


def _fields(messages):
    return [m.field for m in messages]


def _texts(messages):
    return [m.message for m in messages]


class TestValidateInputs:
    """Range and presence checks."""

    def test_example_is_clean(self, basic_inputs):
        assert validate_inputs(basic_inputs) == []

    def test_zero_length(self, basic_inputs):
        errors = validate_inputs(basic_inputs.model_copy(update={"conveyor_length_cc_in": 0.0}))
        assert "conveyor_length_cc_in" in _fields(errors)

    def test_negative_incline(self, basic_inputs):
        errors = validate_inputs(basic_inputs.model_copy(update={"conveyor_incline_deg": -1.0}))
        assert "conveyor_incline_deg" in _fields(errors)

    def test_zero_tail_pulley(self, basic_inputs):
        errors = validate_inputs(basic_inputs.model_copy(update={"tail_pulley_diameter_in": 0.0}))
        assert "tail_pulley_diameter_in" in _fields(errors)

    def test_drive_rpm_mode_requires_rpm(self, basic_inputs):
        inputs = basic_inputs.model_copy(update={"speed_mode": SpeedMode.DRIVE_RPM, "drive_rpm": None})
        assert "drive_rpm" in _fields(validate_inputs(inputs))

    def test_drive_rpm_mode_ignores_belt_speed(self, drive_rpm_inputs):
        assert validate_inputs(drive_rpm_inputs) == []

    def test_nonpositive_part_weight(self, basic_inputs):
        errors = validate_inputs(basic_inputs.model_copy(update={"part_weight_lbs": 0.0}))
        assert "part_weight_lbs" in _fields(errors)

    def test_safety_factor_range(self, basic_inputs):
        low = validate_inputs(basic_inputs.model_copy(update={"safety_factor": 0.5}))
        high = validate_inputs(basic_inputs.model_copy(update={"safety_factor": 6.0}))
        assert _texts(low) == ["Safety factor must be >= 1.0"]
        assert _texts(high) == ["Safety factor must be <= 5.0"]

    def test_piw_out_of_band(self, basic_inputs):
        errors = validate_inputs(basic_inputs.model_copy(update={"belt_coeff_piw": 0.5}))
        assert _texts(errors) == ["PIW should be between 0.05 and 0.30 lb/in"]

    def test_motor_rpm_range(self, basic_inputs):
        errors = validate_inputs(basic_inputs.model_copy(update={"motor_rpm": 500.0}))
        assert "motor_rpm" in _fields(errors)

    def test_friction_override_range(self, basic_inputs):
        errors = validate_inputs(basic_inputs.model_copy(update={"friction_coeff": 0.8}))
        assert _texts(errors) == ["Friction coefficient must be <= 0.6"]

    def test_v_guide_requires_profile(self, basic_inputs):
        inputs = basic_inputs.model_copy(update={"belt_tracking_method": BeltTrackingMethod.V_GUIDED})
        assert "v_guide_profile" in _fields(validate_inputs(inputs))

    def test_v_guide_with_profile(self, v_guided_inputs):
        assert validate_inputs(v_guided_inputs) == []

    def test_manual_shafts_require_diameters(self, basic_inputs):
        inputs = basic_inputs.model_copy(update={"shaft_diameter_mode": ShaftDiameterMode.MANUAL})
        fields = _fields(validate_inputs(inputs))
        assert "drive_shaft_diameter_in" in fields
        assert "tail_shaft_diameter_in" in fields

    def test_shaft_diameter_upper_bound(self, basic_inputs):
        inputs = basic_inputs.model_copy(update={
            "shaft_diameter_mode": ShaftDiameterMode.MANUAL,
            "drive_shaft_diameter_in": 5.0,
            "tail_shaft_diameter_in": 1.0,
        })
        assert _fields(validate_inputs(inputs)) == ["drive_shaft_diameter_in"]

    def test_custom_frame_requires_height(self, basic_inputs):
        inputs = basic_inputs.model_copy(update={"frame_height_mode": FrameHeightMode.CUSTOM})
        assert "custom_frame_height_in" in _fields(validate_inputs(inputs))

    def test_custom_frame_with_height(self, basic_inputs):
        inputs = basic_inputs.model_copy(update={
            "frame_height_mode": FrameHeightMode.CUSTOM,
            "custom_frame_height_in": 5.0,
        })
        assert validate_inputs(inputs) == []

    def test_all_errors_are_errors(self, basic_inputs):
        inputs = basic_inputs.model_copy(update={"conveyor_length_cc_in": -1.0, "belt_width_in": 0.0})
        assert all(m.severity == ValidationSeverity.ERROR for m in validate_inputs(inputs))


class TestValidateParameters:
    def test_defaults_are_clean(self):
        assert validate_parameters(DEFAULT_PARAMETERS) == []

    def test_bad_friction(self):
        errors = validate_parameters(CalculationParameters(friction_coeff=0.05))
        assert _fields(errors) == ["friction_coeff"]

    def test_zero_motor_rpm(self):
        errors = validate_parameters(CalculationParameters(motor_rpm=0.0))
        assert _fields(errors) == ["motor_rpm"]


class TestApplicationRules:
    """Application fit errors, warnings and info notices."""

    def test_red_hot_is_error(self, basic_inputs):
        inputs = basic_inputs.model_copy(update={"part_temperature_class": PartTemperatureClass.RED_HOT})
        errors, _ = apply_application_rules(inputs)
        assert _texts(errors) == ["Do not use belt conveyor for red hot parts"]

    def test_hot_is_warning(self, basic_inputs):
        inputs = basic_inputs.model_copy(update={"part_temperature_class": PartTemperatureClass.HOT})
        errors, warnings = apply_application_rules(inputs)
        assert errors == []
        assert "Consider high-temperature belt" in _texts(warnings)

    def test_considerable_oil_warning(self, basic_inputs):
        inputs = basic_inputs.model_copy(update={"fluid_type": FluidType.CONSIDERABLE_OIL_LIQUID})
        _, warnings = apply_application_rules(inputs)
        assert "Consider ribbed or specialty belt" in _texts(warnings)

    def test_minimal_oil_is_info(self, basic_inputs):
        inputs = basic_inputs.model_copy(update={"fluid_type": FluidType.MINIMAL_RESIDUAL_OIL})
        _, warnings = apply_application_rules(inputs)
        assert warnings[0].severity == ValidationSeverity.INFO

    def test_long_conveyor_warning(self, basic_inputs):
        _, warnings = apply_application_rules(basic_inputs.model_copy(update={"conveyor_length_cc_in": 121.0}))
        assert "Consider multi-section body" in _texts(warnings)

    def test_length_at_threshold_is_quiet(self, basic_inputs):
        _, warnings = apply_application_rules(basic_inputs)
        assert warnings == []

    def test_high_drop_warning(self, basic_inputs):
        _, warnings = apply_application_rules(basic_inputs.model_copy(update={"drop_height_in": 24.0}))
        assert _fields(warnings) == ["drop_height_in"]

    @pytest.mark.parametrize("angle,prefix", [
        (25.0, "Incline exceeds 20°"),
        (40.0, "Incline exceeds 35°"),
    ])
    def test_incline_warning_bands(self, basic_inputs, angle, prefix):
        errors, warnings = apply_application_rules(basic_inputs.model_copy(update={"conveyor_incline_deg": angle}))
        assert errors == []
        incline = [m for m in warnings if m.field == "conveyor_incline_deg"]
        assert len(incline) == 1
        assert incline[0].message.startswith(prefix)

    def test_incline_at_20_is_quiet(self, basic_inputs):
        _, warnings = apply_application_rules(basic_inputs.model_copy(update={"conveyor_incline_deg": 20.0}))
        assert warnings == []

    def test_incline_above_45_is_error(self, basic_inputs):
        errors, warnings = apply_application_rules(basic_inputs.model_copy(update={"conveyor_incline_deg": 50.0}))
        assert _fields(errors) == ["conveyor_incline_deg"]
        assert "conveyor_incline_deg" not in _fields(warnings)

    def test_finger_safe_warnings(self, basic_inputs):
        _, warnings = apply_application_rules(basic_inputs.model_copy(update={"finger_safe": True}))
        assert _fields(warnings) == ["end_guards", "bottom_covers"]

    def test_finger_safe_satisfied(self, basic_inputs):
        inputs = basic_inputs.model_copy(update={
            "finger_safe": True,
            "end_guards": EndGuards.BOTH_ENDS,
            "bottom_covers": True,
        })
        _, warnings = apply_application_rules(inputs)
        assert warnings == []

    def test_clipper_lacing_warning(self, basic_inputs):
        _, warnings = apply_application_rules(basic_inputs.model_copy(update={"lacing_style": LacingStyle.CLIPPER_LACING}))
        assert _fields(warnings) == ["lacing_style"]

    def test_short_cycle_warning(self, basic_inputs):
        inputs = basic_inputs.model_copy(update={"start_stop_application": True, "cycle_time_seconds": 5.0})
        _, warnings = apply_application_rules(inputs)
        assert _fields(warnings) == ["cycle_time_seconds"]


class TestMinimumPulley:
    """Belt minimum pulley diameter checks on drive and tail."""

    def test_both_pulleys_below_minimum(self, basic_inputs):
        inputs = basic_inputs.model_copy(update={"belt_min_pulley_dia_no_vguide_in": 5.0})
        errors, _ = apply_application_rules(inputs)
        assert _fields(errors) == ["pulley_diameter_in", "tail_pulley_diameter_in"]
        assert "crowned tracking" in errors[0].message

    def test_only_tail_below_minimum(self, basic_inputs):
        inputs = basic_inputs.model_copy(update={
            "drive_pulley_diameter_in": 6.0,
            "tail_pulley_diameter_in": 3.0,
            "belt_min_pulley_dia_no_vguide_in": 4.0,
        })
        errors, _ = apply_application_rules(inputs)
        assert _fields(errors) == ["tail_pulley_diameter_in"]

    def test_v_guided_uses_v_guide_minimum(self, v_guided_inputs):
        inputs = v_guided_inputs.model_copy(update={
            "belt_min_pulley_dia_no_vguide_in": 3.0,
            "belt_min_pulley_dia_with_vguide_in": 5.0,
        })
        errors, _ = apply_application_rules(inputs)
        assert len(errors) == 2
        assert "V-guided tracking" in errors[0].message

    def test_no_belt_data_no_check(self, basic_inputs):
        errors, _ = apply_application_rules(basic_inputs)
        assert errors == []


class TestSideLoading:
    """Side loading never blocks; it warns without a V-guide."""

    @pytest.mark.parametrize("severity,word", [
        (SideLoadingSeverity.MODERATE, "Moderate"),
        (SideLoadingSeverity.HEAVY, "Heavy"),
    ])
    def test_warns_without_v_guide(self, basic_inputs, severity, word):
        inputs = basic_inputs.model_copy(update={
            "side_loading_direction": SideLoadingDirection.LEFT,
            "side_loading_severity": severity,
        })
        errors, warnings = apply_application_rules(inputs)
        assert errors == []
        assert warnings[0].message.startswith(word)

    def test_light_is_quiet(self, basic_inputs):
        inputs = basic_inputs.model_copy(update={"side_loading_direction": SideLoadingDirection.BOTH})
        _, warnings = apply_application_rules(inputs)
        assert warnings == []

    def test_v_guide_silences_warning(self, v_guided_inputs):
        inputs = v_guided_inputs.model_copy(update={
            "side_loading_direction": SideLoadingDirection.RIGHT,
            "side_loading_severity": SideLoadingSeverity.HEAVY,
        })
        _, warnings = apply_application_rules(inputs)
        assert "side_loading_severity" not in _fields(warnings)


class TestPremiumNotices:
    def test_v_guide_adds_info(self, v_guided_inputs):
        _, warnings = apply_application_rules(v_guided_inputs)
        assert [(m.field, m.severity, m.message) for m in warnings] == [
            ("premium", ValidationSeverity.INFO, "Premium feature: V-guided belt tracking"),
        ]


class TestValidate:
    def test_combines_layers(self, basic_inputs):
        inputs = basic_inputs.model_copy(update={
            "belt_width_in": 0.0,
            "part_temperature_class": PartTemperatureClass.RED_HOT,
        })
        errors, _ = validate(inputs, CalculationParameters(motor_rpm=0.0))
        assert _fields(errors) == ["belt_width_in", "motor_rpm", "part_temperature_class"]

    def test_example_passes(self, basic_inputs):
        errors, warnings = validate(basic_inputs, DEFAULT_PARAMETERS)
        assert errors == []
        assert warnings == []
