"""
Tests for physics calculations.

Tests belt, drive, geometry and unit helpers.
"""

import math

import pytest

from conveyorcalc.models.inputs import (
    CalculationParameters,
    DEFAULT_PARAMETERS,
    FrameHeightMode,
    GearmotorMountingStyle,
    Orientation,
)
from conveyorcalc.physics.belt import (
    calculate_avg_load_per_ft,
    calculate_belt_weight,
    calculate_friction_pull,
    calculate_incline_pull,
    calculate_load_on_belt,
    calculate_parts_on_belt,
    calculate_pitch,
    calculate_total_belt_length,
    calculate_total_belt_pull,
    default_belt_coefficients,
    part_travel_dimension,
    resolve_belt_coefficients,
)
from conveyorcalc.physics.drive import (
    belt_speed_from_drive_rpm,
    calculate_chain_ratio,
    calculate_drive_torque,
    calculate_gear_ratio,
    calculate_throughput,
    drive_rpm_from_belt_speed,
)
from conveyorcalc.physics.geometry import (
    calculate_frame_height,
    calculate_gravity_roller_quantity,
    calculate_pulley_face,
    calculate_roller_layout,
    check_minimum_pulley,
)
from conveyorcalc.physics.units import inches_to_feet, round_half_up, to_metric


class TestBeltCoefficients:
    """Tests for PIW/PIL resolution."""

    def test_reference_pulley_uses_2p5_table(self):
        assert default_belt_coefficients(2.5, DEFAULT_PARAMETERS) == (0.138, 0.138)

    def test_other_pulley_uses_general_table(self):
        assert default_belt_coefficients(4.0, DEFAULT_PARAMETERS) == (0.109, 0.109)

    def test_override_beats_catalog_and_advanced(self):
        coeffs = resolve_belt_coefficients(
            4.0, DEFAULT_PARAMETERS, piw_override=0.2, catalog_piw=0.15, advanced_piw=0.12
        )
        assert coeffs.piw == 0.2
        assert coeffs.belt_piw_effective == 0.2

    def test_catalog_beats_advanced(self):
        coeffs = resolve_belt_coefficients(4.0, DEFAULT_PARAMETERS, catalog_pil=0.15, advanced_pil=0.12)
        assert coeffs.pil == 0.15

    def test_advanced_beats_defaults(self):
        coeffs = resolve_belt_coefficients(4.0, DEFAULT_PARAMETERS, advanced_piw=0.12)
        assert coeffs.piw == 0.12
        assert coeffs.pil == 0.109

    def test_effective_falls_back_to_used(self):
        coeffs = resolve_belt_coefficients(4.0, DEFAULT_PARAMETERS)
        assert coeffs.belt_piw_effective == coeffs.piw
        assert coeffs.belt_pil_effective == coeffs.pil


class TestBeltLoad:
    """Tests for belt length, weight and load."""

    def test_belt_length_uses_half_wrap_per_pulley(self):
        # 2 * 120 + pi * (4 + 4) / 2
        assert calculate_total_belt_length(120.0, 4.0, 4.0) == pytest.approx(240.0 + 4 * math.pi)

    def test_belt_length_split_pulleys(self):
        assert calculate_total_belt_length(100.0, 6.0, 4.0) == pytest.approx(200.0 + 5 * math.pi)

    def test_belt_weight(self):
        assert calculate_belt_weight(0.1, 0.2, 10.0, 100.0) == pytest.approx(20.0)

    def test_travel_dimension_follows_orientation(self):
        assert part_travel_dimension(Orientation.LENGTHWISE, 12.0, 8.0) == 12.0
        assert part_travel_dimension(Orientation.CROSSWISE, 12.0, 8.0) == 8.0

    def test_pitch_without_part_is_zero(self):
        assert calculate_pitch(None, 6.0) == 0.0

    def test_parts_on_belt(self):
        assert calculate_parts_on_belt(120.0, 18.0) == pytest.approx(120.0 / 18.0)

    def test_parts_on_belt_zero_pitch(self):
        assert calculate_parts_on_belt(120.0, 0.0) == 0.0

    def test_load_without_weight_is_zero(self):
        assert calculate_load_on_belt(5.0, None) == 0.0

    def test_avg_load_per_ft(self):
        assert calculate_avg_load_per_ft(100.0, 120.0) == pytest.approx(10.0)


class TestBeltPull:
    """Tests for pull components."""

    def test_friction_pull(self):
        assert calculate_friction_pull(0.25, 100.0) == pytest.approx(25.0)

    def test_flat_conveyor_has_no_incline_pull(self):
        assert calculate_incline_pull(100.0, 0.0) == 0.0

    def test_incline_pull_at_30_degrees(self):
        assert calculate_incline_pull(100.0, 30.0) == pytest.approx(50.0)

    def test_total_pull_is_sum(self):
        assert calculate_total_belt_pull(25.0, 10.0, 75.0) == pytest.approx(110.0)


class TestDrive:
    """Tests for speed, torque and ratios."""

    def test_rpm_and_speed_are_inverse(self):
        rpm = drive_rpm_from_belt_speed(50.0, 4.0)
        assert belt_speed_from_drive_rpm(rpm, 4.0) == pytest.approx(50.0)

    def test_drive_rpm_for_4in_pulley(self):
        # 50 / (pi * 4 / 12)
        assert drive_rpm_from_belt_speed(50.0, 4.0) == pytest.approx(47.746, abs=0.001)

    def test_drive_torque(self):
        # 100 lb * 2 in * 2.0
        assert calculate_drive_torque(100.0, 4.0, 2.0) == pytest.approx(400.0)

    def test_gear_ratio(self):
        assert calculate_gear_ratio(1750.0, 50.0) == pytest.approx(35.0)

    def test_gear_ratio_stopped_drive(self):
        assert calculate_gear_ratio(1750.0, 0.0) == 0.0

    def test_chain_ratio_shaft_mounted(self):
        assert calculate_chain_ratio(GearmotorMountingStyle.SHAFT_MOUNTED, 24, 18) == 1.0

    def test_chain_ratio_bottom_mount(self):
        assert calculate_chain_ratio(GearmotorMountingStyle.BOTTOM_MOUNT, 24, 18) == pytest.approx(24 / 18)

    def test_chain_ratio_bottom_mount_without_sprocket(self):
        assert calculate_chain_ratio(GearmotorMountingStyle.BOTTOM_MOUNT, 24, 0) == 1.0


class TestThroughput:
    """Tests for parts-per-hour metrics."""

    def test_capacity(self):
        # 50 fpm * 720 / 18 in pitch
        metrics = calculate_throughput(50.0, 18.0, 4.0)
        assert metrics.capacity_pph == pytest.approx(2000.0)
        assert metrics.target_pph is None
        assert metrics.meets_throughput is None

    def test_target_with_margin(self):
        metrics = calculate_throughput(50.0, 18.0, 4.0, required_throughput_pph=1500.0, throughput_margin_pct=10.0)
        assert metrics.target_pph == pytest.approx(1650.0)
        assert metrics.meets_throughput is True
        assert metrics.throughput_margin_achieved_pct == pytest.approx(100 * (2000.0 / 1500.0 - 1))

    def test_rpm_required_for_target(self):
        metrics = calculate_throughput(50.0, 18.0, 4.0, required_throughput_pph=2000.0)
        # Exactly the current speed meets 2000 pph
        assert metrics.rpm_required_for_target == pytest.approx(drive_rpm_from_belt_speed(50.0, 4.0))

    def test_short_capacity(self):
        metrics = calculate_throughput(50.0, 18.0, 4.0, required_throughput_pph=2500.0)
        assert metrics.meets_throughput is False

    def test_zero_pitch(self):
        assert calculate_throughput(50.0, 0.0, 4.0).capacity_pph == 0.0


class TestGeometry:
    """Tests for frame, face and roller geometry."""

    def test_crowned_pulley_face(self):
        face = calculate_pulley_face(18.0, False, DEFAULT_PARAMETERS)
        assert face.requires_crown
        assert face.face_length_in == pytest.approx(20.0)

    def test_v_guided_pulley_face(self):
        face = calculate_pulley_face(18.0, True, DEFAULT_PARAMETERS)
        assert not face.requires_crown
        assert face.face_length_in == pytest.approx(18.5)

    def test_face_extra_from_parameters(self):
        params = CalculationParameters(pulley_face_extra_crowned_in=3.0)
        assert calculate_pulley_face(18.0, False, params).face_extra_in == 3.0

    def test_standard_frame_needs_no_snubs(self):
        frame = calculate_frame_height(FrameHeightMode.STANDARD, 4.0, 4.0)
        assert frame.effective_frame_height_in == pytest.approx(6.5)
        assert not frame.requires_snub_rollers
        assert not frame.cost_flag_design_review

    def test_low_profile_needs_snubs(self):
        frame = calculate_frame_height(FrameHeightMode.LOW_PROFILE, 4.0, 4.0)
        assert frame.effective_frame_height_in == pytest.approx(4.5)
        assert frame.requires_snub_rollers
        assert frame.cost_flag_low_profile
        assert frame.cost_flag_snub_rollers

    def test_larger_tail_triggers_snubs_on_standard_frame(self):
        frame = calculate_frame_height(FrameHeightMode.STANDARD, 4.0, 6.0)
        assert frame.requires_snub_rollers

    def test_custom_frame_design_review(self):
        frame = calculate_frame_height(FrameHeightMode.CUSTOM, 2.5, 2.5, custom_frame_height_in=3.0)
        assert frame.effective_frame_height_in == 3.0
        assert frame.cost_flag_custom_frame
        assert frame.cost_flag_design_review

    def test_gravity_rollers_without_snubs(self):
        # floor(120 / 60) + 1
        assert calculate_gravity_roller_quantity(120.0, False) == 3

    def test_gravity_rollers_minimum_two(self):
        assert calculate_gravity_roller_quantity(30.0, False) == 2

    def test_snubs_take_end_positions(self):
        assert calculate_gravity_roller_quantity(120.0, True) == 1

    def test_roller_layout(self):
        layout = calculate_roller_layout(240.0, True)
        assert layout.snub_roller_quantity == 2
        assert layout.gravity_roller_quantity == 3
        assert layout.gravity_roller_spacing_in == 60.0

    def test_minimum_pulley_without_belt_data(self):
        check = check_minimum_pulley(False, 4.0, 4.0)
        assert check.min_pulley_required_in is None
        assert check.drive_meets_minimum is None

    def test_minimum_pulley_uses_tracking_method(self):
        check = check_minimum_pulley(True, 4.0, 3.0, min_dia_no_vguide_in=2.0, min_dia_with_vguide_in=3.5)
        assert check.min_pulley_required_in == 3.5
        assert check.drive_meets_minimum is True
        assert check.tail_meets_minimum is False


class TestUnits:
    """Tests for unit helpers."""

    def test_inches_to_feet(self):
        assert inches_to_feet(18.0) == pytest.approx(1.5)

    def test_round_half_up(self):
        assert round_half_up(12.25, 1) == pytest.approx(12.3)
        assert round_half_up(2.5) == 3.0

    def test_to_metric(self):
        assert to_metric(1.25, "inch", "mm") == pytest.approx(31.75)
        assert to_metric(100.0, "lbf", "N") == pytest.approx(444.822, rel=1e-4)
