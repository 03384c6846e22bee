"""
Tests for von Mises pulley shaft sizing.
"""

import math

import pytest
from pydantic import ValidationError

from conveyorcalc.models.inputs import ShaftSizingInputs
from conveyorcalc.physics.shaft import (
    STANDARD_SHAFT_DIAMETERS,
    calculate_shaft_diameter,
    get_next_standard_diameter,
    is_standard_diameter,
    shaft_sizing_from_outputs,
)


def _inputs(**overrides) -> ShaftSizingInputs:
    values = dict(belt_width_in=18.0, pulley_diameter_in=4.0, effective_tension_lbf=100.0, is_drive_pulley=True)
    values.update(overrides)
    return ShaftSizingInputs(**values)


class TestStandardDiameters:
    """Tests for the standard diameter ladder."""

    @pytest.mark.parametrize("raw,expected", [
        (0.3, 0.5),
        (0.5, 0.5),
        (0.51, 0.625),
        (1.1985, 1.25),
        (1.76, 1.875),
        (2.9, 3.0),
    ])
    def test_rounds_up_to_ladder(self, raw, expected):
        assert get_next_standard_diameter(raw) == expected

    def test_rounds_to_quarter_above_ladder(self):
        assert get_next_standard_diameter(3.1) == 3.25
        assert get_next_standard_diameter(3.5) == 3.5

    def test_is_standard(self):
        assert is_standard_diameter(1.375)
        assert not is_standard_diameter(1.3)

    def test_ladder_is_sorted(self):
        assert STANDARD_SHAFT_DIAMETERS == sorted(STANDARD_SHAFT_DIAMETERS)


class TestDriveShaft:
    """Tests for a keyed drive shaft."""

    def test_required_diameter(self):
        # Te = 120 lbf after service factor; d_calc ~ 1.199 in
        result = calculate_shaft_diameter(_inputs())
        assert result.calculated_diameter_in == pytest.approx(1.199, abs=0.002)
        assert result.required_diameter_in == 1.25

    def test_tension_split(self):
        result = calculate_shaft_diameter(_inputs())
        # T1 - T2 = Te and T1 / T2 = e^(mu * theta)
        assert result.T1_lbf - result.T2_lbf == pytest.approx(120.0, abs=0.15)
        assert result.T1_lbf / result.T2_lbf == pytest.approx(math.exp(0.3 * math.pi), rel=0.002)

    def test_radial_load_at_180_wrap(self):
        result = calculate_shaft_diameter(_inputs())
        assert result.radial_load_lbf == pytest.approx(result.T1_lbf + result.T2_lbf, abs=0.15)

    def test_moment_and_torque(self):
        result = calculate_shaft_diameter(_inputs())
        assert result.bearing_span_in == 23.0
        assert result.bending_moment_inlbf == pytest.approx(result.radial_load_lbf * 23.0 / 4, abs=1.0)
        assert result.torque_inlbf == pytest.approx(240.0)

    def test_reported_precision(self):
        result = calculate_shaft_diameter(_inputs())
        assert float(result.von_mises_stress_psi).is_integer()
        assert result.calculated_diameter_in == round(result.calculated_diameter_in, 3)
        assert result.deflection_in == round(result.deflection_in, 4)

    def test_stress_evaluated_at_standard_diameter(self):
        result = calculate_shaft_diameter(_inputs())
        d = result.required_diameter_in
        sigma_b = 32 * result.bending_moment_inlbf * 1.6 / (math.pi * d ** 3)
        tau = 16 * result.torque_inlbf / (math.pi * d ** 3)
        assert result.von_mises_stress_psi == pytest.approx(math.sqrt(sigma_b ** 2 + 3 * tau ** 2), abs=5)

    def test_deflection_ok_for_light_load(self):
        assert calculate_shaft_diameter(_inputs()).deflection_ok

    def test_larger_tension_needs_larger_shaft(self):
        light = calculate_shaft_diameter(_inputs(effective_tension_lbf=100.0))
        heavy = calculate_shaft_diameter(_inputs(effective_tension_lbf=1000.0))
        assert heavy.required_diameter_in > light.required_diameter_in


class TestIdlerShaft:
    """Tests for an unkeyed tail shaft."""

    def test_no_torque(self):
        result = calculate_shaft_diameter(_inputs(is_drive_pulley=False))
        assert result.torque_inlbf == 0.0

    def test_smaller_than_drive(self):
        # d_calc ~ 1.022 in without keyway or torque
        result = calculate_shaft_diameter(_inputs(is_drive_pulley=False))
        assert result.calculated_diameter_in == pytest.approx(1.022, abs=0.002)
        assert result.required_diameter_in == 1.125


class TestTensionSweep:
    """Required diameters across a range of belt tensions."""

    @pytest.mark.parametrize("is_drive", [True, False])
    @pytest.mark.parametrize("tension", [1.0, 10.0, 50.0, 100.0, 250.0, 500.0, 1000.0, 2500.0, 5000.0, 20000.0])
    def test_required_is_standard_or_quarter_step(self, tension, is_drive):
        result = calculate_shaft_diameter(_inputs(effective_tension_lbf=tension, is_drive_pulley=is_drive))
        d = result.required_diameter_in
        if d <= STANDARD_SHAFT_DIAMETERS[-1]:
            assert is_standard_diameter(d)
        else:
            assert d / 0.25 == pytest.approx(round(d / 0.25))
        # calculated diameter is reported to 3 decimals
        assert d >= result.calculated_diameter_in - 0.0005

    def test_required_never_decreases_with_tension(self):
        tensions = [50.0, 100.0, 250.0, 500.0, 1000.0, 2500.0, 5000.0, 20000.0]
        diameters = [calculate_shaft_diameter(_inputs(effective_tension_lbf=t)).required_diameter_in for t in tensions]
        assert diameters == sorted(diameters)
        assert diameters[-1] > STANDARD_SHAFT_DIAMETERS[-1]


class TestMinimalResult:
    """Tests for zero and negative tension."""

    @pytest.mark.parametrize("tension", [0.0, -50.0])
    def test_minimal_shaft(self, tension):
        result = calculate_shaft_diameter(_inputs(effective_tension_lbf=tension))
        assert result.required_diameter_in == 0.5
        assert result.calculated_diameter_in == 0.5
        assert result.T1_lbf == 0.0
        assert result.radial_load_lbf == 0.0
        assert result.von_mises_stress_psi == 0.0
        assert result.deflection_ok


class TestOverrides:
    """Tests for optional inputs."""

    def test_bearing_span_override(self):
        result = calculate_shaft_diameter(_inputs(bearing_span_in=30.0))
        assert result.bearing_span_in == 30.0

    def test_wrap_angle_reported(self):
        result = calculate_shaft_diameter(_inputs(wrap_angle_deg=210.0))
        assert result.wrap_angle_deg == 210.0

    def test_wrap_angle_range_enforced(self):
        with pytest.raises(ValidationError):
            _inputs(wrap_angle_deg=400.0)

    def test_from_outputs_matches_direct_call(self):
        direct = calculate_shaft_diameter(_inputs(effective_tension_lbf=96.8))
        via = shaft_sizing_from_outputs(18.0, 4.0, 96.8, is_drive_pulley=True)
        assert via == direct
