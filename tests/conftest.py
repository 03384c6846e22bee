"""
Pytest configuration and shared fixtures.
"""

import pytest

from conveyorcalc.gearmotor.loader import load_catalog
from conveyorcalc.gearmotor.models import GearmotorCatalog
from conveyorcalc.models.inputs import (
    BedType,
    BeltTrackingMethod,
    ConveyorInputs,
    SpeedMode,
    example_inputs,
)


@pytest.fixture
def basic_inputs() -> ConveyorInputs:
    """A 10 ft slider bed conveyor with 5 lb parts at 50 fpm."""
    return example_inputs()


@pytest.fixture
def minimal_inputs() -> ConveyorInputs:
    """Only the required fields; everything else defaulted."""
    return ConveyorInputs(
        conveyor_length_cc_in=120.0,
        belt_width_in=24.0,
        belt_speed_fpm=50.0,
    )


@pytest.fixture
def roller_inputs(basic_inputs) -> ConveyorInputs:
    """Same conveyor on a roller bed."""
    return basic_inputs.model_copy(update={"bed_type": BedType.ROLLER_BED})


@pytest.fixture
def v_guided_inputs(basic_inputs) -> ConveyorInputs:
    """Same conveyor with a K10 V-guide."""
    return basic_inputs.model_copy(
        update={"belt_tracking_method": BeltTrackingMethod.V_GUIDED, "v_guide_profile": "K10"}
    )


@pytest.fixture
def legacy_dict() -> dict:
    """A configuration saved before split pulleys and speed modes existed."""
    return {
        "conveyor_length_cc_in": 120.0,
        "conveyor_width_in": 18.0,
        "pulley_diameter_in": 4.0,
        "drive_rpm": 47.75,
        "part_weight_lbs": 5.0,
        "part_length_in": 12.0,
        "part_width_in": 8.0,
        "part_spacing_in": 6.0,
    }


@pytest.fixture
def drive_rpm_inputs() -> ConveyorInputs:
    return ConveyorInputs(
        conveyor_length_cc_in=120.0,
        belt_width_in=18.0,
        drive_pulley_diameter_in=4.0,
        speed_mode=SpeedMode.DRIVE_RPM,
        drive_rpm=60.0,
    )


@pytest.fixture(scope="session")
def catalog() -> GearmotorCatalog:
    """The packaged NORD catalog."""
    return load_catalog()
