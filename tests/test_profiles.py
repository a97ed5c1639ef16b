import pytest

from ridepath.profiles import KINEMATICS_PRESETS, KinematicsParams, RideProfile


def test_only_rollercoaster_available():
    assert RideProfile.available() == [RideProfile.ROLLERCOASTER]


@pytest.mark.parametrize("label", ["Rollercoaster", "rollercoaster", "ROLLERCOASTER", " Rollercoaster "])
def test_from_label(label):
    assert RideProfile.from_label(label) is RideProfile.ROLLERCOASTER


def test_from_label_disabled_profiles_resolve():
    assert RideProfile.from_label("Flight Path") is RideProfile.FLIGHT_PATH
    assert RideProfile.from_label("road_racing") is RideProfile.ROAD_RACING


def test_from_label_unknown():
    with pytest.raises(ValueError, match="Unknown ride profile"):
        RideProfile.from_label("Hang Glider")


@pytest.mark.parametrize("profile", [RideProfile.FLIGHT_PATH, RideProfile.ROAD_RACING])
def test_disabled_profiles_have_no_kinematics(profile):
    assert not profile.enabled
    with pytest.raises(ValueError, match="not available"):
        profile.kinematics


def test_rollercoaster_constants():
    params = RideProfile.ROLLERCOASTER.kinematics
    assert params.slerp_factor == 0.02
    assert params.bank_coefficient == -0.1
    assert params.pitch_coefficient == 0.05
    assert params.min_direction == 0.01


@pytest.mark.parametrize("slerp", [0.0, -0.1, 1.5])
def test_invalid_slerp_factor(slerp):
    with pytest.raises(ValueError):
        KinematicsParams(slerp_factor=slerp)


def test_with_overrides():
    params = KINEMATICS_PRESETS["default"].with_overrides(slerp_factor=0.2)
    assert params.slerp_factor == 0.2
    assert params.bank_coefficient == -0.1
    assert KINEMATICS_PRESETS["default"].slerp_factor == 0.02
