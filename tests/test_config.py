import pytest

from gravityplay import constants as C
from gravityplay.config import SimulationConfig
from gravityplay.errors import ConfigError, ValidationError
from gravityplay.physics import radius_for


def test_defaults_match_constants():
    cfg = SimulationConfig()
    assert cfg.gravitational_constant == C.G_DEFAULT
    assert cfg.opening_angle == C.THETA
    assert cfg.direct_sum_threshold == C.DIRECT_SUM_THRESHOLD
    assert cfg.max_bodies == C.MAX_BODIES
    assert cfg.softening_sq == C.SOFTENING_FACTOR_SQ


def test_timestep_is_base_times_scale():
    cfg = SimulationConfig(base_timestep=0.2, time_scale=3.0)
    assert cfg.timestep == pytest.approx(0.6)


@pytest.mark.parametrize(
    "changes",
    [
        {"base_timestep": 0.0},
        {"gravitational_constant": -1.0},
        {"opening_angle": float("nan")},
        {"max_bodies": 0},
        {"direct_sum_threshold": -1},
        {"roche_factor": 0.0},
        {"trail_length": C.MAX_TRAIL_LENGTH + 1},
    ],
)
def test_invalid_options_raise(changes):
    with pytest.raises(ConfigError):
        SimulationConfig().replace(**changes)


def test_unknown_option_raises():
    with pytest.raises(ConfigError):
        SimulationConfig().replace(warp_factor=9)


def test_config_error_is_validation_error():
    assert issubclass(ConfigError, ValidationError)


def test_dict_round_trip():
    cfg = SimulationConfig(opening_angle=0.4, seed=3)
    assert SimulationConfig.from_dict(cfg.to_dict()) == cfg


def test_radius_scaling_and_clamp():
    assert radius_for("star", 800) == pytest.approx(2.5)
    assert radius_for("planet", 320) == pytest.approx(2.4)
    assert radius_for("blackhole", 1e12) == C.MAX_RADIUS
    assert radius_for("asteroid", 1e-6) == C.MIN_RADIUS
