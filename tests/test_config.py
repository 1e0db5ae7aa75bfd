"""Unit tests for controller configuration."""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from flightcore import config
from flightcore.config import ControllerConfig
from flightcore.gnc.control.attitude import AttitudeThrottleConverter
from flightcore.propulsion.motor_model import MotorModel


class TestControllerConfig:
    """Defaults, validation and factories."""

    def test_defaults(self):
        cfg = ControllerConfig()
        assert cfg.motor_coefficients == (config.MOTOR_INTERCEPT, config.MOTOR_SLOPE)
        assert cfg.throttle_min == config.THROTTLE_MIN
        assert cfg.throttle_max == config.THROTTLE_MAX
        assert cfg.thrust_epsilon == config.THRUST_EPSILON

    def test_create_motor_model(self):
        motor = ControllerConfig(motor_coefficients=[0.0, 0.5]).create_motor_model()
        assert isinstance(motor, MotorModel)
        assert_allclose(motor(np.array([1.0, 2.0, 3.0])), [0.5, 1.0, 1.5])

    def test_no_motor_curve(self):
        """Empty coefficients mean identity throttle."""
        cfg = ControllerConfig(motor_coefficients=[])
        assert cfg.create_motor_model() is None

        setpoint = cfg.create_converter()(np.array([0.0, 0.0, 0.25]), 0.0)
        assert setpoint.throttle == pytest.approx(0.25)

    def test_create_converter(self):
        cfg = ControllerConfig(throttle_min=0.1, throttle_max=0.9)
        converter = cfg.create_converter()

        assert isinstance(converter, AttitudeThrottleConverter)
        assert converter.throttle_min == 0.1
        assert converter.throttle_max == 0.9

        # Default linear curve: 0.3 * |T|
        setpoint = converter(np.array([0.0, 0.0, 2.0]), 0.0)
        assert setpoint.throttle == pytest.approx(0.6)

    def test_from_dict(self):
        cfg = ControllerConfig.from_dict({"throttle_max": 0.8, "motor_coefficients": [0.1, 0.2]})
        assert cfg.throttle_max == 0.8
        assert cfg.motor_coefficients == (0.1, 0.2)

    def test_from_dict_unknown_key(self):
        with pytest.raises(ValueError, match="Unknown config keys"):
            ControllerConfig.from_dict({"throttle_maximum": 0.8})

    def test_inverted_throttle_bounds(self):
        with pytest.raises(ValueError, match="must not exceed"):
            ControllerConfig(throttle_min=0.8, throttle_max=0.2)

    def test_negative_epsilon(self):
        with pytest.raises(ValueError, match="thrust_epsilon"):
            ControllerConfig(thrust_epsilon=-1.0)

    def test_integer_motor_coefficients(self):
        for _ in range(20):
            cfg = ControllerConfig(motor_coefficients=[0, 1])
            assert cfg.motor_coefficients == (0.0, 1.0)
            assert cfg.create_motor_model().throttle(0.4) == pytest.approx(0.4)
