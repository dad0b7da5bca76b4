"""
Unit Tests for Transmissions
============================

Tests for the simple, differential and four-bar linkage transmissions:
worked values, forward/inverse consistency, in-place conversions,
parameter validation and arity checks.

Author: Robot HW Interfaces Team
License: MIT
"""

import numpy as np
import pytest

from src.hardware_interface.storage import Quantity, StorageArena
from src.transmission_interface.differential_transmission import DifferentialTransmission
from src.transmission_interface.exceptions import (
    ContractViolation,
    TransmissionConfigError,
    TransmissionException,
)
from src.transmission_interface.four_bar_linkage_transmission import FourBarLinkageTransmission
from src.transmission_interface.simple_transmission import SimpleTransmission

CONVERSIONS = [
    "actuator_to_joint_effort",
    "actuator_to_joint_velocity",
    "actuator_to_joint_position",
    "joint_to_actuator_effort",
    "joint_to_actuator_velocity",
    "joint_to_actuator_position",
]


def random_ratios(rng, size):
    """Non-zero ratios of both signs, bounded away from zero."""
    return rng.uniform(0.1, 100.0, size) * rng.choice([-1.0, 1.0], size)


def round_trip(trans, quantity, actuator_values):
    """Map actuator values to joint space and back."""
    joint = np.zeros(trans.num_joints())
    back = np.zeros(trans.num_actuators())
    getattr(trans, f"actuator_to_joint_{quantity}")(actuator_values, joint)
    getattr(trans, f"joint_to_actuator_{quantity}")(joint, back)
    return joint, back


# =============================================================================
# Simple Transmission Tests
# =============================================================================


class TestSimpleTransmission:
    """Tests for SimpleTransmission."""

    def test_worked_values(self):
        """Test the three state-direction maps."""
        trans = SimpleTransmission(reduction=10.0, joint_offset=0.5)
        out = np.zeros(1)

        trans.actuator_to_joint_effort(np.array([2.0]), out)
        assert out[0] == pytest.approx(20.0)

        trans.actuator_to_joint_velocity(np.array([20.0]), out)
        assert out[0] == pytest.approx(2.0)

        trans.actuator_to_joint_position(np.array([20.0]), out)
        assert out[0] == pytest.approx(2.5)

    def test_command_direction(self):
        """Test the three command-direction maps."""
        trans = SimpleTransmission(reduction=-4.0, joint_offset=1.0)
        out = np.zeros(1)

        trans.joint_to_actuator_effort(np.array([8.0]), out)
        assert out[0] == pytest.approx(-2.0)

        trans.joint_to_actuator_velocity(np.array([0.5]), out)
        assert out[0] == pytest.approx(-2.0)

        trans.joint_to_actuator_position(np.array([1.5]), out)
        assert out[0] == pytest.approx(-2.0)

    def test_zero_reduction(self):
        """Test a zero reduction is rejected."""
        with pytest.raises(TransmissionConfigError):
            SimpleTransmission(0.0)

    def test_parameters(self):
        """Test parameter accessors."""
        trans = SimpleTransmission(3.0, -0.25)
        assert trans.reduction == 3.0
        assert trans.joint_offset == -0.25
        assert trans.num_actuators() == trans.num_joints() == 1


# =============================================================================
# Differential Transmission Tests
# =============================================================================


class TestDifferentialTransmission:
    """Tests for DifferentialTransmission."""

    def test_worked_values(self):
        """Test effort and velocity maps on a symmetric differential."""
        trans = DifferentialTransmission([2.0, 2.0], [1.0, 1.0])

        joint_eff = np.zeros(2)
        trans.actuator_to_joint_effort(np.array([3.0, 1.0]), joint_eff)
        assert np.allclose(joint_eff, [8.0, 4.0])

        joint_vel = np.zeros(2)
        trans.actuator_to_joint_velocity(np.array([4.0, 2.0]), joint_vel)
        assert np.allclose(joint_vel, [1.5, 0.5])

    def test_position_offset(self):
        """Test positions are the velocity map plus the joint offset."""
        trans = DifferentialTransmission([2.0, 2.0], [1.0, 1.0], [0.1, -0.2])

        joint_pos = np.zeros(2)
        trans.actuator_to_joint_position(np.array([4.0, 2.0]), joint_pos)
        assert np.allclose(joint_pos, [1.6, 0.3])

        actuator_pos = np.zeros(2)
        trans.joint_to_actuator_position(joint_pos, actuator_pos)
        assert np.allclose(actuator_pos, [4.0, 2.0])

    @pytest.mark.parametrize("quantity", ["effort", "velocity", "position"])
    def test_round_trip(self, rng, quantity):
        """Test joint_to_actuator inverts actuator_to_joint."""
        for _ in range(50):
            trans = DifferentialTransmission(
                random_ratios(rng, 2), random_ratios(rng, 2), rng.uniform(-1.0, 1.0, 2)
            )
            actuator = rng.uniform(-10.0, 10.0, 2)

            _, back = round_trip(trans, quantity, actuator)
            assert np.allclose(back, actuator, rtol=1e-9, atol=1e-9)

    def test_power_conservation(self, rng):
        """Test actuator-side and joint-side power agree."""
        for _ in range(50):
            trans = DifferentialTransmission(random_ratios(rng, 2), random_ratios(rng, 2))
            act_eff = rng.uniform(-10.0, 10.0, 2)
            act_vel = rng.uniform(-10.0, 10.0, 2)

            jnt_eff = np.zeros(2)
            jnt_vel = np.zeros(2)
            trans.actuator_to_joint_effort(act_eff, jnt_eff)
            trans.actuator_to_joint_velocity(act_vel, jnt_vel)

            assert np.dot(act_eff, act_vel) == pytest.approx(np.dot(jnt_eff, jnt_vel), rel=1e-9, abs=1e-9)

    @pytest.mark.parametrize(
        "actuator_reduction,joint_reduction",
        [([0.0, 1.0], [1.0, 1.0]), ([1.0, 1.0], [1.0, 0.0])],
    )
    def test_zero_reduction(self, actuator_reduction, joint_reduction):
        """Test zero ratios on either side are rejected."""
        with pytest.raises(TransmissionConfigError, match="cannot be zero"):
            DifferentialTransmission(actuator_reduction, joint_reduction)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"actuator_reduction": [1.0], "joint_reduction": [1.0, 1.0]},
            {"actuator_reduction": [1.0, 1.0], "joint_reduction": [1.0, 1.0, 1.0]},
            {"actuator_reduction": [1.0, 1.0], "joint_reduction": [1.0, 1.0], "joint_offset": [0.0]},
        ],
    )
    def test_wrong_parameter_size(self, kwargs):
        """Test parameter vectors must have size two."""
        with pytest.raises(TransmissionConfigError):
            DifferentialTransmission(**kwargs)

    def test_parameter_copies(self):
        """Test parameter accessors cannot mutate the transmission."""
        trans = DifferentialTransmission([2.0, 2.0], [1.0, 1.0])
        trans.actuator_reduction[0] = 100.0

        assert np.allclose(trans.actuator_reduction, [2.0, 2.0])


# =============================================================================
# Four-Bar Linkage Transmission Tests
# =============================================================================


class TestFourBarLinkageTransmission:
    """Tests for FourBarLinkageTransmission."""

    def test_worked_values(self):
        """Test the coupled state-direction maps."""
        trans = FourBarLinkageTransmission([2.0, 4.0], [1.0, 0.5])

        joint_eff = np.zeros(2)
        trans.actuator_to_joint_effort(np.array([1.0, 1.0]), joint_eff)
        # j1 = 1 * 2 * 1, j2 = 0.5 * (4 * 1 - 2)
        assert np.allclose(joint_eff, [2.0, 1.0])

        joint_vel = np.zeros(2)
        trans.actuator_to_joint_velocity(np.array([2.0, 4.0]), joint_vel)
        # j1 = 2 / (1 * 2), j2 = (4 / 4 - 1) / 0.5
        assert np.allclose(joint_vel, [1.0, 0.0])

    def test_second_actuator_does_not_move_first_joint(self):
        """Test the first joint depends on the first actuator only."""
        trans = FourBarLinkageTransmission([3.0, 5.0], [2.0, 7.0])

        joint_vel = np.zeros(2)
        trans.actuator_to_joint_velocity(np.array([0.0, 10.0]), joint_vel)

        assert joint_vel[0] == 0.0
        assert joint_vel[1] != 0.0

    @pytest.mark.parametrize("quantity", ["effort", "velocity", "position"])
    def test_first_actuator_counter_rotates_second_joint(self, quantity):
        """Test the linkage couples the first joint into the second with opposite sign."""
        trans = FourBarLinkageTransmission([1.0, 1.0], [1.0, 1.0])

        joint = np.zeros(2)
        getattr(trans, f"actuator_to_joint_{quantity}")(np.array([1.0, 0.0]), joint)
        assert np.allclose(joint, [1.0, -1.0])

        # Holding the second joint still needs the second actuator to follow the first
        actuator = np.zeros(2)
        getattr(trans, f"joint_to_actuator_{quantity}")(np.array([1.0, 0.0]), actuator)
        assert np.allclose(actuator, [1.0, 1.0])

    @pytest.mark.parametrize("quantity", ["effort", "velocity", "position"])
    def test_round_trip(self, rng, quantity):
        """Test joint_to_actuator inverts actuator_to_joint."""
        for _ in range(50):
            trans = FourBarLinkageTransmission(
                random_ratios(rng, 2), random_ratios(rng, 2), rng.uniform(-1.0, 1.0, 2)
            )
            actuator = rng.uniform(-10.0, 10.0, 2)

            _, back = round_trip(trans, quantity, actuator)
            assert np.allclose(back, actuator, rtol=1e-9, atol=1e-9)

    def test_zero_reduction(self):
        """Test zero ratios are rejected."""
        with pytest.raises(TransmissionConfigError):
            FourBarLinkageTransmission([1.0, 0.0], [1.0, 1.0])


# =============================================================================
# Shared Contract Tests
# =============================================================================


def all_transmissions():
    return [
        SimpleTransmission(-7.5, 0.3),
        DifferentialTransmission([5.0, -3.0], [2.0, 0.5], [0.1, -0.4]),
        FourBarLinkageTransmission([5.0, -3.0], [2.0, 0.5], [0.1, -0.4]),
    ]


class TestTransmissionContract:
    """Behaviour shared by every transmission."""

    @pytest.mark.parametrize("trans", all_transmissions(), ids=lambda t: type(t).__name__)
    @pytest.mark.parametrize("conversion", CONVERSIONS)
    def test_wrong_arity(self, trans, conversion):
        """Test every conversion rejects vectors of the wrong length."""
        n_act, n_jnt = trans.num_actuators(), trans.num_joints()
        if conversion.startswith("actuator"):
            good_in, good_out = np.zeros(n_act), np.zeros(n_jnt)
        else:
            good_in, good_out = np.zeros(n_jnt), np.zeros(n_act)

        with pytest.raises(ContractViolation):
            getattr(trans, conversion)(np.zeros(len(good_in) + 1), good_out)
        with pytest.raises(ContractViolation):
            getattr(trans, conversion)(good_in, np.zeros(len(good_out) + 1))

        # The output is left untouched
        assert np.all(good_out == 0.0)

    def test_contract_violation_is_not_recoverable_error(self):
        """Test arity errors are not configuration errors."""
        assert issubclass(ContractViolation, AssertionError)
        assert not issubclass(ContractViolation, TransmissionException)
        assert issubclass(TransmissionConfigError, ValueError)

    @pytest.mark.parametrize("trans", all_transmissions(), ids=lambda t: type(t).__name__)
    @pytest.mark.parametrize("conversion", CONVERSIONS)
    def test_in_place(self, rng, trans, conversion):
        """Test conversions may write into their own input."""
        size = trans.num_actuators()
        values = rng.uniform(-5.0, 5.0, size)

        expected = np.zeros(size)
        getattr(trans, conversion)(values.copy(), expected)

        aliased = values.copy()
        getattr(trans, conversion)(aliased, aliased)

        assert np.allclose(aliased, expected)

    @pytest.mark.parametrize("trans", all_transmissions(), ids=lambda t: type(t).__name__)
    def test_ref_vectors(self, trans):
        """Test conversions operate on storage references."""
        n = trans.num_actuators()
        actuators = StorageArena([f"a{i}" for i in range(n)])
        joints = StorageArena([f"j{i}" for i in range(n)])
        actuators.buffer(Quantity.POSITION)[:] = np.arange(1.0, n + 1.0)

        trans.actuator_to_joint_position(
            actuators.refs(Quantity.POSITION), joints.refs(Quantity.POSITION)
        )
        expected = np.zeros(n)
        trans.actuator_to_joint_position(np.arange(1.0, n + 1.0), expected)

        assert np.allclose(joints.buffer(Quantity.POSITION), expected)

        trans.joint_to_actuator_position(
            joints.refs(Quantity.POSITION), actuators.refs(Quantity.POSITION_COMMAND)
        )
        assert np.allclose(actuators.buffer(Quantity.POSITION_COMMAND), np.arange(1.0, n + 1.0))

    def test_joint_position_input_not_modified(self):
        """Test removing the offset does not touch the caller's joint vector."""
        trans = DifferentialTransmission([2.0, 2.0], [1.0, 1.0], [0.5, 0.5])
        joint_pos = np.array([1.0, 2.0])

        trans.joint_to_actuator_position(joint_pos, np.zeros(2))

        assert np.allclose(joint_pos, [1.0, 2.0])
