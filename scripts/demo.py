#!/usr/bin/env python3
"""
Transmission Layer Demo
=======================

Runs a few hundred control cycles of a simulated arm with a simple elbow
and a differential wrist:

1. Simulated driver publishes actuator state
2. Transmissions map actuator state to joint state
3. A proportional joint-space controller computes position commands
4. Transmissions map joint commands back to actuator commands
5. Driver latches actuator commands

Also shows claim exclusivity: a second controller asking for a joint that
is already owned is refused.

Usage:
    python scripts/demo.py
    python scripts/demo.py --config config/transmissions.yaml
    python scripts/demo.py --cycles 500 --verbose

Author: Robot HW Interfaces Team
License: MIT
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import numpy as np

from src.hardware_interface import (
    JointHandle,
    JointStateHandle,
    JointStateInterface,
    PositionActuatorInterface,
    PositionJointInterface,
    Quantity,
    ResourceAlreadyClaimed,
    SimulatedActuatorDriver,
    StorageArena,
)
from src.transmission_interface import (
    ActuatorToJointStateHandle,
    ActuatorToJointStateInterface,
    JointToActuatorPositionHandle,
    JointToActuatorPositionInterface,
    TransmissionConfig,
    build_transmission,
    load_transmission_configs,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

DEFAULT_CONFIG = project_root / "config" / "transmissions.yaml"


def run_demo(configs: List[TransmissionConfig], cycles: int, dt: float) -> None:
    """
    Run the control loop demonstration.

    Args:
        configs: Transmission configurations
        cycles: Number of control cycles
        dt: Control period (s)
    """
    actuator_names = [name for c in configs for name in c.actuators]
    joint_names = [name for c in configs for name in c.joints]

    print("\n" + "=" * 60)
    print("TRANSMISSION LAYER DEMO")
    print("=" * 60)
    print(f"   Actuators: {actuator_names}")
    print(f"   Joints:    {joint_names}")

    driver = SimulatedActuatorDriver(actuator_names)
    joints = StorageArena(joint_names)

    # Joint-space interfaces over assembly-owned storage
    joint_state_iface = JointStateInterface()
    joint_position_iface = PositionJointInterface()
    for name in joint_names:
        state = JointStateHandle(
            name,
            joints.ref(Quantity.POSITION, name),
            joints.ref(Quantity.VELOCITY, name),
            joints.ref(Quantity.EFFORT, name),
        )
        joint_state_iface.register_handle(state)
        joint_position_iface.register_handle(
            JointHandle(state, joints.ref(Quantity.POSITION_COMMAND, name))
        )

    # Transmission handles
    state_map = ActuatorToJointStateInterface()
    command_map = JointToActuatorPositionInterface()
    for config in configs:
        transmission = build_transmission(config)
        act_state, jnt_state = config.bind(driver.arena, joints)
        act_cmd, jnt_cmd = config.bind(driver.arena, joints, commands=True)
        state_map.register_handle(
            ActuatorToJointStateHandle(config.name, transmission, act_state, jnt_state)
        )
        command_map.register_handle(
            JointToActuatorPositionHandle(config.name, transmission, act_cmd, jnt_cmd)
        )

    targets = np.linspace(0.2, 0.6, len(joint_names))
    gain = 0.1

    # Controller activation: claim every joint for the duration of the run
    claims = []
    claims_held = []
    try:
        for name in joint_names:
            claims.append(joint_position_iface.claim(name))

        try:
            joint_position_iface.claim(joint_names[0])
        except ResourceAlreadyClaimed as e:
            print(f"\n   Second controller refused: {e}")

        # The driver-side actuator commands are owned by the transmission layer
        actuator_iface = driver.interfaces.get(PositionActuatorInterface)
        for name in actuator_names:
            claims_held.append(actuator_iface.claim(name))

        driver.enable()
        state_map.propagate()
        for claim in claims:
            claim.handle.set_command(claim.handle.get_position())

        print(f"\n   Running {cycles} cycles at {1.0 / dt:.0f} Hz...")
        print("-" * 60)
        for cycle in range(cycles):
            driver.read(dt)
            state_map.propagate()

            for claim, target in zip(claims, targets):
                handle = claim.handle
                error = target - handle.get_position()
                handle.set_command(handle.get_position() + gain * error)

            command_map.propagate()
            driver.write()

            if cycle % max(1, cycles // 5) == 0:
                positions = joint_state_iface.get_names()
                values = [joint_state_iface.get_handle(n).get_position() for n in positions]
                print(f"   Cycle {cycle:4d} | joints: {np.round(values, 3).tolist()}")
    finally:
        for claim in claims + claims_held:
            claim.release()
        driver.close()
        joint_position_iface.close()

    final = [joint_state_iface.get_handle(n).get_position() for n in joint_names]
    print("-" * 60)
    print(f"   Targets: {np.round(targets, 3).tolist()}")
    print(f"   Reached: {np.round(final, 3).tolist()}")
    logger.info("Demo complete")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Transmission Layer Demonstration")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=DEFAULT_CONFIG,
        help=f"Transmission YAML file (default: {DEFAULT_CONFIG.relative_to(project_root)})",
    )
    parser.add_argument(
        "--cycles", "-n", type=int, default=300, help="Number of control cycles (default: 300)"
    )
    parser.add_argument(
        "--rate", type=float, default=100.0, help="Control rate in Hz (default: 100)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    configs = load_transmission_configs(args.config)
    run_demo(configs, args.cycles, 1.0 / args.rate)


if __name__ == "__main__":
    main()
