"""
Transmission Configuration
==========================

Static description of a robot's transmissions, loadable from YAML.

File format:

    transmissions:
      - name: wrist
        type: differential
        actuators: [wrist_motor_left, wrist_motor_right]
        joints: [wrist_pitch, wrist_roll]
        actuator_reduction: [50.0, -50.0]
        joint_reduction: [1.0, 1.0]
        joint_offset: [0.0, 0.0]
      - name: elbow
        type: simple
        actuators: [elbow_motor]
        joints: [elbow]
        actuator_reduction: [100.0]

Author: Robot HW Interfaces Team
License: MIT
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple, Union

import yaml

from ..hardware_interface.storage import Quantity, StorageArena
from .differential_transmission import DifferentialTransmission
from .exceptions import TransmissionConfigError
from .four_bar_linkage_transmission import FourBarLinkageTransmission
from .handles import ActuatorData, JointData
from .simple_transmission import SimpleTransmission
from .transmission import Transmission

logger = logging.getLogger(__name__)


class TransmissionType(Enum):
    """Supported transmission mechanisms."""
    SIMPLE = "simple"
    DIFFERENTIAL = "differential"
    FOUR_BAR_LINKAGE = "four_bar_linkage"


# (actuators, joints) per mechanism
_ARITY = {
    TransmissionType.SIMPLE: (1, 1),
    TransmissionType.DIFFERENTIAL: (2, 2),
    TransmissionType.FOUR_BAR_LINKAGE: (2, 2),
}

_STATE_QUANTITIES = {
    "position": Quantity.POSITION,
    "velocity": Quantity.VELOCITY,
    "effort": Quantity.EFFORT,
}

_COMMAND_QUANTITIES = {
    "position": Quantity.POSITION_COMMAND,
    "velocity": Quantity.VELOCITY_COMMAND,
    "effort": Quantity.EFFORT_COMMAND,
}


@dataclass
class TransmissionConfig:
    """
    Configuration of one transmission.

    Attributes:
        name: Transmission identifier
        type: Mechanism
        actuators: Actuator names, in transmission order
        joints: Joint names, in transmission order
        actuator_reduction: One ratio per actuator
        joint_reduction: One ratio per joint (empty for SIMPLE)
        joint_offset: One offset per joint (defaults to zeros)

    Validation:
        - actuator/joint counts must match the mechanism
        - reduction and offset sizes must match those counts
        - zero ratios are rejected when the transmission is built
    """
    name: str
    type: TransmissionType
    actuators: List[str]
    joints: List[str]
    actuator_reduction: List[float]
    joint_reduction: List[float] = field(default_factory=list)
    joint_offset: List[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.name:
            raise TransmissionConfigError("Transmission name must not be empty")

        if not isinstance(self.type, TransmissionType):
            try:
                self.type = TransmissionType(str(self.type).lower())
            except ValueError:
                raise TransmissionConfigError(
                    f"Unknown transmission type '{self.type}' for '{self.name}'; "
                    f"expected one of {[t.value for t in TransmissionType]}"
                ) from None

        n_act, n_jnt = _ARITY[self.type]
        self.actuators = list(self.actuators)
        self.joints = list(self.joints)
        self.actuator_reduction = self._floats("actuator_reduction", self.actuator_reduction)
        self.joint_reduction = self._floats("joint_reduction", self.joint_reduction)
        self.joint_offset = self._floats("joint_offset", self.joint_offset) or [0.0] * n_jnt

        self._expect_size("actuators", self.actuators, n_act)
        self._expect_size("joints", self.joints, n_jnt)
        self._expect_size("actuator_reduction", self.actuator_reduction, n_act)
        self._expect_size("joint_offset", self.joint_offset, n_jnt)
        if self.type == TransmissionType.SIMPLE:
            if self.joint_reduction:
                raise TransmissionConfigError(
                    f"Simple transmission '{self.name}' takes no joint_reduction"
                )
        else:
            self._expect_size("joint_reduction", self.joint_reduction, n_jnt)

    def _floats(self, label: str, values: Any) -> List[float]:
        if values is None:
            return []
        try:
            return [float(v) for v in values]
        except (TypeError, ValueError) as e:
            raise TransmissionConfigError(
                f"{label} of transmission '{self.name}' must be a list of numbers, got {values!r}"
            ) from e

    def _expect_size(self, label: str, values: Sequence[Any], size: int) -> None:
        if len(values) != size:
            raise TransmissionConfigError(
                f"{self.type.value} transmission '{self.name}' needs {size} "
                f"{label}, got {len(values)}"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TransmissionConfig":
        """
        Build a configuration from a plain mapping.

        Raises:
            TransmissionConfigError: On a non-mapping entry, or unknown or
                missing keys
        """
        if not isinstance(data, dict):
            raise TransmissionConfigError(
                f"Transmission config entry must be a mapping, got {data!r}"
            )
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise TransmissionConfigError(
                f"Unknown transmission config keys: {sorted(unknown)}"
            )
        try:
            return cls(**data)
        except TypeError as e:
            raise TransmissionConfigError(f"Incomplete transmission config: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "name": self.name,
            "type": self.type.value,
            "actuators": list(self.actuators),
            "joints": list(self.joints),
            "actuator_reduction": list(self.actuator_reduction),
            "joint_offset": list(self.joint_offset),
        }
        if self.joint_reduction:
            data["joint_reduction"] = list(self.joint_reduction)
        return data

    def bind(
        self,
        actuator_arena: StorageArena,
        joint_arena: StorageArena,
        commands: bool = False
    ) -> Tuple[ActuatorData, JointData]:
        """
        Collect references to this transmission's slots in two arenas.

        Each of position, velocity and effort is bound when the arena
        allocates it. With ``commands`` set, the command buffers are bound
        instead of the state buffers.

        Raises:
            KeyError: If an actuator or joint name is missing from its arena
        """
        quantities = _COMMAND_QUANTITIES if commands else _STATE_QUANTITIES

        def collect(arena: StorageArena, names: List[str], data_cls: type) -> Any:
            return data_cls(**{
                key: arena.refs(q, names)
                for key, q in quantities.items()
                if arena.has(q)
            })

        return (
            collect(actuator_arena, self.actuators, ActuatorData),
            collect(joint_arena, self.joints, JointData),
        )


# =============================================================================
# Factory
# =============================================================================

def build_transmission(config: TransmissionConfig) -> Transmission:
    """
    Instantiate the transmission described by ``config``.

    Raises:
        TransmissionConfigError: If the parameters are invalid
    """
    if config.type == TransmissionType.SIMPLE:
        return SimpleTransmission(config.actuator_reduction[0], config.joint_offset[0])
    if config.type == TransmissionType.DIFFERENTIAL:
        return DifferentialTransmission(
            config.actuator_reduction, config.joint_reduction, config.joint_offset
        )
    return FourBarLinkageTransmission(
        config.actuator_reduction, config.joint_reduction, config.joint_offset
    )


# =============================================================================
# YAML I/O
# =============================================================================

def load_transmission_configs(path: Union[str, Path]) -> List[TransmissionConfig]:
    """
    Load transmission configurations from a YAML file.

    Args:
        path: Path to YAML file with a top-level ``transmissions`` list

    Returns:
        Configurations in file order

    Raises:
        TransmissionConfigError: On malformed content or duplicate names
    """
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    entries = data.get("transmissions") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise TransmissionConfigError(f"{path}: expected a top-level 'transmissions' list")

    configs = [TransmissionConfig.from_dict(entry) for entry in entries]

    names = [c.name for c in configs]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise TransmissionConfigError(f"{path}: duplicate transmission names {duplicates}")

    logger.info(f"Loaded {len(configs)} transmission configs from {path}")
    return configs


def save_transmission_configs(configs: Sequence[TransmissionConfig], path: Union[str, Path]) -> None:
    """Save transmission configurations to a YAML file."""
    data = {"transmissions": [c.to_dict() for c in configs]}
    with open(path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
